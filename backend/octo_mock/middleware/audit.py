# writes: method / path / status; request id; capabilities; duration
# does NOT block the request; does NOT touch the database

import time
from fastapi import Request
import json
import logging

logger = logging.getLogger("octo_mock.audit")


async def audit_middleware(request: Request, call_next):
    start_ts = time.time()

    response = await call_next(request)

    duration_ms = int((time.time() - start_ts) * 1000)

    record = {
        "ts": int(start_ts),
        "request_id": getattr(request.state, "request_id", None),
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
        "capabilities": [c.value for c in getattr(request.state, "capabilities", [])],
        "ip": request.headers.get("X-Real-IP") or (request.client.host if request.client else None),
        "duration_ms": duration_ms,
    }

    logger.info(json.dumps(record, ensure_ascii=False))

    return response
