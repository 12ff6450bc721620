import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .database import engine, init_db
from .errors import ErrorCode, OctoError
from .middleware.audit import audit_middleware
from .middleware.capabilities import capabilities_middleware
from .middleware.request_id import request_id_middleware
from .routers import availability, bookings, products

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(engine)
    logger.info("Database ready")
    yield


app = FastAPI(title="OCTO Mock API", lifespan=lifespan)

# ===== Middleware order (last registered runs first) =====
app.middleware("http")(capabilities_middleware)
app.middleware("http")(audit_middleware)
app.middleware("http")(request_id_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["x-request-id", "Octo-Capabilities"],
)


# ===== Error mapping =====
@app.exception_handler(OctoError)
async def octo_error_handler(request: Request, exc: OctoError):
    return JSONResponse(status_code=exc.status_code, content=exc.body)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return JSONResponse(
        status_code=400,
        content={"error": ErrorCode.BAD_REQUEST.value, "errorMessage": "; ".join(messages)},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    code = HTTP_ERROR_CODES.get(exc.status_code, ErrorCode.BAD_REQUEST)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": code.value, "errorMessage": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "error": ErrorCode.INTERNAL_SERVER_ERROR.value,
            "errorMessage": "Internal server error",
        },
    )


# ===== Routes =====
@app.get("/ping")
def ping():
    return {"serverTime": datetime.now(timezone.utc).isoformat()}


app.include_router(products.router)
app.include_router(availability.router)
app.include_router(bookings.router)
