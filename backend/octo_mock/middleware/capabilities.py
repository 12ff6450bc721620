# reads Octo-Capabilities into request.state.capabilities, echoes the accepted set

from fastapi import Request

from ..services.capabilities import parse_capabilities

CAPABILITIES_HEADER = "Octo-Capabilities"


async def capabilities_middleware(request: Request, call_next):
    capabilities = parse_capabilities(request.headers.get(CAPABILITIES_HEADER))
    request.state.capabilities = capabilities

    response = await call_next(request)

    response.headers[CAPABILITIES_HEADER] = ", ".join(c.value for c in capabilities)
    return response
