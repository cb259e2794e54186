"""
Per-request context: a request ID for log correlation, and one log line
per response.

Non-OK responses (status >= 300) are logged at WARNING so redirects and
errors stand out in the console.
"""

import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from core.logging_config import request_id_var
from utils.logger import get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds the request ID to the current context, so every log record
    emitted while handling the request carries it, and logs the outcome.

    The ID comes from the client's X-Request-ID header when present,
    otherwise a fresh UUID. It is stored on request.state and echoed back
    in the response headers.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        token = request_id_var.set(request_id)

        start_time = time.time()
        try:
            response: Response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            log_response(request, response.status_code, (time.time() - start_time) * 1000)
            return response
        finally:
            request_id_var.reset(token)


def log_response(request: Request, status_code: int, duration_ms: float):
    client_ip = request.client.host if request.client else "unknown"
    extra = {
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 2),
        "client_ip": client_ip
    }

    if status_code >= 300:
        logger.warning(
            f"[NON-OK] {request.method} {request.url.path} - Status: {status_code}",
            extra=extra
        )
    else:
        logger.info(
            f'{client_ip} - "{request.method} {request.url.path}" {status_code}',
            extra=extra
        )


def get_request_id(request: Request) -> str:
    """Request ID stored by RequestContextMiddleware, or "no-request-id"."""
    return getattr(request.state, "request_id", "no-request-id")
