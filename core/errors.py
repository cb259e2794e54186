"""
API error taxonomy and the exception handlers that turn errors into
`{"error": <message>}` JSON responses.

Services raise the APIError subclasses below; nothing else in the app
builds error responses by hand.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.logger import get_logger, sanitize_log_data

logger = get_logger(__name__)


class APIError(Exception):
    """Base class for errors that map to an HTTP status and a message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(APIError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    message = first.get("msg", "Invalid request")
    # pydantic prefixes messages raised from field validators
    message = message.removeprefix("Value error, ")

    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if first.get("type") == "missing" and location:
        return f"Missing required field: {location[-1]}"
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    if location and first.get("type") != "value_error":
        return f"{location[-1]}: {message}"
    return message


async def api_error_handler(request: Request, exc: APIError):
    if exc.status_code >= 500:
        logger.error(
            f"API error: {exc.message}",
            extra={"path": request.url.path, "method": request.method, "status_code": exc.status_code}
        )
    else:
        logger.debug(
            f"API error: {exc.message}",
            extra={"path": request.url.path, "status_code": exc.status_code}
        )
    return error_response(exc.message, exc.status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    response = error_response(str(exc.detail), exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = exc.body if isinstance(exc.body, dict) else {}
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "body": sanitize_log_data(body)}
    )
    return error_response(_validation_message(exc), status.HTTP_400_BAD_REQUEST)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(
        f"Integrity error: {exc.orig}",
        extra={"path": request.url.path, "method": request.method}
    )
    return error_response("Database constraint violated", status.HTTP_400_BAD_REQUEST)


async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Last resort for anything the other handlers do not claim.

    Logs the full stack trace and hides internals from the client.
    """
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__
        },
        exc_info=exc
    )
    return error_response("Something went wrong on our end", status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
