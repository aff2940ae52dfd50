"""
Error handling middleware.
Centralizes error handling and envelope formatting for failed requests.
"""
import json
import logging
import traceback
from typing import Any, Callable, Optional, Tuple

from authlib.jose.errors import ExpiredTokenError, JoseError
from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from netzero_chat.api.exceptions import InvalidIdError
from netzero_chat.api.responses import error_response

logger = logging.getLogger(__name__)

# MySQL server error codes
ER_DUP_ENTRY = 1062
ER_NO_REFERENCED_ROW_2 = 1452


def _mysql_error_code(error: IntegrityError) -> Optional[int]:
    args = getattr(error.orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def classify_exception(error: Exception) -> Tuple[int, str]:
    """
    Map an upstream error to an HTTP status and a user-facing message.

    Anything unrecognised is a 500 with a generic message.
    """
    if isinstance(error, ValidationError):
        return status.HTTP_400_BAD_REQUEST, "Validation Error"
    if isinstance(error, InvalidIdError):
        return status.HTTP_400_BAD_REQUEST, "Invalid ID format"
    if isinstance(error, ExpiredTokenError):
        return status.HTTP_401_UNAUTHORIZED, "Token expired"
    if isinstance(error, JoseError):
        return status.HTTP_401_UNAUTHORIZED, "Invalid token"
    if isinstance(error, IntegrityError):
        code = _mysql_error_code(error)
        if code == ER_DUP_ENTRY:
            return status.HTTP_409_CONFLICT, "Duplicate entry"
        if code == ER_NO_REFERENCED_ROW_2:
            return status.HTTP_400_BAD_REQUEST, "Referenced record does not exist"
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"


def _request_body(request: Request) -> Any:
    """Body cached by the request logger, if it read one."""
    body_bytes = getattr(request.state, "body", None)
    if not body_bytes:
        return None
    try:
        return json.loads(body_bytes.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None


def _is_production() -> bool:
    from netzero_chat.config.settings import get_settings

    try:
        return get_settings().is_production
    except ValidationError:
        return True  # Default to production mode for safety


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for centralized error handling and logging."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            status_code, message = classify_exception(e)
            tb_str = traceback.format_exc()
            is_production = _is_production()

            log = logger.warning if status_code < 500 else logger.error
            log(
                "Chat Server Error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "request_body": _request_body(request),
                    "traceback": tb_str if not is_production else None,
                },
                exc_info=status_code >= 500,
            )

            # Don't expose internal errors in production
            error = None
            if not is_production:
                error = {"name": type(e).__name__, "message": str(e), "stack": tb_str}

            return error_response(status_code, message, error=error)


# ============================================================================
# Exception handlers for errors FastAPI resolves itself
# ============================================================================


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """Request body / parameter validation failures become 400 envelopes."""
    errors = jsonable_encoder(exc.errors())
    logger.warning(
        "Validation error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "errors": errors,
            "request_body": _request_body(request),
        },
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation Error",
        error={"message": "Invalid input data", "details": errors},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """HTTP errors become envelopes; unmatched routes name the method and path."""
    # Raised by the router itself with the bare status phrase as detail
    if exc.detail in ("Not Found", "Method Not Allowed"):
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        return error_response(
            status.HTTP_404_NOT_FOUND,
            f"Chat API endpoint not found: {request.method} {target}",
        )

    return error_response(
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
