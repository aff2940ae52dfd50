"""
Request logging middleware.
Logs one JSON line per chat server request and response.
"""
import json
import logging
import time
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import ClientDisconnect

from netzero_chat.utils.request_utils import get_client_ip

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = {"password", "token", "secret", "api_key", "credit_card"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    def __init__(self, app, ignore_paths: tuple = ()):
        super().__init__(app)
        self.ignore_paths = ignore_paths or (
            "/docs",
            "/openapi.json",
            "/redoc",
            "/favicon.ico",
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.ignore_paths:
            return await call_next(request)

        start_time = time.time()
        client_ip = get_client_ip(request)

        request_log = {
            "type": "request",
            "service": "chat",
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": client_ip,
            "user_agent": request.headers.get("user-agent"),
            "timestamp": start_time,
        }

        user_id = self._extract_user_id(request)
        if user_id:
            request_log["user_id"] = user_id

        if request.method in ("POST", "PUT", "PATCH", "DELETE"):
            body = await self._get_request_body(request)
            if body:
                request_log["body"] = body

        logger.info(json.dumps(request_log, default=str))

        response = await call_next(request)

        process_time = time.time() - start_time

        response_log = {
            "type": "response",
            "service": "chat",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
            "client_ip": client_ip,
            "timestamp": time.time(),
        }
        if user_id:
            response_log["user_id"] = user_id

        if response.status_code >= 500:
            logger.error(json.dumps(response_log))
        elif response.status_code >= 400:
            logger.warning(json.dumps(response_log))
        else:
            logger.info(json.dumps(response_log))

        response.headers["X-Process-Time"] = str(process_time)

        return response

    def _extract_user_id(self, request: Request) -> Optional[str]:
        """User id from the bearer token, if it verifies."""
        # Import here to avoid circular imports
        from netzero_chat.api.dependencies.auth import resolve_request_identity

        identity = resolve_request_identity(request)
        return identity.user_id if identity else None

    async def _get_request_body(self, request: Request):
        """
        Read, cache and parse the request body.
        Returns None if the body is empty or not JSON.
        """
        try:
            body_bytes = await request.body()
        except ClientDisconnect:
            return None
        # Cached for the error handler, which cannot re-read the stream
        request.state.body = body_bytes

        if not body_bytes:
            return None

        try:
            body_data = json.loads(body_bytes.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            return None

        if isinstance(body_data, dict):
            return {
                k: "***REDACTED***" if k.lower() in SENSITIVE_FIELDS else v
                for k, v in body_data.items()
            }

        return body_data
