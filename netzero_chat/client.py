"""
HTTP client for the NetZero chat server.

Covers the same calls the web front-end makes: welcome message, send
message and health check. Every call returns the server's envelope as an
ApiResponse, or raises ApiError.
"""
import logging
import os
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_CHAT_SERVER_URL = "http://localhost:3004/api/v1/chat"


def get_chat_server_url() -> str:
    """Chat API base URL, overridable with ``CHAT_SERVER_URL``."""
    return os.getenv("CHAT_SERVER_URL") or DEFAULT_CHAT_SERVER_URL


class ApiResponse(BaseModel):
    """Unwrapped response envelope."""

    data: Optional[Any] = None
    success: bool
    message: Optional[str] = None


class ApiError(Exception):
    """Raised when a chat server call fails."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ChatClient:
    """
    Client for the chat API.

    Example:
        with ChatClient(token=jwt_token) as chat:
            reply = chat.send_message("shop42", "hello")
            print(reply.data["botResponse"])
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 10.0,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            base_url: Chat API base URL (defaults to ``get_chat_server_url()``)
            token: Optional bearer token sent with every request
            timeout: Request timeout in seconds
            http_client: Pre-configured client whose base URL points at the chat API
        """
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=base_url or get_chat_server_url(), timeout=timeout
        )
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}

    def __enter__(self) -> "ChatClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def get_chat_welcome(self, chat_id: str) -> ApiResponse:
        response = self._request(
            "GET", f"/{quote(chat_id, safe='')}", "Failed to get chat welcome message"
        )
        logger.info(f"Got welcome message for chat: {chat_id}")
        return response

    def send_message(self, chat_id: str, message: str) -> ApiResponse:
        response = self._request(
            "POST",
            f"/{quote(chat_id, safe='')}/message",
            "Failed to send message",
            json={"message": message},
        )
        logger.info(f"Sent message to chat: {chat_id}")
        return response

    def check_chat_health(self) -> ApiResponse:
        return self._request("GET", "/health", "Chat server is not available")

    def _request(
        self, method: str, path: str, failure_message: str, **kwargs
    ) -> ApiResponse:
        try:
            response = self._client.request(
                method, path, headers=self._headers, **kwargs
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{failure_message}: HTTP {e.response.status_code}")
            raise ApiError(
                failure_message,
                e.response.status_code,
                {"original_error": _response_content(e.response)},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{failure_message}: {e}")
            raise ApiError(failure_message, 500, {"original_error": str(e)}) from e

        return ApiResponse(
            data=body.get("data"),
            success=body.get("success", False),
            message=body.get("message"),
        )


def _response_content(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
