"""
Chat controller.

The bot is a placeholder: every reply is the chat's welcome string, and the
user's message is echoed back without being interpreted.
"""
import logging
from typing import Optional

from netzero_chat.api.models.chat import (
    ChatHealthResponse,
    ChatMessageResponse,
    ChatWelcomeResponse,
    Identity,
)
from netzero_chat.api.models.envelope import ApiResult
from netzero_chat.config.settings import get_settings
from netzero_chat.utils.request_utils import process_uptime, utc_timestamp

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"
WELCOME_TEMPLATE = "Welcome to {chat_id}! How can I help you today?"


def build_welcome_message(chat_id: str) -> str:
    return WELCOME_TEMPLATE.format(chat_id=chat_id)


def user_id_of(identity: Optional[Identity]) -> str:
    if identity is None or not identity.user_id:
        return ANONYMOUS_USER
    return identity.user_id


class ChatController:
    """Controller for chat operations."""

    def get_chat_welcome(
        self, chat_id: str, identity: Optional[Identity] = None
    ) -> ApiResult:
        """
        Build the welcome message for a chat.

        Args:
            chat_id: Opaque chat identifier from the path
            identity: Caller identity, if a valid token was supplied

        Returns:
            ApiResult with a ChatWelcomeResponse, or a 500 failure
        """
        try:
            user_id = user_id_of(identity)
            logger.info(f"Chat request - User: {user_id}, Chat ID: {chat_id}")

            return ApiResult.ok(
                ChatWelcomeResponse(
                    chat_id=chat_id,
                    user_id=user_id,
                    message=build_welcome_message(chat_id),
                ),
                message="Welcome message generated successfully",
            )
        except Exception as e:
            logger.error(f"Error in chat welcome: {e}", exc_info=True)
            return ApiResult.failure("Failed to generate welcome message", str(e))

    def send_message(
        self, chat_id: str, message: str, identity: Optional[Identity] = None
    ) -> ApiResult:
        """
        Accept a user message and answer with the chat's welcome string.

        The reply depends only on ``chat_id``; ``message`` is echoed as-is.
        """
        try:
            user_id = user_id_of(identity)
            logger.info(f"Message from User {user_id} in Chat {chat_id}: {message}")

            return ApiResult.ok(
                ChatMessageResponse(
                    chat_id=chat_id,
                    user_id=user_id,
                    user_message=message,
                    bot_response=build_welcome_message(chat_id),
                ),
                message="Message received and welcome response sent",
            )
        except Exception as e:
            logger.error(f"Error sending chat message: {e}", exc_info=True)
            return ApiResult.failure("Failed to send message", str(e))

    def get_health_check(self) -> ApiResult:
        """Static service metadata; no dependency checks."""
        try:
            settings = get_settings()
            return ApiResult.ok(
                ChatHealthResponse(
                    service=settings.service_name,
                    status="healthy",
                    version=settings.version,
                    uptime=process_uptime(),
                    timestamp=utc_timestamp(),
                ),
                message="Chat service is healthy",
            )
        except Exception as e:
            logger.error(f"Error in health check: {e}", exc_info=True)
            return ApiResult.failure("Health check failed", str(e))
