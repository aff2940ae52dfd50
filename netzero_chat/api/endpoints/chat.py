"""
Chat endpoints.

Welcome message, message echo and chat health, all rate limited per IP.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from netzero_chat.api.dependencies.auth import optional_auth
from netzero_chat.api.dependencies.rate_limit import chat_rate_limit
from netzero_chat.api.models import (
    ChatMessageRequest,
    ErrorResponse,
    Identity,
    ResponseEnvelope,
)
from netzero_chat.api.responses import envelope_response
from netzero_chat.controllers.chat_controller import ChatController

# ============================================================================
# Dependency Injection
# ============================================================================


def get_chat_controller() -> ChatController:
    """Dependency injection for ChatController."""
    return ChatController()


# ============================================================================
# Router
# ============================================================================

router = APIRouter(dependencies=[Depends(chat_rate_limit)])

RESPONSES = {
    200: {"model": ResponseEnvelope, "description": "Successful response"},
    400: {"model": ErrorResponse, "description": "Invalid request"},
    429: {"model": ErrorResponse, "description": "Too many requests"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


# ============================================================================
# Endpoints
# ============================================================================


# Registered before /{chat_id} so "health" is not taken as a chat id
@router.get("/health", status_code=status.HTTP_200_OK, responses=RESPONSES)
async def chat_health(
    controller: ChatController = Depends(get_chat_controller),
) -> JSONResponse:
    """Health check for the chat service (no auth)."""
    return envelope_response(controller.get_health_check())


@router.get("/{chat_id}", status_code=status.HTTP_200_OK, responses=RESPONSES)
async def get_chat_welcome(
    chat_id: str,
    identity: Optional[Identity] = Depends(optional_auth),
    controller: ChatController = Depends(get_chat_controller),
) -> JSONResponse:
    """Welcome message for a chat. Authentication is optional."""
    return envelope_response(controller.get_chat_welcome(chat_id, identity))


@router.post(
    "/{chat_id}/message", status_code=status.HTTP_200_OK, responses=RESPONSES
)
async def send_message(
    chat_id: str,
    request: ChatMessageRequest,
    identity: Optional[Identity] = Depends(optional_auth),
    controller: ChatController = Depends(get_chat_controller),
) -> JSONResponse:
    """
    Post a message to a chat.

    The bot answers with the chat's welcome message whatever the message says.
    Authentication is optional.
    """
    return envelope_response(
        controller.send_message(chat_id, request.message, identity)
    )
