"""
Request and response models for chat endpoints.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_MESSAGE_LENGTH = 1000


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, as the SPA expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Identity(BaseModel):
    """Caller identity taken from a verified bearer token."""

    user_id: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class ChatMessageRequest(BaseModel):
    """Payload for posting a chat message.

    - message: Free text, 1 to 1000 characters. It is echoed back, never interpreted.
    """
    message: str = Field(
        ...,
        min_length=1,
        max_length=MAX_MESSAGE_LENGTH,
        description="Message text",
        examples=["hello"],
    )


class ChatWelcomeResponse(CamelModel):
    """Welcome message for a chat."""

    chat_id: str
    user_id: str
    message: str


class ChatMessageResponse(CamelModel):
    """Echo of a posted message together with the bot's reply."""

    chat_id: str
    user_id: str
    user_message: str
    bot_response: str


class ChatHealthResponse(CamelModel):
    """Static chat service metadata."""

    service: str
    status: str
    version: str
    uptime: float
    timestamp: str
