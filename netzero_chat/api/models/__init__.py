from .chat import (
    ChatHealthResponse,
    ChatMessageRequest,
    ChatMessageResponse,
    ChatWelcomeResponse,
    Identity,
)
from .envelope import ApiResult, ResponseEnvelope
from .error import ErrorResponse

__all__ = [
    "ApiResult",
    "ChatHealthResponse",
    "ChatMessageRequest",
    "ChatMessageResponse",
    "ChatWelcomeResponse",
    "ErrorResponse",
    "Identity",
    "ResponseEnvelope",
]
