"""
Per-IP rate limiting for chat endpoints.
"""
import logging
from functools import lru_cache

from fastapi import Request

from netzero_chat.api.exceptions import RateLimitExceededException
from netzero_chat.config.settings import get_settings
from netzero_chat.utils.rate_limiter import RateLimiter
from netzero_chat.utils.request_utils import get_client_ip

logger = logging.getLogger(__name__)


@lru_cache()
def get_chat_rate_limiter() -> RateLimiter:
    """Process-wide limiter shared by every chat route."""
    settings = get_settings()
    return RateLimiter(
        max_requests=settings.chat_rate_limit_max_requests,
        window_seconds=settings.chat_rate_limit_window_seconds,
    )


async def chat_rate_limit(request: Request) -> None:
    """Reject the request with 429 once its client IP exhausts the window."""
    client_ip = get_client_ip(request)
    if not get_chat_rate_limiter().hit(f"chat_requests_{client_ip}"):
        logger.warning(f"Chat rate limit exceeded for {client_ip}")
        raise RateLimitExceededException()
