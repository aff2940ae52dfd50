"""
Helpers for reading request metadata and process information.
"""
import resource
import sys
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request

from netzero_chat.config.settings import get_settings

_PROCESS_STARTED_AT = time.monotonic()


def get_client_ip(request: Request, trusted_hops: Optional[int] = None) -> str:
    """
    Extract client IP address from request.

    The socket peer and the right-most ``trusted_hops - 1`` X-Forwarded-For
    entries belong to trusted proxies; the address just before them is the
    client. Entries further left are supplied by the caller and ignored.
    """
    if trusted_hops is None:
        trusted_hops = get_settings().trust_proxy_hops

    peer = request.client.host if request.client else "unknown"

    # Nearest hop first: the socket peer, then the forwarded chain right to left
    addresses = [peer]
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        chain = [entry.strip() for entry in forwarded.split(",") if entry.strip()]
        addresses.extend(reversed(chain))

    return addresses[min(max(trusted_hops, 0), len(addresses) - 1)]


def process_uptime() -> float:
    """Seconds since this process imported the application."""
    return time.monotonic() - _PROCESS_STARTED_AT


def process_memory() -> dict:
    """Peak resident set size of this process, in kilobytes."""
    usage = resource.getrusage(resource.RUSAGE_SELF)
    max_rss = usage.ru_maxrss
    # macOS reports bytes, Linux reports kilobytes
    if sys.platform == "darwin":
        max_rss //= 1024
    return {"maxRssKb": max_rss}


def utc_timestamp() -> str:
    """Current UTC time as an ISO 8601 string with millisecond precision."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
