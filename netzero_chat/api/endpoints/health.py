"""
Service-level endpoints.
Health, API information and database diagnostics, mounted at the root.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from netzero_chat.config import database
from netzero_chat.config.settings import Settings, get_settings
from netzero_chat.utils.request_utils import (
    process_memory,
    process_uptime,
    utc_timestamp,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic health check endpoint."""
    return {
        "success": True,
        "message": "NetZero Chat Server is running",
        "service": settings.service_name,
        "environment": settings.environment,
        "version": settings.version,
        "port": settings.chat_port,
        "uptime": process_uptime(),
        "memory": process_memory(),
        "timestamp": utc_timestamp(),
    }


@router.get("/")
async def api_information(settings: Settings = Depends(get_settings)):
    """Describe the chat API and how to call it."""
    chat_base = settings.chat_base
    return {
        "success": True,
        "message": "Welcome to NetZero Chat API",
        "service": settings.service_name,
        "version": settings.version,
        "documentation": {
            "chat": chat_base,
            "health": "/health",
        },
        "endpoints": {
            "chat": {
                "welcome": f"GET {chat_base}/:chatid",
                "sendMessage": f"POST {chat_base}/:chatid/message",
                "health": f"GET {chat_base}/health",
            }
        },
        "usage": {
            "authentication": "Bearer token optional for chat endpoints",
            "rateLimit": (
                f"{settings.chat_rate_limit_max_requests} requests per "
                f"{settings.chat_rate_limit_window_seconds:g} seconds per IP"
            ),
            "messageFormat": {
                "send": {
                    "method": "POST",
                    "url": f"{chat_base}/{{chatid}}/message",
                    "body": {"message": "Your message here"},
                    "headers": {"Authorization": "Bearer your-jwt-token"},
                }
            },
        },
        "timestamp": utc_timestamp(),
    }


@router.get("/db-test")
def database_test(settings: Settings = Depends(get_settings)) -> JSONResponse:
    """Probe the MySQL pool. Runs in the threadpool since the probe blocks."""
    try:
        is_connected = database.check_connection()
    except Exception as e:
        logger.error(f"Chat Server - Database connection error: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Chat Server - Database connection error",
                "error": str(e),
                "timestamp": utc_timestamp(),
            },
        )

    if not is_connected:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Chat Server - Database connection failed",
                "timestamp": utc_timestamp(),
            },
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "success": True,
            "message": "Chat Server - Database connection successful",
            "database": {
                "host": settings.db_host,
                "port": settings.db_port,
                "database": settings.db_name,
                "user": settings.db_user,
            },
            "timestamp": utc_timestamp(),
        },
    )
