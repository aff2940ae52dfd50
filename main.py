"""
NetZero Chat Server
FastAPI microservice serving chat welcome messages for the NetZero platform.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from netzero_chat.api.routers import api_router, service_router
from netzero_chat.config import database
from netzero_chat.config.settings import get_settings
from netzero_chat.middleware.error_handling import (
    ErrorHandlingMiddleware,
    register_exception_handlers,
)
from netzero_chat.middleware.request_logging import RequestLoggingMiddleware
from netzero_chat.middleware.trailing_slash import TrailingSlashMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    # Startup
    settings = get_settings()
    logger.info("NetZero Chat Server starting")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Server: http://{settings.chat_host}:{settings.chat_port}")
    logger.info(f"Chat API: {settings.chat_base}")

    # The chat routes never use the database; a failed probe is only reported
    if await run_in_threadpool(database.check_connection):
        logger.info("Database connected successfully")
    else:
        logger.warning("Chat server started but database is not available")

    yield

    # Shutdown
    logger.info("Shutting down chat server gracefully")
    await run_in_threadpool(database.close_pool)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="NetZero Chat API",
        description="Chat microservice for the NetZero sustainability marketplace",
        version=settings.version,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    # Outermost, so every layer sees the normalized path
    app.add_middleware(TrailingSlashMiddleware)
    register_exception_handlers(app)

    app.include_router(service_router)
    app.include_router(api_router, prefix=settings.api_base)

    return app


app = create_app()


def run():
    import uvicorn

    settings = get_settings()
    # uvicorn handles SIGINT/SIGTERM: the listener closes, the lifespan
    # shutdown runs and the process exits with code 0
    uvicorn.run(
        "main:app",
        host=settings.chat_host,
        port=settings.chat_port,
    )


if __name__ == "__main__":
    run()
