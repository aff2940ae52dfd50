"""
MySQL connection pool management.
Provides a lazily created SQLAlchemy engine and small query helpers.

None of the chat routes touch the database; the pool backs the
``/db-test`` diagnostic route and the startup connectivity probe.
"""
import logging
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from netzero_chat.config.settings import get_settings

logger = logging.getLogger(__name__)


def build_database_url() -> URL:
    """Build the MySQL connection URL from ``DB_*`` settings."""
    settings = get_settings()
    return URL.create(
        "mysql+pymysql",
        username=settings.db_user,
        password=settings.db_password or None,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
    )


@lru_cache(maxsize=None)
def get_engine() -> Engine:
    """
    Returns the shared engine backing the connection pool.

    The pool holds ``DB_POOL_SIZE`` connections with no overflow; callers
    beyond that wait for a connection to be released.
    """
    settings = get_settings()
    return create_engine(
        build_database_url(),
        pool_size=settings.db_pool_size,
        max_overflow=0,
        pool_pre_ping=True,
        connect_args={"connect_timeout": settings.db_connect_timeout},
    )


def check_connection() -> bool:
    """
    Check out a pooled connection and run a trivial query.

    Returns:
        bool: True if the database answered, False otherwise. Never raises.
    """
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Chat Server - Database connected successfully")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Chat Server - Database connection failed: {e}")
        return False


def execute_query(
    query: str, params: Optional[Mapping[str, Any]] = None
) -> List[Dict[str, Any]]:
    """
    Execute a parameterized query and return its rows as dictionaries.

    Args:
        query: SQL text using ``:name`` bind parameters
        params: Values for the bind parameters

    Raises:
        SQLAlchemyError: Re-raised after logging.
    """
    try:
        with get_engine().begin() as connection:
            result = connection.execute(text(query), dict(params or {}))
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings()]
    except SQLAlchemyError as e:
        logger.error(f"Chat Server - Database query error: {e}")
        raise


def get_connection() -> Connection:
    """Get a connection from the pool. The caller must close it."""
    try:
        return get_engine().connect()
    except SQLAlchemyError as e:
        logger.error(f"Chat Server - Error getting database connection: {e}")
        raise


def close_pool() -> None:
    """Dispose of the pool, if one was ever created."""
    if get_engine.cache_info().currsize == 0:
        return
    try:
        get_engine().dispose()
        get_engine.cache_clear()
        logger.info("Chat Server - Database pool closed")
    except SQLAlchemyError as e:
        logger.error(f"Chat Server - Error closing database pool: {e}")
