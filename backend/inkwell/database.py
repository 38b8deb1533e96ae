"""
Inkwell Backend: Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       FastAPI session dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that commits on success and rolls back on error.
Who:   The repository layer receives sessions from `get_db_session`;
       Alembic reads `Base.metadata`.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20, max_overflow=10: at most 30 connections per process
    pool_pre_ping: validates connections before use
    pool_recycle=3600: recycles connections every hour

SQLite URLs (local runs, tests) skip the pool sizing arguments; SQLite
picks its own pool class.
"""

import logging
from contextlib import contextmanager
from typing import Any, AsyncGenerator, Dict, Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from inkwell.config import Settings, settings
from inkwell.exceptions import DatabaseError, InkwellError

logger = logging.getLogger(__name__)


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine for `config.database_url`."""
    options: Dict[str, Any] = {"echo": config.log_level == "DEBUG"}
    if not config.is_sqlite:
        options.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(config.database_url, **options)


engine = build_engine(settings)

# expire_on_commit=False keeps attributes readable after the request's
# commit, when responses are serialized.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which Alembic uses for
    autogenerate and tests use for `create_all`.
    """
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the repositories used by the route
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)

    Each request performs at most one logical write, so there is no
    partial-failure state to reconcile beyond the rollback.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@contextmanager
def database_errors(operation: str) -> Iterator[None]:
    """
    Wrap persistence failures raised inside the block in DatabaseError.

    Application errors (NotFoundError, ConflictError, ...) pass through
    unchanged. The original exception is logged server-side; the client only
    sees a generic message.
    """
    try:
        yield
    except InkwellError:
        raise
    except SQLAlchemyError as e:
        logger.error("Database error while trying to %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(
            message=f"Could not {operation}. Please try again.",
            context={"error_type": type(e).__name__},
        ) from e


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
