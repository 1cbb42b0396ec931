"""
Animal Catalog Backend — Database Session Management
======================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   A `Database` object owns the engine and session factory. It is built
       once in the application lifespan, stored on `app.state.database`,
       and disposed on shutdown. Route handlers receive a per-request session
       through the `get_db_session` dependency, which commits on success and
       rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings.
    SQLite (tests, local experiments) keeps SQLAlchemy's default pool
    because it does not accept the queue-pool arguments.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from animal_catalog.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


class Database:
    """
    Process-wide handle on the store: engine plus session factory.

    Created once at startup; never mutated afterwards. Tests build one
    around an in-memory SQLite engine and attach it to `app.state`.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: response models read attributes after commit
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build the engine described by DATABASE_URL and the pool settings."""
        engine_kwargs = {"echo": settings.log_level == "DEBUG"}
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        engine = create_async_engine(settings.database_url, **engine_kwargs)
        logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
        return cls(engine)

    async def ping(self) -> bool:
        """Run SELECT 1; True when the store answers."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close every pooled connection. Called during shutdown."""
        await self.engine.dispose()
        logger.info("Database engine disposed")


def get_database(request: Request) -> Optional[Database]:
    """Return the Database attached by the lifespan, or None before startup."""
    return getattr(request.app.state, "database", None)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the Database attached to the app
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/categories")
        async def list_categories(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database = get_database(request)
    if database is None:
        raise RuntimeError("Database is not initialized; was the app started through its lifespan?")

    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
