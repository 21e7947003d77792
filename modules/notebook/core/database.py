"""
Database Configuration.

SQLAlchemy async engine and session management.

The engine lives in an explicitly constructed Database handle. The
application lifespan builds one from configuration, stores it on
app.state and disposes it on shutdown. Tests build their own handle
(or override get_db_session) instead of touching process-wide state.
"""

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from modules.notebook.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """
    Owns one async engine and its session factory.

    Usage:
        database = Database.from_config()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_config(cls) -> "Database":
        """Create a handle from database.yaml and config/.env."""
        from modules.notebook.core.config import get_app_config, get_database_url

        db_config = get_app_config().database
        url = get_database_url()

        engine_kwargs: dict[str, Any] = {"echo": db_config.echo}
        if db_config.driver != "sqlite":
            engine_kwargs.update(
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_timeout=db_config.pool_timeout,
                pool_recycle=db_config.pool_recycle,
            )

        database = cls(url, **engine_kwargs)
        logger.debug(
            "Database engine created",
            extra={"driver": db_config.driver, "host": db_config.host},
        )
        return database

    def session(self) -> AsyncSession:
        """Open a new session (use as an async context manager)."""
        return self.session_factory()

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
        logger.debug("Database engine disposed")


def get_database(request: Request) -> Database:
    """Return the Database handle stored on the application by the lifespan."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized. Is the application lifespan running?")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Commits when the request handler returns, rolls back on error.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with get_database(request).session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
