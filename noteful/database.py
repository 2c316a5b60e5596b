"""
Noteful API — Database Session Management
==========================================

What:  Async SQLAlchemy engine ownership, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   `Database` wraps one async engine (and its connection pool) plus a
       session factory. The application lifespan creates exactly one instance,
       stores it on `app.state.db`, and disposes it at shutdown. Route handlers
       receive a per-request session through `get_db_session`.
Who:   Used by route handlers via FastAPI's dependency injection system, and
       by the seed loader.

Connection Pooling Strategy:
    pool_size / max_overflow come from settings and never change at runtime.
    pool_pre_ping validates a connection before handing it out.
    SQLite engines (tests) skip the pool arguments entirely and get
    foreign-key enforcement switched on for every new connection.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from noteful.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so that they share one metadata
    object; the seed loader creates and drops tables from it.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE rules unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Process-scoped handle on the relational store.

    Lifecycle:
        1. Created once in the application lifespan (or by a test fixture)
        2. Shared by every request through `app.state.db`
        3. `dispose()` closes all pooled connections at shutdown

    Example:
        db = Database.from_settings()
        async with db.session_factory() as session:
            await session.execute(select(Folder))
        await db.dispose()
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 2,
        max_overflow: int = 0,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        self.is_sqlite = url.startswith("sqlite")

        engine_kwargs = {"echo": echo}
        if not self.is_sqlite:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if self.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: rows stay readable after the service commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "Database":
        config = config or default_settings
        return cls(
            config.database_url,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            echo=config.log_level == "DEBUG",
        )

    async def dispose(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler) and
               at the end of each test that opened a database.
        """
        await self.engine.dispose()
        logger.info("Database engine disposed")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Looks up the process-wide `Database` on `request.app.state.db`
        2. Opens a new session and yields it to the route handler
        3. On success: commits anything the handler left pending
        4. On error: rolls back and re-raises for the global error handler
        5. Always: the session context closes and returns the connection

    Example usage in a route:
        @router.get("")
        async def list_folders(db: AsyncSession = Depends(get_db_session)):
            return await folder_service.list_folders(db)
    """
    database: Database = request.app.state.db
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
