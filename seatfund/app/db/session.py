"""
Database session configuration.

This module owns engine creation and session management using SQLAlchemy
with async support. There is no module-level engine: a ``Database`` handle is
constructed explicitly and passed to whatever needs the store.
"""

from typing import Any, AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from seatfund.app.core.config import Settings
from seatfund.app.db.immutability import register_immutability_listeners

# Create declarative base for models
Base = declarative_base()


def serialize_sqlite_writers(engine: AsyncEngine) -> None:
    """
    Make every SQLite transaction take the write lock when it begins.

    The driver otherwise defers BEGIN until the first INSERT/UPDATE, so the
    balance reads of a unit of work would run outside its transaction and two
    concurrent workflows could read the same balance. Transactions waiting on
    the lock fail with "database is locked" once the busy timeout expires.
    """
    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    """
    Explicit handle on the shared store.

    Holds the async engine and the session factory. Sessions are created
    per unit of work via ``session()``.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        isolation_level: Optional[str] = None,
        pool_size: Optional[int] = None,
        max_overflow: Optional[int] = None,
        **engine_options: Any,
    ):
        is_sqlite = url.startswith("sqlite")
        options = {"echo": echo, "future": True}
        # SQLite serializes writers with BEGIN IMMEDIATE instead of an isolation level
        if isolation_level and not is_sqlite:
            options["isolation_level"] = isolation_level
        # Pool sizing only applies to server databases
        if not is_sqlite:
            if pool_size is not None:
                options["pool_size"] = pool_size
            if max_overflow is not None:
                options["max_overflow"] = max_overflow
        options.update(engine_options)

        self.url = url
        self.engine = create_async_engine(url, **options)
        if is_sqlite:
            serialize_sqlite_writers(self.engine)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        register_immutability_listeners()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            echo=settings.db_echo,
            isolation_level=settings.db_isolation_level,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )

    def session(self) -> AsyncSession:
        """Open a new session; use it as an async context manager."""
        return self.session_factory()

    async def sessions(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session and ensure it's properly closed.

        Shaped for dependency injection by the calling layer.
        """
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create every table registered on ``Base``."""
        # Import models to ensure they are registered with Base
        import seatfund.app.models.registry  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
