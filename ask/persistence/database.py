"""Database connection and session management.

Provides the async engine, the session factory and ``PostgresDatabase``, the
transaction manager shared by the PostgreSQL repositories.
"""

from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncGenerator, Optional

import logfire
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ask.config import Settings
from ask.domain.error import TransientStoreError
from ask.domain.repository.transaction import TransactionManager


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL and pool sizes

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


def is_transient(error: DBAPIError) -> bool:
    """Whether a driver error means the store was unreachable rather than the query wrong."""
    return isinstance(error, (OperationalError, InterfaceError)) or bool(
        error.connection_invalidated
    )


class PostgresDatabase(TransactionManager):
    """Session-per-transaction boundary for the PostgreSQL repositories.

    Inside ``transaction()`` every repository call of the current task runs on
    the same session. Outside of one, each call gets its own short
    transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self._current: ContextVar[Optional[AsyncSession]] = ContextVar(
            f"postgres_session_{id(self)}", default=None
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[None, None]:
        """Open a transaction for the current task, or join the open one."""
        if self._current.get() is not None:
            yield
            return

        async with self._begin() as session:
            token = self._current.set(session)
            try:
                yield
            finally:
                self._current.reset(token)

    def in_transaction(self) -> bool:
        return self._current.get() is not None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield the current task's session, or a one-off transactional session."""
        current = self._current.get()
        if current is not None:
            yield current
            return

        async with self._begin() as session:
            yield session

    @asynccontextmanager
    async def _begin(self) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except DBAPIError as e:
            if not is_transient(e):
                raise
            logfire.warn("Database unavailable", error=str(e))
            raise TransientStoreError(str(e.orig or e)) from e
