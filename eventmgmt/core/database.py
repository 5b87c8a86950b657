"""
Database configuration and session management
"""

from typing import AsyncGenerator, Optional
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    async_sessionmaker,
    create_async_engine
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool, StaticPool, AsyncAdaptedQueuePool
import logging
from contextlib import asynccontextmanager

from eventmgmt.config import settings
from eventmgmt.core.exceptions import EventManagementException

logger = logging.getLogger(__name__)


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith(":"))


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """
    Create an async engine with pooling suited to the backend
    """
    url = url or settings.DATABASE_URL
    echo = settings.DB_ECHO if echo is None else echo

    if _is_memory_sqlite(url):
        # One shared connection, otherwise every checkout sees an empty database
        new_engine = create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    elif url.startswith("sqlite") or settings.is_testing:
        # NullPool doesn't accept pool parameters
        new_engine = create_async_engine(url, echo=echo, poolclass=NullPool)
    else:
        new_engine = create_async_engine(
            url,
            echo=echo,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            poolclass=AsyncAdaptedQueuePool,
        )

    if url.startswith("sqlite"):
        event.listen(new_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return new_engine


def is_unique_violation(exc: IntegrityError, column: str) -> bool:
    """True when the driver reports a unique index covering ``column``"""
    detail = str(exc.orig).lower()
    return "unique" in detail and column in detail


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Create async engine
engine: AsyncEngine = build_engine()

# Create async session factory
async_session = build_session_factory(engine)

# Create declarative base
Base = declarative_base()


async def init_db(bind: Optional[AsyncEngine] = None):
    """
    Create all tables on the given engine (defaults to the global one)
    """
    # Make sure every model is registered on Base.metadata
    import eventmgmt.models  # noqa: F401

    bind = bind or engine
    try:
        async with bind.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


async def drop_db(bind: Optional[AsyncEngine] = None):
    """
    Drop all tables on the given engine (defaults to the global one)
    """
    import eventmgmt.models  # noqa: F401

    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database tables dropped")


async def close_db():
    """
    Close database connections
    """
    await engine.dispose()
    logger.info("Database connections closed")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session; callers own their transaction boundaries
    """
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


class DatabaseManager:
    """
    Transaction handling shared by the service layer
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self.session_factory = session_factory or async_session
        self.logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def transaction(self, session: AsyncSession):
        """
        Commit on clean exit, roll back and re-raise on any error.

        Works whether or not the session has already autobegun a
        transaction, so callers can read before they write.
        """
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            # Domain refusals are expected outcomes, not faults
            level = logging.WARNING if isinstance(e, EventManagementException) else logging.ERROR
            self.logger.log(level, f"Transaction rolled back: {type(e).__name__}: {e}")
            raise

    @asynccontextmanager
    async def atomic_transaction(self):
        """
        Create a new session with atomic transaction
        """
        async with self.session_factory() as session:
            async with self.transaction(session) as tx_session:
                yield tx_session

    async def execute_in_transaction(self, func, *args, **kwargs):
        """
        Execute ``func(session, *args, **kwargs)`` in its own transaction
        """
        async with self.atomic_transaction() as session:
            return await func(session, *args, **kwargs)


# Create global database manager
db_manager = DatabaseManager()
