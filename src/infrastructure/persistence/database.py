from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import (AsyncSession, async_sessionmaker,
                                    create_async_engine)
from sqlalchemy.orm import DeclarativeBase

from src.infrastructure.config.settings import get_settings

settings = get_settings()


def _engine_options(database_url: str) -> dict:
    # Pool sizing only applies to server databases; SQLite uses a static pool
    if database_url.startswith("postgresql"):
        return {
            "pool_size": 20,
            "max_overflow": 30,
            "pool_recycle": 3600,
            "connect_args": {"server_settings": {"jit": "off"}, "command_timeout": 60},
        }
    return {}


# Create engine once at module level (not with lru_cache)
engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
    **_engine_options(settings.database_url),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


class Base(DeclarativeBase):
    """Base class for all database models"""

    pass


async def get_db():
    """
    Database session dependency for read operations.
    Does not commit; write operations should use get_db_transactional().
    """
    async with AsyncSessionLocal() as session:
        yield session


AFTER_COMMIT_KEY = "after_commit_callbacks"

AfterCommitCallback = Callable[[], Awaitable[None]]


def register_after_commit(session: AsyncSession, callback: AfterCommitCallback) -> None:
    """Queue work (event publishing) that must only happen once the session commits"""
    session.info.setdefault(AFTER_COMMIT_KEY, []).append(callback)


def discard_after_commit(session: AsyncSession) -> None:
    session.info.pop(AFTER_COMMIT_KEY, None)


async def run_after_commit(session: AsyncSession) -> None:
    """Run and clear the callbacks queued on a committed session"""
    callbacks = session.info.pop(AFTER_COMMIT_KEY, [])
    for callback in callbacks:
        await callback()


async def get_db_transactional():
    """
    Database session dependency for write operations.

    Commits when the request handler returns and rolls back if it raises.
    Callbacks queued with register_after_commit run only after a successful
    commit and are dropped on rollback.
    Use this for POST, PUT, PATCH, DELETE endpoints.
    """
    async with AsyncSessionLocal() as session:
        try:
            async with session.begin():
                yield session
        except Exception:
            discard_after_commit(session)
            await session.rollback()
            raise
        await run_after_commit(session)


async def create_all() -> None:
    """Create tables for every registered model (development and tests)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
