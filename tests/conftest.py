"""Shared test fixtures for pytest"""
import os

# Settings are read once at import time; configure before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["PERSISTENCE_BACKEND"] = "relational"
os.environ["REDIS_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["EVENT_PUBLISHING_ENABLED"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (AsyncSession, async_sessionmaker,  # noqa: E402
                                    create_async_engine)
from sqlalchemy.pool import StaticPool  # noqa: E402

import src.infrastructure.persistence.models  # noqa: E402,F401
from main import app  # noqa: E402
from src.application.events.event_bus import EventBus  # noqa: E402
from src.infrastructure.persistence.database import (  # noqa: E402
    Base, discard_after_commit, get_db, get_db_transactional, run_after_commit)
from src.infrastructure.read_models import InMemoryReadModelStore  # noqa: E402
from src.presentation.api.dependencies import init_read_side  # noqa: E402
from src.shared.context import clear_current_actor  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def reset_actor():
    """Requests and services must not leak the acting principal between tests"""
    clear_current_actor()
    yield
    clear_current_actor()


@pytest.fixture
async def test_engine():
    """In-memory SQLite engine; StaticPool keeps one shared connection"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@pytest.fixture
async def test_db(session_factory):
    """Create test database session"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def read_store():
    return InMemoryReadModelStore()


@pytest.fixture
def event_bus(read_store) -> EventBus:
    """Fresh process-wide bus with projections writing into read_store"""
    return init_read_side(read_store)


@pytest.fixture
async def client(session_factory, event_bus):
    """HTTP client for API testing"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_get_db_transactional():
        async with session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except Exception:
                discard_after_commit(session)
                await session.rollback()
                raise
            await run_after_commit(session)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_db_transactional] = override_get_db_transactional

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
