"""
Pytest configuration and fixtures for tests.
Provides reusable test fixtures for database, users, chats and the HTTP client.
"""
import pytest
from typing import AsyncGenerator, Callable, Dict
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from messenger.main import app
from messenger.core.database import get_db
from messenger.models.base import Base
from messenger.services.chat_service import ChatService
from messenger.services.user_service import UserService


# In-memory SQLite shared by every connection of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    TestSessionLocal = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client bound to the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    # Clear overrides after test
    app.dependency_overrides.clear()


@pytest.fixture
def headers() -> Callable[[str], Dict[str, str]]:
    """Build request headers acting as the given login."""
    def _headers(login: str) -> Dict[str, str]:
        return {"X-User-Login": login}
    return _headers


@pytest.fixture
def register_user(db_session: AsyncSession):
    """Factory registering a user and returning its login."""
    async def _register(login: str, phone: str = "555-0100") -> str:
        await UserService(db_session).register_user(login, "secret", phone)
        return login
    return _register


@pytest.fixture
async def alice(register_user) -> str:
    return await register_user("alice", "555-0101")


@pytest.fixture
async def bob(register_user) -> str:
    return await register_user("bob", "555-0102")


@pytest.fixture
async def carol(register_user) -> str:
    return await register_user("carol", "555-0103")


@pytest.fixture
async def dave(register_user) -> str:
    return await register_user("dave", "555-0104")


@pytest.fixture
async def group_chat(db_session: AsyncSession, alice, bob, carol) -> int:
    """Chat owned by alice with bob and carol; returns the chat id."""
    chat = await ChatService(db_session).create_chat(alice, [bob, carol])
    return chat.id
