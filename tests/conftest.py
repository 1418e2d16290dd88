"""Test configuration and fixtures.

Each test gets its own in-memory SQLite database:
1. A fresh aiosqlite engine (single shared connection) is created per test
2. The schema is created from the ORM metadata
3. Foreign keys are switched on so ``ON DELETE CASCADE`` behaves as in PostgreSQL
4. The app's session dependency is overridden to use the test session
"""

from collections.abc import AsyncGenerator
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

# Load test environment variables before the settings module is imported
test_env_path = Path(__file__).parent.parent / ".env.test"
load_dotenv(test_env_path, override=True)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from src.database.base import Base  # noqa: E402
from src.database.dependencies import get_db_session  # noqa: E402
from src.features.auth.config import AuthConfig, RefreshTokenTransport  # noqa: E402
from src.features.auth.dependencies import get_auth_config  # noqa: E402
from src.features.auth.password_hasher import PasswordHasher  # noqa: E402
from src.features.auth.service import AuthService  # noqa: E402
from src.features.user.models import User, UserRole  # noqa: E402
from src.main import app  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "password1"


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Database Fixtures - Function Scope (Fresh Database Per Test)


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory database living on one connection for the duration of a test."""
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session shared by the test body and the endpoints it calls.

    Routes commit through this session; the database is discarded with the engine.
    """
    async_session = AsyncSession(bind=db_engine, expire_on_commit=False)
    try:
        yield async_session
    finally:
        await async_session.close()


# FastAPI Client & Dependency Overrides


@pytest_asyncio.fixture(autouse=True)
async def override_get_db_session(session: AsyncSession):
    """Override the database session dependency with the test session."""

    async def _get_test_session():
        yield session

    app.dependency_overrides[get_db_session] = _get_test_session
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Unauthenticated async HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Auth Fixtures


@pytest.fixture
def auth_config() -> AuthConfig:
    """Auth configuration built from .env.test (cookie transport, cheap Argon2 cost)."""
    return get_auth_config()


@pytest.fixture
def auth_service(auth_config: AuthConfig) -> AuthService:
    return AuthService(auth_config)


@pytest.fixture
def use_auth_config(auth_config: AuthConfig):
    """Swap the app's auth configuration for the rest of the test.

    Usage:
        config = use_auth_config(rotate_refresh_tokens=True)
    """

    def _apply(**changes) -> AuthConfig:
        config = replace(auth_config, **changes)
        app.dependency_overrides[get_auth_config] = lambda: config
        return config

    yield _apply


@pytest.fixture
def header_transport(use_auth_config) -> AuthConfig:
    """Refresh token travels in the body and the X-Refresh-Token header."""
    return use_auth_config(refresh_token_transport=RefreshTokenTransport.HEADER)


# Test User Factories


@pytest.fixture
def make_user(session: AsyncSession, auth_config: AuthConfig):
    """Factory fixture to create test users directly in the store.

    Usage:
        user = await make_user()                          # defaults
        admin = await make_user(role=UserRole.ADMIN)      # admin
    """
    hasher = PasswordHasher(auth_config.password_hash_cost)
    counter = 0

    async def _factory(
        email=None,
        password=DEFAULT_PASSWORD,
        name="Test User",
        role=UserRole.USER,
    ) -> User:
        nonlocal counter
        counter += 1

        if email is None:
            email = f"testuser{counter}@example.com"

        user = User(email=email, name=name, password_hash=hasher.hash(password), role=role)
        session.add(user)
        await session.flush()
        await session.refresh(user)
        return user

    yield _factory


@pytest.fixture
def auth_headers(auth_service: AuthService):
    """Build an ``Authorization`` header carrying a real access token for ``user``."""

    def _headers(user: User) -> dict[str, str]:
        token = auth_service.issuer.issue_access_token(user).token
        return {"Authorization": f"Bearer {token}"}

    return _headers
