"""Pytest fixtures for testing."""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fleetshare.core.rate_limit import limiter
from fleetshare.core.security import create_access_token, get_password_hash
from fleetshare.db.base import Base
from fleetshare.db.session import get_db
from fleetshare.models.asset import Asset
from fleetshare.models.user import User
from fleetshare.services.asset_registry import create_asset
from fleetshare.services.transfer_service import LedgerTransferGateway
from main import app

# Test database URL (SQLite in-memory for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def reset_limiter():
    """Reset rate limiter storage around each test."""
    limiter.reset()
    yield
    limiter.reset()


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_db(test_engine) -> AsyncGenerator[AsyncSession]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(test_db: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database override."""

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def gateway(test_db: AsyncSession) -> LedgerTransferGateway:
    """Default transfer gateway bound to the test session."""
    return LedgerTransferGateway(test_db)


async def _make_user(
    db: AsyncSession,
    username: str,
    password: str,
    *,
    is_active: bool = True,
    is_superuser: bool = False,
) -> User:
    user = User(
        email=f"{username}@example.com",
        username=username,
        hashed_password=get_password_hash(password),
        is_active=is_active,
        is_superuser=is_superuser,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def test_user(test_db: AsyncSession) -> User:
    """Create a test holder."""
    return await _make_user(test_db, "testuser", "TestPass123")


@pytest_asyncio.fixture(scope="function")
async def test_other_user(test_db: AsyncSession) -> User:
    """Create a second test holder."""
    return await _make_user(test_db, "otheruser", "OtherPass123")


@pytest_asyncio.fixture(scope="function")
async def test_superuser(test_db: AsyncSession) -> User:
    """Create a test administrator."""
    return await _make_user(test_db, "adminuser", "AdminPass123", is_superuser=True)


@pytest_asyncio.fixture(scope="function")
async def test_inactive_user(test_db: AsyncSession) -> User:
    """Create an inactive test user."""
    return await _make_user(test_db, "inactiveuser", "InactivePass123", is_active=False)


@pytest.fixture
def make_asset(
    test_db: AsyncSession,
) -> Callable[..., Awaitable[Asset]]:
    """Factory registering an asset through the registry service."""

    async def _make_asset(
        name: str = "Model Y #1",
        total_shares: int = 100,
        price_per_unit: int = 1,
        image_ref: str = "",
    ) -> Asset:
        return await create_asset(
            test_db,
            name=name,
            total_shares=total_shares,
            price_per_unit=price_per_unit,
            image_ref=image_ref,
        )

    return _make_asset


@pytest.fixture(scope="function")
def user_token(test_user: User) -> str:
    """Generate a valid access token for test user."""
    return create_access_token(data={"sub": test_user.username})


@pytest.fixture(scope="function")
def other_user_token(test_other_user: User) -> str:
    """Generate a valid access token for the second holder."""
    return create_access_token(data={"sub": test_other_user.username})


@pytest.fixture(scope="function")
def superuser_token(test_superuser: User) -> str:
    """Generate a valid access token for test administrator."""
    return create_access_token(data={"sub": test_superuser.username})


@pytest.fixture(scope="function")
def inactive_user_token(test_inactive_user: User) -> str:
    """Generate a valid access token for inactive user."""
    return create_access_token(data={"sub": test_inactive_user.username})


@pytest.fixture(scope="function")
def auth_headers(user_token: str) -> dict[str, str]:
    """Generate authorization headers with user token."""
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture(scope="function")
def other_auth_headers(other_user_token: str) -> dict[str, str]:
    """Generate authorization headers for the second holder."""
    return {"Authorization": f"Bearer {other_user_token}"}


@pytest.fixture(scope="function")
def superuser_auth_headers(superuser_token: str) -> dict[str, str]:
    """Generate authorization headers with administrator token."""
    return {"Authorization": f"Bearer {superuser_token}"}


@pytest.fixture(scope="function")
def inactive_user_auth_headers(inactive_user_token: str) -> dict[str, str]:
    """Generate authorization headers with inactive user token."""
    return {"Authorization": f"Bearer {inactive_user_token}"}
