import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Optional developer overrides (e.g. TEST_DATABASE_URL pointing at Postgres)
env_test_path = os.path.join(os.path.dirname(__file__), ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path, override=True)

TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:"
)

# Settings are read at import time by the app modules, so pin them first.
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

from libs.auth.tokens import create_access_token  # noqa: E402
from libs.common.config import get_settings  # noqa: E402
from libs.db.base import Base  # noqa: E402
from services.storefront_service import models as _storefront_models  # noqa: E402,F401
from services.storefront_service.app.main import app  # noqa: E402

# Clear cached settings to reload with new env vars
get_settings.cache_clear()
settings = get_settings()


@pytest_asyncio.fixture
async def test_engine():
    """
    Fresh schema per test. SQLite in-memory by default; a single shared
    connection keeps the database alive for the test's duration.
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient with the app and overridden DB dependency.
    """
    from libs.db.session import get_async_db

    async def _override_db():
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_async_db] = _override_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_user(db_session):
    from services.storefront_service.models import UserRole
    from tests.factories import UserFactory

    user = UserFactory.create(username="admin", role=UserRole.ADMIN)
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def admin_headers(admin_user) -> dict:
    """Bearer headers for a real admin token."""
    token = create_access_token(
        str(admin_user.id), role="admin", email=admin_user.email
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers() -> dict:
    token = create_access_token("00000000-0000-0000-0000-000000000001", role="customer")
    return {"Authorization": f"Bearer {token}"}
