import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.models  # noqa: F401
from storefront.main import app
from storefront.clients import get_image_host
from storefront.clients.base import BaseImageHostClient
from storefront.db.database import Base, build_engine, get_session
from storefront.models import Role
from storefront.schemas.user import UserCreate
from storefront.security import create_access_token
from storefront.services.image_service import ImageService
from storefront.services.products_service import ProductsService
from storefront.services.users_service import UsersService

HOSTED_URL = "https://res.cloudinary.com/demo/image/upload/v1/products/sample.png"


@pytest.fixture
async def engine():
    """In-memory SQLite database shared by every session of a test."""
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_image_host():
    """Image host that always succeeds without touching the network."""
    mock = AsyncMock(spec=BaseImageHostClient)
    mock.upload.return_value = HOSTED_URL
    return mock


@pytest.fixture
def users_service(session):
    return UsersService(session)


@pytest.fixture
def products_service(session, users_service, mock_image_host):
    return ProductsService(session, users_service, ImageService(session, mock_image_host))


@pytest.fixture
async def client(session_factory, mock_image_host):
    """Async test client backed by the in-memory database."""

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_image_host] = lambda: mock_image_host

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(session_factory, email, username, role):
    async with session_factory() as session:
        return await UsersService(session).create(
            UserCreate(email=email, username=username, password="secret-pass"), role=role
        )


def _bearer(user):
    token = create_access_token({"username": user.username, "sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_user(session_factory):
    return await _create_user(session_factory, "admin@example.com", "admin", Role.ADMIN)


@pytest.fixture
async def regular_user(session_factory):
    return await _create_user(session_factory, "jane@example.com", "jane", Role.USER)


@pytest.fixture
def admin_headers(admin_user):
    return _bearer(admin_user)


@pytest.fixture
def user_headers(regular_user):
    return _bearer(regular_user)
