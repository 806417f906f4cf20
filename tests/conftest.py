"""Global test configuration and fixtures for PawMarket API."""

import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Callable

# Settings are read at import time, so point them at throwaway locations first
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="pawmarket-tests-"))
os.environ["DATABASE_URL"] = os.getenv(
    "TEST_DATABASE_URL", f"sqlite:///{_TEST_ROOT / 'pawmarket_test.db'}"
)
os.environ["DATABASE_CREATE_TABLES"] = "false"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["AUTH_MOCK_ENABLED"] = "true"
os.environ["RAZORPAY_KEY_ID"] = "rzp_test_conftest"
os.environ["RAZORPAY_KEY_SECRET"] = "rzp_conftest_secret"
os.environ.pop("GOOGLE_CLIENT_ID", None)

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy_utils import create_database, database_exists, drop_database

from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from pawmarket.database.models import Base, Breed, City, PetType, User, UserStatus
from pawmarket.modules.storage.service import LocalStorage
from pawmarket.modules.user.tokens import create_access_token
from pawmarket.utils.settings.database import DatabaseSettings
from pawmarket.utils.settings.storage import StorageSettings

from tests.factories import (
    BreedFactory,
    CityFactory,
    PetTypeFactory,
    UserFactory,
)
from tests.fakes import FakeGateway

BASE_URL = "http://test-pawmarket-api"


@pytest.fixture(scope="session")
def test_database_uri():
    """Create the test database and its schema once per run."""
    sync_dsn = os.environ["DATABASE_URL"]

    if database_exists(sync_dsn):
        drop_database(sync_dsn)
    create_database(sync_dsn)

    sync_engine = create_engine(sync_dsn)
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    yield DatabaseSettings().DATABASE_URL_ASYNC

    if database_exists(sync_dsn):
        drop_database(sync_dsn)


@pytest_asyncio.fixture
async def async_engine(test_database_uri):
    """Create async engine for the test database; rows are wiped after each test."""
    engine = create_async_engine(test_database_uri, echo=False)
    yield engine
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for arranging data and calling services."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def image_storage(tmp_path) -> LocalStorage:
    return LocalStorage(StorageSettings(UPLOAD_DIR=str(tmp_path / "uploads")))


@pytest_asyncio.fixture
async def app(session_factory, fake_gateway, image_storage):
    """Create FastAPI application with lifespan manager for testing."""
    from pawmarket.main import app

    async with LifespanManager(app):
        app.state.session_factory = session_factory
        app.state.payment_gateway = fake_gateway
        app.state.image_storage = image_storage
        yield app


# Test Data Fixtures
@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await UserFactory.create_async(db_session, name="Test User")


@pytest_asyncio.fixture
async def test_admin_user(db_session: AsyncSession) -> User:
    return await UserFactory.create_async(db_session, name="Admin User", is_admin=True)


@pytest_asyncio.fixture
async def test_city(db_session: AsyncSession) -> City:
    return await CityFactory.create_async(db_session, name="Bangalore", slug="bangalore")


@pytest_asyncio.fixture
async def test_pet_type(db_session: AsyncSession) -> PetType:
    return await PetTypeFactory.create_async(db_session, name="Dog", slug="dog")


@pytest_asyncio.fixture
async def test_breed(db_session: AsyncSession, test_pet_type: PetType) -> Breed:
    return await BreedFactory.create_async(
        db_session, pet_type=test_pet_type, name="Labrador Retriever", slug="labrador"
    )


# JWT Token Fixtures
@pytest.fixture()
def jwt_token_factory() -> Callable[[User], str]:
    """Factory for creating access tokens for test users."""

    def create_token(user: User) -> str:
        return create_access_token(user)

    return create_token


@pytest.fixture
def user_token(test_user: User, jwt_token_factory) -> str:
    return jwt_token_factory(test_user)


@pytest.fixture
def admin_token(test_admin_user: User, jwt_token_factory) -> str:
    return jwt_token_factory(test_admin_user)


# HTTP Client Fixtures
@pytest_asyncio.fixture
async def public_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create HTTP client for testing public endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def authorized_client(
    app: FastAPI, user_token: str
) -> AsyncGenerator[AsyncClient, None]:
    """Create HTTP client with JWT authorization headers."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
        headers={"Authorization": f"Bearer {user_token}"},
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_client(
    app: FastAPI, admin_token: str
) -> AsyncGenerator[AsyncClient, None]:
    """Create HTTP client with admin JWT authorization headers."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
        headers={"Authorization": f"Bearer {admin_token}"},
    ) as ac:
        yield ac


@pytest.fixture
def client_factory(app: FastAPI, jwt_token_factory):
    """Factory for creating HTTP clients with different user contexts."""

    def create_client_for_user(user: User) -> AsyncClient:
        return AsyncClient(
            transport=ASGITransport(app=app),
            base_url=BASE_URL,
            headers={"Authorization": f"Bearer {jwt_token_factory(user)}"},
        )

    return create_client_for_user


@pytest.fixture
def create_user_factory(db_session: AsyncSession):
    """Factory for creating users in a given account state."""

    async def create_user(
        status: UserStatus = UserStatus.ACTIVE, **kwargs
    ) -> User:
        return await UserFactory.create_async(db_session, status=status, **kwargs)

    return create_user
