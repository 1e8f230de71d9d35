"""
Test configuration and fixtures for the realtor listing API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Settings are read at import time; point them at an in-memory database first
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import uuid
import pytest
from typing import AsyncGenerator, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from listing_api.main import app
from listing_api.database import Base, get_db
from listing_api.models.user import User, UserRole
from listing_api.models.listing import Listing, PropertyType
from listing_api.repositories.user import UserRepository
from listing_api.repositories.listing import ListingRepository
from listing_api.repositories.message import MessageRepository
from listing_api.services.auth import AuthService
from listing_api.services.listing import ListingService
from listing_api.utils.auth import create_session_token


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def test_engine():
    """Create a fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def listing_repository(db_session: AsyncSession) -> ListingRepository:
    return ListingRepository(db_session)


@pytest.fixture
def message_repository(db_session: AsyncSession) -> MessageRepository:
    return MessageRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


@pytest.fixture
def listing_service(db_session: AsyncSession) -> ListingService:
    return ListingService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        name: str = "Test User",
        phone: str = "555-555-5555",
        role: UserRole = UserRole.REALTOR,
        user_id: Optional[int] = None
    ) -> dict:
        """Create user data dictionary."""
        data = {
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "name": name,
            "phone": phone,
            "role": role,
        }
        if user_id is not None:
            data["id"] = user_id
        return data

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class ListingFactory:
    """Factory for creating test listings."""

    @staticmethod
    def create_listing_data(
        realtor_id: int,
        address: str = "1 Main St",
        city: str = "Springfield",
        price: float = 250000,
        land_size: float = 500,
        number_of_bedrooms: int = 3,
        number_of_bathrooms: float = 2,
        property_type: PropertyType = PropertyType.RESIDENTIAL
    ) -> dict:
        """Create listing data dictionary."""
        return {
            "address": address,
            "city": city,
            "price": price,
            "land_size": land_size,
            "number_of_bedrooms": number_of_bedrooms,
            "number_of_bathrooms": number_of_bathrooms,
            "property_type": property_type,
            "realtor_id": realtor_id,
        }

    @staticmethod
    async def create_listing(
        listing_repo: ListingRepository,
        realtor_id: int,
        image_urls: Optional[List[str]] = None,
        **kwargs
    ) -> Listing:
        """Create a test listing with images in the database."""
        listing_data = ListingFactory.create_listing_data(realtor_id, **kwargs)
        if image_urls is None:
            image_urls = ["http://x/a.jpg"]
        return await listing_repo.create_listing(listing_data, image_urls)


def auth_headers(user: User) -> Dict[str, str]:
    """Build an Authorization header carrying a session token for ``user``."""
    token = create_session_token(name=user.name, user_id=user.id)
    return {"Authorization": f"Bearer {token}"}


# Common test fixtures
@pytest.fixture
async def test_realtor(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="realtor@example.com",
        name="Test Realtor",
        phone="555-000-0001",
        role=UserRole.REALTOR
    )


@pytest.fixture
async def other_realtor(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="other.realtor@example.com",
        name="Other Realtor",
        phone="555-000-0002",
        role=UserRole.REALTOR
    )


@pytest.fixture
async def test_buyer(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="buyer@example.com",
        name="Test Buyer",
        phone="555-000-0003",
        role=UserRole.BUYER
    )


@pytest.fixture
async def test_admin(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="admin@example.com",
        name="Test Admin",
        phone="555-000-0004",
        role=UserRole.ADMIN
    )


@pytest.fixture
async def test_listing(listing_repository: ListingRepository, test_realtor: User) -> Listing:
    """Listing owned by ``test_realtor`` with one image."""
    return await ListingFactory.create_listing(listing_repository, test_realtor.id)
