"""
Test configuration and fixtures for the TUMHARAGHAR marketplace.
Provides an in-memory database, test data factories and authenticated clients.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import AsyncGenerator, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from tumharaghar.main import app
from tumharaghar.database import Base, enable_sqlite_foreign_keys, get_db, utcnow
from tumharaghar.models.profile import Profile, UserRole
from tumharaghar.models.property import Property, PropertyType, PropertyStatus
from tumharaghar.repositories.profile import ProfileRepository
from tumharaghar.repositories.property import PropertyRepository
from tumharaghar.repositories.image import ImageRepository
from tumharaghar.schemas.auth import Session
from tumharaghar.schemas.profile import ProfileResponse
from tumharaghar.services.auth import SessionProvider
from tumharaghar.services.property import PropertyService
from tumharaghar.utils.auth import create_access_token


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "secret123"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
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
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with the database session override. Redirects are not followed."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def profile_repository(db_session: AsyncSession) -> ProfileRepository:
    return ProfileRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def image_repository(db_session: AsyncSession) -> ImageRepository:
    return ImageRepository(db_session)


# Service fixtures
@pytest.fixture
def session_provider(db_session: AsyncSession) -> SessionProvider:
    return SessionProvider(db_session)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


# Test data factories
class ProfileFactory:
    """Factory for creating test profiles."""

    @staticmethod
    def create_profile_data(
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        full_name: str = "Test User",
        role: UserRole = UserRole.BUYER,
        phone: Optional[str] = None
    ) -> dict:
        return {
            "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "full_name": full_name,
            "role": role,
            "phone": phone
        }

    @staticmethod
    async def create_profile(profile_repo: ProfileRepository, **overrides) -> Profile:
        """Create a test profile in the database."""
        return await profile_repo.create_profile(ProfileFactory.create_profile_data(**overrides))


class PropertyFactory:
    """Factory for creating test listings."""

    @staticmethod
    def create_property_data(
        seller_id: uuid.UUID,
        title: str = "Modern 2BR Apartment Downtown",
        description: str = "Bright apartment close to shops, schools and public transport.",
        property_type: PropertyType = PropertyType.RENT,
        price: Decimal = Decimal("1500.00"),
        location: str = "123 Main St",
        bedrooms: int = 2,
        bathrooms: int = 1,
        area_sqft: Optional[int] = 850,
        available_from: Optional[date] = None,
        available_to: Optional[date] = None,
        status: PropertyStatus = PropertyStatus.ACTIVE,
        created_at: Optional[datetime] = None
    ) -> dict:
        data = {
            "seller_id": seller_id,
            "title": title,
            "description": description,
            "property_type": property_type,
            "price": price,
            "location": location,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "area_sqft": area_sqft,
            "available_from": available_from,
            "available_to": available_to,
            "status": status
        }
        if created_at is not None:
            data["created_at"] = created_at
        return data

    @staticmethod
    async def create_property(property_repo: PropertyRepository, seller_id: uuid.UUID, **overrides) -> Property:
        """Create a test listing in the database."""
        return await property_repo.create_property(
            PropertyFactory.create_property_data(seller_id, **overrides)
        )


def minutes_ago(minutes: int) -> datetime:
    """Creation time in the past, for ordering tests."""
    return utcnow() - timedelta(minutes=minutes)


def listing_form(**overrides) -> Dict[str, str]:
    """A valid listing form as a browser would submit it."""
    form = {
        "title": "Modern 2BR Apartment Downtown",
        "description": "Bright apartment close to shops, schools and public transport.",
        "property_type": "rent",
        "price": "1500",
        "location": "123 Main St",
        "bedrooms": "2",
        "bathrooms": "1",
        "area_sqft": "850",
        "available_from": "",
        "available_to": ""
    }
    form.update(overrides)
    return form


def auth_headers(profile: Profile) -> Dict[str, str]:
    """Bearer header for a profile."""
    token = create_access_token(profile.id, profile.email, profile.role)
    return {"Authorization": f"Bearer {token}"}


def session_for(profile: Profile) -> Session:
    """Session of a signed-in profile, as restored from its token."""
    user = ProfileResponse.model_validate(profile)
    return Session(user=user, role=user.role)


# Common test fixtures
@pytest.fixture
async def test_seller(profile_repository: ProfileRepository) -> Profile:
    """Create a test seller."""
    return await ProfileFactory.create_profile(
        profile_repository,
        email="seller@test.com",
        full_name="Ayesha Khan",
        role=UserRole.SELLER,
        phone="+92 300 1234567"
    )


@pytest.fixture
async def other_seller(profile_repository: ProfileRepository) -> Profile:
    """Create a second seller."""
    return await ProfileFactory.create_profile(
        profile_repository,
        email="other.seller@test.com",
        full_name="Bilal Ahmed",
        role=UserRole.SELLER,
        phone="0300-7654321"
    )


@pytest.fixture
async def test_buyer(profile_repository: ProfileRepository) -> Profile:
    """Create a test buyer."""
    return await ProfileFactory.create_profile(
        profile_repository,
        email="buyer@test.com",
        full_name="Sara Malik",
        role=UserRole.BUYER
    )


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_seller: Profile) -> Property:
    """Create a test rental listing."""
    return await PropertyFactory.create_property(property_repository, test_seller.id)


@pytest.fixture
def seller_session(test_seller: Profile) -> Session:
    return session_for(test_seller)


@pytest.fixture
def buyer_session(test_buyer: Profile) -> Session:
    return session_for(test_buyer)
