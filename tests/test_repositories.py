"""
Tests for the repository layer against an in-memory database.
"""

import pytest
import uuid
from decimal import Decimal
from sqlalchemy.exc import IntegrityError

from tumharaghar.models.profile import Profile, UserRole
from tumharaghar.models.property import PropertyStatus, PropertyType
from tumharaghar.repositories.base import decode_row
from tumharaghar.repositories.image import ImageRepository
from tumharaghar.repositories.profile import ProfileRepository
from tumharaghar.repositories.property import PropertyRepository, PropertySearchFilters
from tumharaghar.schemas.property import PropertyRecord
from tumharaghar.schemas.profile import SellerProfile
from tumharaghar.utils.exceptions import ShapeError
from tests.conftest import ProfileFactory, PropertyFactory, TEST_PASSWORD, minutes_ago


class TestProfileRepository:
    """Test ProfileRepository functionality."""

    @pytest.mark.asyncio
    async def test_create_profile_hashes_password(self, profile_repository: ProfileRepository):
        profile = await ProfileFactory.create_profile(profile_repository, email="New.User@Example.com")

        assert profile.email == "new.user@example.com"
        assert profile.hashed_password != TEST_PASSWORD
        assert profile.verify_password(TEST_PASSWORD)
        assert profile.role == UserRole.BUYER

    @pytest.mark.asyncio
    async def test_create_duplicate_email(self, profile_repository: ProfileRepository, test_buyer: Profile):
        with pytest.raises(ValueError, match="already exists"):
            await ProfileFactory.create_profile(profile_repository, email="BUYER@test.com")

    @pytest.mark.asyncio
    async def test_get_by_email_is_case_insensitive(self, profile_repository: ProfileRepository, test_buyer: Profile):
        found = await profile_repository.get_by_email("  Buyer@Test.com ")
        assert found.id == test_buyer.id

    @pytest.mark.asyncio
    async def test_authenticate(self, profile_repository: ProfileRepository, test_seller: Profile):
        assert (await profile_repository.authenticate("seller@test.com", TEST_PASSWORD)).id == test_seller.id
        assert await profile_repository.authenticate("seller@test.com", "wrong-password") is None
        assert await profile_repository.authenticate("nobody@test.com", TEST_PASSWORD) is None


class TestPropertyRepository:
    """Test PropertyRepository functionality."""

    @pytest.mark.asyncio
    async def test_create_property_returns_images(
        self, property_repository: PropertyRepository, test_seller: Profile
    ):
        created = await PropertyFactory.create_property(property_repository, test_seller.id)

        assert created.id is not None
        assert created.seller_id == test_seller.id
        assert created.price == Decimal("1500.00")
        assert created.images == []

    @pytest.mark.asyncio
    async def test_list_is_newest_first_and_active_only(
        self, property_repository: PropertyRepository, test_seller: Profile
    ):
        await PropertyFactory.create_property(
            property_repository, test_seller.id, title="Oldest listing", created_at=minutes_ago(30)
        )
        await PropertyFactory.create_property(
            property_repository, test_seller.id, title="Newest listing", created_at=minutes_ago(1)
        )
        await PropertyFactory.create_property(
            property_repository, test_seller.id, title="Middle listing", created_at=minutes_ago(10)
        )
        await PropertyFactory.create_property(
            property_repository, test_seller.id, title="Sold listing",
            status=PropertyStatus.SOLD, created_at=minutes_ago(0)
        )

        listings = await property_repository.list_properties()

        assert [p.title for p in listings] == ["Newest listing", "Middle listing", "Oldest listing"]

    @pytest.mark.asyncio
    async def test_list_filters_by_type(self, property_repository: PropertyRepository, test_seller: Profile):
        await PropertyFactory.create_property(property_repository, test_seller.id, title="Rental flat")
        await PropertyFactory.create_property(
            property_repository, test_seller.id, title="House for sale", property_type=PropertyType.SALE
        )

        sales = await property_repository.list_properties(PropertySearchFilters(property_type=PropertyType.SALE))

        assert [p.title for p in sales] == ["House for sale"]

    @pytest.mark.asyncio
    async def test_get_latest_limits(self, property_repository: PropertyRepository, test_seller: Profile):
        for i in range(4):
            await PropertyFactory.create_property(
                property_repository, test_seller.id, title=f"Listing number {i}", created_at=minutes_ago(10 - i)
            )

        latest = await property_repository.get_latest(2)

        assert [p.title for p in latest] == ["Listing number 3", "Listing number 2"]

    @pytest.mark.asyncio
    async def test_list_by_seller_includes_every_status(
        self, property_repository: PropertyRepository, test_seller: Profile, other_seller: Profile
    ):
        await PropertyFactory.create_property(property_repository, test_seller.id, title="Active listing")
        await PropertyFactory.create_property(
            property_repository, test_seller.id, title="Rented listing", status=PropertyStatus.RENTED
        )
        await PropertyFactory.create_property(property_repository, other_seller.id, title="Someone else's")

        own = await property_repository.list_by_seller(test_seller.id)

        assert sorted(p.title for p in own) == ["Active listing", "Rented listing"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides", [
        {"price": Decimal("0")},
        {"bedrooms": -1},
        {"bathrooms": -1},
        {"area_sqft": 0},
    ])
    async def test_table_constraints_reject_invalid_rows(
        self, property_repository: PropertyRepository, test_seller: Profile, overrides
    ):
        seller_id = test_seller.id
        with pytest.raises(IntegrityError):
            await PropertyFactory.create_property(property_repository, seller_id, **overrides)

        assert await property_repository.count() == 0

    @pytest.mark.asyncio
    async def test_update_owned_property(
        self, property_repository: PropertyRepository, test_property, test_seller: Profile
    ):
        updated = await property_repository.update_owned_property(
            test_property.id, test_seller.id, {"price": Decimal("1800"), "status": PropertyStatus.INACTIVE}
        )

        assert updated.price == Decimal("1800")
        assert updated.status == PropertyStatus.INACTIVE

    @pytest.mark.asyncio
    async def test_update_scoped_to_seller(
        self, property_repository: PropertyRepository, test_property, other_seller: Profile
    ):
        property_id = test_property.id
        result = await property_repository.update_owned_property(
            property_id, other_seller.id, {"title": "Hijacked listing"}
        )

        assert result is None
        unchanged = await property_repository.get_property_with_images(property_id)
        assert unchanged.title == "Modern 2BR Apartment Downtown"

    @pytest.mark.asyncio
    async def test_delete_scoped_to_seller(
        self, property_repository: PropertyRepository, test_property, test_seller: Profile, other_seller: Profile
    ):
        property_id = test_property.id
        assert await property_repository.delete_owned_property(property_id, other_seller.id) is False
        assert await property_repository.get_property_with_images(property_id) is not None

        assert await property_repository.delete_owned_property(property_id, test_seller.id) is True
        assert await property_repository.get_property_with_images(property_id) is None

    @pytest.mark.asyncio
    async def test_delete_unknown_property(self, property_repository: PropertyRepository, test_seller: Profile):
        assert await property_repository.delete_owned_property(uuid.uuid4(), test_seller.id) is False


class TestImageRepository:
    """Test ImageRepository functionality."""

    @pytest.mark.asyncio
    async def test_images_append_in_order(
        self, image_repository: ImageRepository, property_repository: PropertyRepository, test_property
    ):
        first = await image_repository.add_image(test_property.id, "https://cdn.example.com/a.jpg")
        second = await image_repository.add_image(test_property.id, "https://cdn.example.com/b.jpg")
        cover = await image_repository.add_image(test_property.id, "https://cdn.example.com/cover.jpg", 0)

        assert first.display_order == 0
        assert second.display_order == 1
        assert cover.display_order == 0

        listing = await property_repository.get_property_with_images(test_property.id)
        assert [i.image_url for i in listing.images] == [
            "https://cdn.example.com/a.jpg",
            "https://cdn.example.com/cover.jpg",
            "https://cdn.example.com/b.jpg",
        ]

    @pytest.mark.asyncio
    async def test_images_removed_with_property(
        self,
        image_repository: ImageRepository,
        property_repository: PropertyRepository,
        test_property,
        test_seller: Profile
    ):
        property_id = test_property.id
        await image_repository.add_image(property_id, "https://cdn.example.com/a.jpg")

        await property_repository.delete_owned_property(property_id, test_seller.id)

        assert await image_repository.count({"property_id": property_id}) == 0


class TestDecodeRow:
    """Test decoding rows into typed records."""

    @pytest.mark.asyncio
    async def test_decode_property(self, test_property):
        record = decode_row(PropertyRecord, test_property)

        assert record.id == test_property.id
        assert record.property_type == PropertyType.RENT
        assert record.images == []

    @pytest.mark.asyncio
    async def test_decode_profile_as_seller(self, test_seller: Profile):
        seller = decode_row(SellerProfile, test_seller)
        assert seller.phone == "+92 300 1234567"

    def test_malformed_row_raises_shape_error(self):
        class Row:
            id = "not-a-uuid"
            full_name = None
            email = "seller@test.com"
            phone = None

        with pytest.raises(ShapeError) as exc_info:
            decode_row(SellerProfile, Row())

        assert exc_info.value.status_code == 502
        assert "SellerProfile" in exc_info.value.detail
