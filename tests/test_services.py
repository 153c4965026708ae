"""
Tests for the session provider, listing service and deletion flow.
"""

import pytest
import uuid
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from sqlalchemy.exc import OperationalError

from tumharaghar.models.profile import Profile, UserRole
from tumharaghar.models.property import PropertyStatus, PropertyType
from tumharaghar.repositories.property import PropertyRepository
from tumharaghar.schemas.auth import Session
from tumharaghar.services.auth import SessionProvider, resolve_page_redirect
from tumharaghar.services.deletion import DeletionFlow, DeletionFlowError, DeletionState
from tumharaghar.services.property import PropertyService
from tumharaghar.utils.auth import create_access_token, verify_token
from tumharaghar.utils.exceptions import (
    DuplicateResourceError,
    GatewayError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError
)
from tests.conftest import PropertyFactory, TEST_PASSWORD, listing_form, minutes_ago, session_for


def db_down(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("connection refused"))


class TestSessionProvider:
    """Test sign-in, sign-up and session restore."""

    @pytest.mark.asyncio
    async def test_sign_in_success(self, session_provider: SessionProvider, test_seller: Profile):
        result = await session_provider.sign_in("Seller@Test.com", TEST_PASSWORD)

        assert result.user.id == test_seller.id
        assert result.role == UserRole.SELLER
        assert result.token_type == "bearer"
        assert verify_token(result.access_token).user_id == str(test_seller.id)

    @pytest.mark.asyncio
    async def test_sign_in_wrong_password(self, session_provider: SessionProvider, test_seller: Profile):
        with pytest.raises(InvalidCredentialsError):
            await session_provider.sign_in("seller@test.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_sign_in_validates_before_lookup(self, session_provider: SessionProvider):
        with pytest.raises(ValidationError, match="Invalid email address"):
            await session_provider.sign_in("not-an-email", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_sign_in_database_failure(self, session_provider: SessionProvider):
        with patch.object(session_provider.profile_repo, "get_by_email", AsyncMock(side_effect=db_down)):
            with pytest.raises(GatewayError):
                await session_provider.sign_in("seller@test.com", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_sign_up_creates_seller(self, session_provider: SessionProvider):
        result = await session_provider.sign_up(
            "new.seller@example.com", TEST_PASSWORD, "  Imran Ali ", "seller", "0321-5558888"
        )

        assert result.user.email == "new.seller@example.com"
        assert result.user.full_name == "Imran Ali"
        assert result.user.phone == "0321-5558888"
        assert result.role == UserRole.SELLER

    @pytest.mark.asyncio
    async def test_sign_up_duplicate_email(self, session_provider: SessionProvider, test_buyer: Profile):
        with pytest.raises(DuplicateResourceError) as exc_info:
            await session_provider.sign_up("buyer@test.com", TEST_PASSWORD, "Sara Malik", "buyer")

        assert exc_info.value.status_code == 409
        assert "already registered" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_restore_round_trip(self, session_provider: SessionProvider, test_buyer: Profile):
        token = create_access_token(test_buyer.id, test_buyer.email, test_buyer.role)

        session = await session_provider.restore(token)

        assert session.is_authenticated
        assert session.user.id == test_buyer.id
        assert session.is_buyer

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "garbage.token.value"])
    async def test_restore_invalid_token_is_anonymous(self, session_provider: SessionProvider, token):
        session = await session_provider.restore(token)
        assert not session.is_authenticated
        assert session.role is None

    @pytest.mark.asyncio
    async def test_restore_missing_profile_is_anonymous(self, session_provider: SessionProvider):
        token = create_access_token(uuid.uuid4(), "ghost@test.com", UserRole.BUYER)
        session = await session_provider.restore(token)
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_sign_out(self, session_provider: SessionProvider, buyer_session: Session):
        session = await session_provider.sign_out(buyer_session)
        assert session == Session.anonymous()


class TestPageRedirects:
    """Test the redirect policy for guarded pages."""

    def test_anonymous_to_guarded_page(self):
        assert resolve_page_redirect(Session.anonymous(), UserRole.SELLER) == "/auth"
        assert resolve_page_redirect(Session.anonymous(), UserRole.BUYER) == "/auth"

    def test_wrong_role_goes_to_own_dashboard(self, buyer_session: Session, seller_session: Session):
        assert resolve_page_redirect(buyer_session, UserRole.SELLER) == "/buyer-dashboard"
        assert resolve_page_redirect(seller_session, UserRole.BUYER) == "/seller-dashboard"

    def test_matching_role_renders(self, seller_session: Session):
        assert resolve_page_redirect(seller_session, UserRole.SELLER) is None

    def test_public_page_renders_for_everyone(self, buyer_session: Session):
        assert resolve_page_redirect(Session.anonymous()) is None
        assert resolve_page_redirect(buyer_session) is None

    def test_auth_page(self, buyer_session: Session):
        assert resolve_page_redirect(buyer_session, auth_page=True) == "/"
        assert resolve_page_redirect(Session.anonymous(), auth_page=True) is None


class TestPropertyService:
    """Test listing queries and seller listing management."""

    @pytest.mark.asyncio
    async def test_parse_property_type(self):
        assert PropertyService.parse_property_type("all") is None
        assert PropertyService.parse_property_type("") is None
        assert PropertyService.parse_property_type(None) is None
        assert PropertyService.parse_property_type(" Sale ") == PropertyType.SALE
        with pytest.raises(ValidationError):
            PropertyService.parse_property_type("lease")

    @pytest.mark.asyncio
    async def test_list_properties_decodes_records(
        self, property_service: PropertyService, property_repository: PropertyRepository, test_seller: Profile
    ):
        await PropertyFactory.create_property(
            property_repository, test_seller.id, title="Older rental", created_at=minutes_ago(5)
        )
        await PropertyFactory.create_property(
            property_repository, test_seller.id, title="Newer sale", property_type=PropertyType.SALE
        )

        everything = await property_service.list_properties()
        rentals = await property_service.list_properties(PropertyType.RENT)

        assert [r.title for r in everything] == ["Newer sale", "Older rental"]
        assert [r.title for r in rentals] == ["Older rental"]

    @pytest.mark.asyncio
    async def test_list_properties_database_failure(self, property_service: PropertyService):
        with patch.object(property_service.property_repo, "list_properties", AsyncMock(side_effect=db_down)):
            with pytest.raises(GatewayError):
                await property_service.list_properties()

    @pytest.mark.asyncio
    async def test_get_latest_properties_uses_featured_count(
        self, property_service: PropertyService, property_repository: PropertyRepository, test_seller: Profile
    ):
        for i in range(8):
            await PropertyFactory.create_property(
                property_repository, test_seller.id, title=f"Listing number {i}", created_at=minutes_ago(20 - i)
            )

        latest = await property_service.get_latest_properties()

        assert len(latest) == 6
        assert latest[0].title == "Listing number 7"

    @pytest.mark.asyncio
    async def test_get_property_by_id(self, property_service: PropertyService, test_property):
        record = await property_service.get_property_by_id(test_property.id)
        assert record.title == "Modern 2BR Apartment Downtown"

    @pytest.mark.asyncio
    async def test_get_unknown_property(self, property_service: PropertyService):
        with pytest.raises(NotFoundError):
            await property_service.get_property_by_id(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_inactive_listing_visible_to_owner_only(
        self,
        property_service: PropertyService,
        property_repository: PropertyRepository,
        test_seller: Profile,
        seller_session: Session,
        buyer_session: Session
    ):
        listing = await PropertyFactory.create_property(
            property_repository, test_seller.id, status=PropertyStatus.INACTIVE
        )

        with pytest.raises(NotFoundError):
            await property_service.get_property_by_id(listing.id)
        with pytest.raises(NotFoundError):
            await property_service.get_property_by_id(listing.id, viewer=buyer_session)

        record = await property_service.get_property_by_id(listing.id, viewer=seller_session)
        assert record.status == PropertyStatus.INACTIVE

    @pytest.mark.asyncio
    async def test_get_seller_profile(self, property_service: PropertyService, test_seller: Profile):
        seller = await property_service.get_seller_profile(test_seller.id)
        assert seller.full_name == "Ayesha Khan"
        assert seller.email == "seller@test.com"

    @pytest.mark.asyncio
    async def test_create_property(self, property_service: PropertyService, seller_session: Session):
        record = await property_service.create_property(listing_form(), seller_session)

        assert record.seller_id == seller_session.user.id
        assert record.status == PropertyStatus.ACTIVE
        assert record.price == Decimal("1500")
        assert record.bedrooms == 2

    @pytest.mark.asyncio
    async def test_create_property_requires_seller(
        self, property_service: PropertyService, buyer_session: Session
    ):
        with pytest.raises(UnauthorizedError):
            await property_service.create_property(listing_form(), Session.anonymous())
        with pytest.raises(InsufficientPermissionsError):
            await property_service.create_property(listing_form(), buyer_session)

    @pytest.mark.asyncio
    async def test_create_property_invalid_writes_nothing(
        self, property_service: PropertyService, seller_session: Session
    ):
        with patch.object(property_service.property_repo, "create_property", AsyncMock()) as create:
            with pytest.raises(ValidationError, match="Price must be greater than 0"):
                await property_service.create_property(listing_form(price="0"), seller_session)
            create.assert_not_called()

    @pytest.mark.asyncio
    async def test_sub_cent_price_never_stored_as_zero(
        self, property_service: PropertyService, seller_session: Session
    ):
        with pytest.raises(ValidationError, match="Price must be greater than 0"):
            await property_service.create_property(listing_form(price="0.001"), seller_session)
        assert await property_service.list_own_properties(seller_session) == []

        record = await property_service.create_property(listing_form(price="0.005"), seller_session)
        assert record.price == Decimal("0.01")

    @pytest.mark.asyncio
    async def test_list_own_properties(
        self,
        property_service: PropertyService,
        property_repository: PropertyRepository,
        test_seller: Profile,
        other_seller: Profile,
        seller_session: Session
    ):
        await PropertyFactory.create_property(property_repository, test_seller.id, status=PropertyStatus.SOLD)
        await PropertyFactory.create_property(property_repository, other_seller.id)

        own = await property_service.list_own_properties(seller_session)

        assert len(own) == 1
        assert own[0].status == PropertyStatus.SOLD

    @pytest.mark.asyncio
    async def test_update_property(self, property_service: PropertyService, test_property, seller_session: Session):
        record = await property_service.update_property(
            test_property.id, {"price": "1750", "status": "rented"}, seller_session
        )

        assert record.price == Decimal("1750")
        assert record.status == PropertyStatus.RENTED
        assert record.title == "Modern 2BR Apartment Downtown"

    @pytest.mark.asyncio
    async def test_update_property_not_owned(
        self, property_service: PropertyService, test_property, other_seller: Profile
    ):
        with pytest.raises(NotFoundError):
            await property_service.update_property(
                test_property.id, {"price": "1"}, session_for(other_seller)
            )

    @pytest.mark.asyncio
    async def test_delete_property(self, property_service: PropertyService, test_property, seller_session: Session):
        property_id = test_property.id

        await property_service.delete_property(property_id, seller_session)

        with pytest.raises(NotFoundError):
            await property_service.get_property_by_id(property_id)

    @pytest.mark.asyncio
    async def test_delete_property_not_owned(
        self, property_service: PropertyService, test_property, other_seller: Profile
    ):
        with pytest.raises(NotFoundError):
            await property_service.delete_property(test_property.id, session_for(other_seller))

    @pytest.mark.asyncio
    async def test_add_property_image(self, property_service: PropertyService, test_property, seller_session: Session):
        image = await property_service.add_property_image(
            test_property.id, " https://cdn.example.com/front.jpg ", seller_session
        )

        assert image.image_url == "https://cdn.example.com/front.jpg"
        record = await property_service.get_property_by_id(test_property.id)
        assert record.thumbnail_url == "https://cdn.example.com/front.jpg"


class TestDeletionFlow:
    """Test the Idle -> ConfirmPending -> Deleting -> Idle cycle."""

    def test_request_and_cancel(self):
        flow = DeletionFlow()
        property_id = uuid.uuid4()

        flow.request(property_id)
        assert flow.state == DeletionState.CONFIRM_PENDING
        assert flow.pending_id == property_id

        flow.cancel()
        assert flow.state == DeletionState.IDLE
        assert flow.pending_id is None

    def test_cancel_when_idle(self):
        with pytest.raises(DeletionFlowError):
            DeletionFlow().cancel()

    @pytest.mark.asyncio
    async def test_confirm_without_request(self):
        with pytest.raises(DeletionFlowError):
            await DeletionFlow().confirm(AsyncMock())

    @pytest.mark.asyncio
    async def test_confirm_success(self):
        property_id = uuid.uuid4()
        flow = DeletionFlow.pending(property_id)
        states = []

        async def delete(pending_id):
            states.append(flow.state)
            assert pending_id == property_id

        notification = await flow.confirm(delete)

        assert states == [DeletionState.DELETING]
        assert notification.variant == "default"
        assert notification.title == "Success"
        assert notification.description == "Property deleted successfully."
        assert flow.state == DeletionState.IDLE

    @pytest.mark.asyncio
    async def test_confirm_failure(self):
        flow = DeletionFlow.pending(uuid.uuid4())

        notification = await flow.confirm(AsyncMock(side_effect=GatewayError()))

        assert notification.variant == "destructive"
        assert notification.description == "Failed to delete property."
        assert flow.state == DeletionState.IDLE
        assert flow.pending_id is None
