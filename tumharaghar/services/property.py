"""
Property service for listing queries and seller listing management.
Validates input before any write and decodes every row into a typed record.
"""

from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from tumharaghar.config import settings
from tumharaghar.repositories.base import decode_row
from tumharaghar.repositories.property import PropertyRepository, PropertySearchFilters
from tumharaghar.repositories.profile import ProfileRepository
from tumharaghar.repositories.image import ImageRepository
from tumharaghar.models.property import PropertyStatus, PropertyType
from tumharaghar.schemas.auth import Session
from tumharaghar.schemas.profile import SellerProfile
from tumharaghar.schemas.property import ContactLinks, PropertyImageResponse, PropertyRecord
from tumharaghar.services.contact import mailto_link, tel_link, whatsapp_link
from tumharaghar.utils.validators import PropertyValidator
from tumharaghar.utils.exceptions import (
    APIException,
    GatewayError,
    InsufficientPermissionsError,
    NotFoundError,
    UnauthorizedError,
    UnexpectedError,
    ValidationError
)
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for browsing listings and managing a seller's own listings.
    Database failures surface as GatewayError; nothing is retried.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.profile_repo = ProfileRepository(db_session)
        self.image_repo = ImageRepository(db_session)

    @staticmethod
    def _gateway_failure(action: str, error: Exception) -> APIException:
        """Map a non-API failure to the error surfaced to callers."""
        if isinstance(error, SQLAlchemyError):
            logger.error(f"Database error while trying to {action}: {error}")
            return GatewayError()
        logger.exception(f"Unexpected error while trying to {action}: {error}")
        return UnexpectedError()

    @staticmethod
    def _require_seller(session: Session) -> uuid.UUID:
        if not session.is_authenticated:
            raise UnauthorizedError()
        if not session.is_seller:
            raise InsufficientPermissionsError("manage listings")
        return session.user.id

    @staticmethod
    def parse_property_type(value: Optional[str]) -> Optional[PropertyType]:
        """Type filter from a query value; "all", empty and None mean no filter."""
        if value is None or isinstance(value, PropertyType):
            return value
        text = value.strip().lower()
        if text in ("", "all"):
            return None
        try:
            return PropertyType(text)
        except ValueError:
            raise ValidationError.for_field("property_type", "Property type must be rent, sale or all")

    def _decode_all(self, properties) -> List[PropertyRecord]:
        return [decode_row(PropertyRecord, p) for p in properties]

    async def list_properties(self, property_type: Optional[PropertyType] = None) -> List[PropertyRecord]:
        """
        Active listings newest first, optionally of one type.

        Raises:
            GatewayError: If the query fails
        """
        try:
            properties = await self.property_repo.list_properties(
                PropertySearchFilters(property_type=property_type)
            )
            return self._decode_all(properties)
        except APIException:
            raise
        except Exception as e:
            raise self._gateway_failure("list properties", e)

    async def get_latest_properties(self, limit: Optional[int] = None) -> List[PropertyRecord]:
        """Newest active listings for the home page."""
        try:
            properties = await self.property_repo.get_latest(limit or settings.featured_listing_count)
            return self._decode_all(properties)
        except APIException:
            raise
        except Exception as e:
            raise self._gateway_failure("load latest properties", e)

    async def get_property_by_id(
        self,
        property_id: uuid.UUID,
        viewer: Optional[Session] = None
    ) -> PropertyRecord:
        """
        Single listing with its images.

        Listings that are not active are only visible to their seller.

        Raises:
            NotFoundError: If no visible listing has this id
            GatewayError: If the query fails
        """
        try:
            property_obj = await self.property_repo.get_property_with_images(property_id)
        except Exception as e:
            raise self._gateway_failure(f"load property {property_id}", e)

        if property_obj is None:
            raise NotFoundError("Property", str(property_id))

        record = decode_row(PropertyRecord, property_obj)
        is_owner = viewer is not None and viewer.user is not None and viewer.user.id == record.seller_id
        if record.status != PropertyStatus.ACTIVE and not is_owner:
            logger.debug(f"Property {property_id} is {record.status.value}; hidden from viewer")
            raise NotFoundError("Property", str(property_id))

        return record

    async def get_seller_profile(self, seller_id: uuid.UUID) -> SellerProfile:
        """
        Raises:
            NotFoundError: If the seller's profile does not exist
        """
        try:
            profile = await self.profile_repo.get_by_id(seller_id)
        except Exception as e:
            raise self._gateway_failure(f"load seller profile {seller_id}", e)

        if profile is None:
            raise NotFoundError("Seller profile", str(seller_id))
        return decode_row(SellerProfile, profile)

    @staticmethod
    def contact_links(record: PropertyRecord, seller: SellerProfile) -> ContactLinks:
        """Contact links for a listing; phone links are omitted when the seller has no phone."""
        links = ContactLinks(email=mailto_link(seller.email))
        if seller.phone and any(ch.isdigit() for ch in seller.phone):
            links.whatsapp = whatsapp_link(seller.phone, record.title, record.price, record.property_type)
            links.phone = tel_link(seller.phone)
        return links

    async def create_property(self, form: Mapping[str, Any], session: Session) -> PropertyRecord:
        """
        Validate and insert a listing owned by the session's seller.

        Raises:
            UnauthorizedError: If nobody is signed in
            InsufficientPermissionsError: If the session is not a seller
            ValidationError: If a field breaks its rule; nothing is written
            GatewayError: If the insert fails
        """
        seller_id = self._require_seller(session)
        values = PropertyValidator.validate_create(form)
        values["seller_id"] = seller_id
        values["status"] = PropertyStatus.ACTIVE

        try:
            property_obj = await self.property_repo.create_property(values)
            record = decode_row(PropertyRecord, property_obj)
        except APIException:
            raise
        except Exception as e:
            raise self._gateway_failure("create property", e)

        logger.info(f"Property created by {session.user.email}: {record.title} (ID: {record.id})")
        return record

    async def list_own_properties(self, session: Session) -> List[PropertyRecord]:
        """Every listing of the session's seller, any status, newest first."""
        seller_id = self._require_seller(session)
        try:
            properties = await self.property_repo.list_by_seller(seller_id)
            return self._decode_all(properties)
        except APIException:
            raise
        except Exception as e:
            raise self._gateway_failure("list seller properties", e)

    async def delete_property(self, property_id: uuid.UUID, session: Session) -> None:
        """
        Delete one of the session's listings.

        Raises:
            NotFoundError: If no listing with this id belongs to the seller
            GatewayError: If the delete fails
        """
        seller_id = self._require_seller(session)
        try:
            deleted = await self.property_repo.delete_owned_property(property_id, seller_id)
        except Exception as e:
            raise self._gateway_failure(f"delete property {property_id}", e)

        if not deleted:
            raise NotFoundError("Property", str(property_id))
        logger.info(f"Property {property_id} deleted by {session.user.email}")

    async def _get_owned(self, property_id: uuid.UUID, seller_id: uuid.UUID) -> PropertyRecord:
        try:
            property_obj = await self.property_repo.get_property_with_images(property_id)
        except Exception as e:
            raise self._gateway_failure(f"load property {property_id}", e)

        if property_obj is None or property_obj.seller_id != seller_id:
            raise NotFoundError("Property", str(property_id))
        return decode_row(PropertyRecord, property_obj)

    async def get_own_property(self, property_id: uuid.UUID, session: Session) -> PropertyRecord:
        """One of the session's listings, any status."""
        return await self._get_owned(property_id, self._require_seller(session))

    async def update_property(
        self,
        property_id: uuid.UUID,
        changes: Mapping[str, Any],
        session: Session
    ) -> PropertyRecord:
        """
        Apply a partial update to one of the session's listings.

        Args:
            property_id: Listing to change
            changes: Submitted fields only; "status" may change the listing status
            session: Session of the owning seller

        Raises:
            NotFoundError: If the listing does not belong to the seller
            ValidationError: If a changed field breaks its rule
        """
        seller_id = self._require_seller(session)
        current = await self._get_owned(property_id, seller_id)

        changes = dict(changes)
        status = changes.pop("status", None)
        values: Dict[str, Any] = PropertyValidator.validate_update(changes, current.model_dump())
        if status is not None:
            values["status"] = PropertyStatus(status)

        try:
            property_obj = await self.property_repo.update_owned_property(property_id, seller_id, values)
        except Exception as e:
            raise self._gateway_failure(f"update property {property_id}", e)

        if property_obj is None:
            raise NotFoundError("Property", str(property_id))
        return decode_row(PropertyRecord, property_obj)

    async def add_property_image(
        self,
        property_id: uuid.UUID,
        image_url: str,
        session: Session,
        display_order: Optional[int] = None
    ) -> PropertyImageResponse:
        """Attach an image URL to one of the session's listings."""
        seller_id = self._require_seller(session)
        await self._get_owned(property_id, seller_id)

        try:
            image = await self.image_repo.add_image(property_id, image_url.strip(), display_order)
        except Exception as e:
            raise self._gateway_failure(f"add image to property {property_id}", e)

        logger.info(f"Image added to property {property_id}")
        return decode_row(PropertyImageResponse, image)
