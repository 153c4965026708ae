"""
Property repository for listing queries and seller-scoped writes.
Every write that touches an existing listing is scoped to its seller.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, desc
from tumharaghar.repositories.base import BaseRepository
from tumharaghar.models.property import Property, PropertyType, PropertyStatus
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertySearchFilters:
    """Data class for property list filters."""

    def __init__(
        self,
        property_type: Optional[PropertyType] = None,
        status: Optional[PropertyStatus] = PropertyStatus.ACTIVE,
        seller_id: Optional[uuid.UUID] = None
    ):
        self.property_type = property_type
        self.status = status
        self.seller_id = seller_id


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Images are loaded with every listing and ordered for display.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def list_properties(
        self,
        filters: Optional[PropertySearchFilters] = None,
        limit: Optional[int] = None
    ) -> List[Property]:
        """
        List properties newest first.

        Args:
            filters: Type, status and seller filters; defaults to active listings of any type
            limit: Maximum number of listings to return

        Returns:
            List of properties with their images
        """
        filters = filters or PropertySearchFilters()
        try:
            query = select(Property)

            if filters.status is not None:
                query = query.where(Property.status == filters.status)
            if filters.property_type is not None:
                query = query.where(Property.property_type == filters.property_type)
            if filters.seller_id is not None:
                query = query.where(Property.seller_id == filters.seller_id)

            query = query.order_by(desc(Property.created_at))
            if limit is not None:
                query = query.limit(limit)

            result = await self.db.execute(query)
            properties = result.scalars().all()

            logger.debug(f"Retrieved {len(properties)} properties")
            return list(properties)
        except Exception as e:
            logger.error(f"Failed to list properties: {e}")
            raise

    async def get_latest(self, limit: int) -> List[Property]:
        """Newest active listings for the home page."""
        return await self.list_properties(PropertySearchFilters(), limit=limit)

    async def list_by_seller(self, seller_id: uuid.UUID) -> List[Property]:
        """All of a seller's listings regardless of status, newest first."""
        return await self.list_properties(
            PropertySearchFilters(status=None, seller_id=seller_id)
        )

    async def get_property_with_images(self, property_id: uuid.UUID) -> Optional[Property]:
        """
        Get a single property with its images.

        Returns:
            Property or None if not found
        """
        return await self.get_by_id(property_id)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Insert a listing and read it back with its (empty) image list.

        Raises:
            Exception: If database operation fails
        """
        created = await self.create(property_data)
        logger.info(f"Created property: {created.title} (ID: {created.id})")
        return await self.get_property_with_images(created.id)

    async def update_owned_property(
        self,
        property_id: uuid.UUID,
        seller_id: uuid.UUID,
        values: Dict[str, Any]
    ) -> Optional[Property]:
        """
        Update a listing only if it belongs to the seller.

        Returns:
            Updated property, or None when no row matched both ids
        """
        try:
            if values:
                stmt = (
                    update(Property)
                    .where(Property.id == property_id, Property.seller_id == seller_id)
                    .values(**values)
                )
                result = await self.db.execute(stmt)
                if result.rowcount == 0:
                    await self.db.rollback()
                    logger.debug(f"Property {property_id} of seller {seller_id} not found for update")
                    return None
                await self.db.commit()
                logger.info(f"Updated property {property_id}: {', '.join(values)}")

            property_obj = await self.get_property_with_images(property_id)
            if property_obj is None or property_obj.seller_id != seller_id:
                return None
            return property_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update property {property_id}: {e}")
            raise

    async def delete_owned_property(self, property_id: uuid.UUID, seller_id: uuid.UUID) -> bool:
        """
        Delete a listing scoped to its seller.

        Returns:
            True when exactly the seller's row was removed, False when nothing matched
        """
        try:
            stmt = delete(Property).where(
                Property.id == property_id,
                Property.seller_id == seller_id
            )
            result = await self.db.execute(stmt)
            await self.db.commit()

            deleted = result.rowcount > 0
            if deleted:
                logger.info(f"Deleted property {property_id} of seller {seller_id}")
            else:
                logger.debug(f"Property {property_id} of seller {seller_id} not found for deletion")
            return deleted
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete property {property_id}: {e}")
            raise
