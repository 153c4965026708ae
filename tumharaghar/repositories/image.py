"""
Repository for PropertyImage model operations.
Only image URLs are stored; the files live in external storage.
"""

import uuid
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from tumharaghar.models.image import PropertyImage
from tumharaghar.repositories.base import BaseRepository


class ImageRepository(BaseRepository[PropertyImage]):
    """Repository for PropertyImage database operations."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(PropertyImage, db_session)

    async def add_image(
        self,
        property_id: uuid.UUID,
        image_url: str,
        display_order: Optional[int] = None
    ) -> PropertyImage:
        """Attach an image URL to a property, appending it to the gallery by default."""
        if display_order is None:
            display_order = await self.count({"property_id": property_id})

        return await self.create({
            "property_id": property_id,
            "image_url": image_url,
            "display_order": display_order,
        })
