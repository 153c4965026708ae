"""
PropertyImage model for listing photos.
Images are stored by the backend's storage service; only the public URL is kept here.
"""

from sqlalchemy import String, Integer, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from tumharaghar.database import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tumharaghar.models.property import Property


class PropertyImage(Base):
    """Image attached to a property listing."""

    __tablename__ = "property_images"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this image belongs to"
    )

    image_url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        comment="Public URL of the stored image"
    )

    display_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Display order for the image gallery"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="images"
    )

    def __repr__(self) -> str:
        return f"<PropertyImage(id={self.id}, property_id={self.property_id})>"
