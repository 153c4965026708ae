"""
Property model for rental and sale listings.
Handles listing data, pricing, availability and image relationships.
"""

from sqlalchemy import String, Text, Integer, Numeric, Date, Enum as SQLEnum, Index, ForeignKey, Uuid, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from tumharaghar.database import Base
from datetime import date
from decimal import Decimal
import enum
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from tumharaghar.models.profile import Profile
    from tumharaghar.models.image import PropertyImage


class PropertyType(str, enum.Enum):
    """Property type enumeration for rental or sale listings."""
    RENT = "rent"
    SALE = "sale"


class PropertyStatus(str, enum.Enum):
    """Listing lifecycle status. Only active listings are public."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    RENTED = "rented"
    SOLD = "sold"


class Property(Base):
    """
    Property listing owned by a seller.
    """

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_properties_price_positive"),
        CheckConstraint("bedrooms >= 0", name="ck_properties_bedrooms_non_negative"),
        CheckConstraint("bathrooms >= 0", name="ck_properties_bathrooms_non_negative"),
        CheckConstraint("area_sqft IS NULL OR area_sqft > 0", name="ck_properties_area_positive"),
    )

    seller_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Profile ID of the seller who owns this listing"
    )

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Property listing title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed property description"
    )

    property_type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType),
        nullable=False,
        comment="Property type - rent or sale"
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Price in local currency, monthly for rentals"
    )

    location: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Property location/address"
    )

    bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of bedrooms"
    )

    bathrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of bathrooms"
    )

    area_sqft: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Property area in square feet"
    )

    available_from: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        comment="First day a rental is available"
    )

    available_to: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        comment="Last day a rental is available"
    )

    status: Mapped[PropertyStatus] = mapped_column(
        SQLEnum(PropertyStatus),
        nullable=False,
        default=PropertyStatus.ACTIVE,
        comment="Listing status"
    )

    seller: Mapped["Profile"] = relationship(
        "Profile",
        back_populates="properties"
    )

    images: Mapped[List["PropertyImage"]] = relationship(
        "PropertyImage",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="[PropertyImage.display_order, PropertyImage.created_at]"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}..., price={self.price})>"


# Public listing index: active listings of a type, newest first
status_type_created_index = Index(
    'idx_properties_status_type_created',
    Property.status,
    Property.property_type,
    Property.created_at.desc()
)

# Seller dashboard: a seller's listings, newest first
seller_created_index = Index(
    'idx_properties_seller_created',
    Property.seller_id,
    Property.created_at.desc()
)
