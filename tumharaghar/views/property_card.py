"""
Listing card view built from a typed property record.
"""

from tumharaghar.config import settings
from tumharaghar.models.property import PropertyType
from tumharaghar.schemas.pages import PropertyCardView
from tumharaghar.schemas.property import PropertyRecord
from tumharaghar.services.contact import format_price, price_suffix


def placeholder_image(index: int) -> str:
    """Stand-in image for a listing without photos, picked by its grid position."""
    placeholders = settings.placeholder_images
    return placeholders[index % len(placeholders)]


def build_property_card(record: PropertyRecord, index: int = 0) -> PropertyCardView:
    """
    Card for one listing.

    Args:
        record: Listing with its images
        index: Position of the card in its grid
    """
    return PropertyCardView(
        id=record.id,
        href=f"/property/{record.id}",
        title=record.title,
        location=record.location,
        image_url=record.thumbnail_url or placeholder_image(index),
        badge="For Rent" if record.property_type == PropertyType.RENT else "For Sale",
        property_type=record.property_type,
        price_label=f"{settings.currency} {format_price(record.price)}",
        price_suffix=price_suffix(record.property_type),
        bedrooms=record.bedrooms,
        bathrooms=record.bathrooms,
        area_label=f"{record.area_sqft:,} sqft" if record.area_sqft else None
    )
