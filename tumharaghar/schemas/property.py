"""
Pydantic schemas for property requests and responses.
Form schemas carry raw values; typed records are decoded from database rows.
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing import Any, List, Optional
from datetime import date, datetime
from decimal import Decimal
import uuid

from tumharaghar.models.property import PropertyType, PropertyStatus
from tumharaghar.schemas.profile import SellerProfile


class PropertyForm(BaseModel):
    """
    Listing form as submitted by the create page or an API client.

    Numbers and dates arrive as strings from HTML forms and as numbers from
    JSON; both are kept as text so the validation layer can report its own
    messages.
    """

    title: Optional[str] = Field(None, examples=["Modern 2BR Apartment Downtown"])
    description: Optional[str] = Field(
        None,
        examples=["Bright apartment close to shops, schools and public transport."]
    )
    property_type: Optional[str] = Field(None, examples=["rent"])
    price: Optional[str] = Field(None, examples=["1500"])
    location: Optional[str] = Field(None, examples=["123 Main St"])
    bedrooms: Optional[str] = Field(None, examples=["2"])
    bathrooms: Optional[str] = Field(None, examples=["1"])
    area_sqft: Optional[str] = Field(None, examples=["850"])
    available_from: Optional[str] = Field(None, examples=["2024-01-01"])
    available_to: Optional[str] = Field(None, examples=["2024-12-31"])

    @field_validator(
        "title", "description", "property_type", "price", "location", "bedrooms",
        "bathrooms", "area_sqft", "available_from", "available_to",
        mode="before"
    )
    @classmethod
    def stringify(cls, v: Any) -> Optional[str]:
        """Accept numbers, dates and enums as their text form."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (PropertyType, PropertyStatus)):
            return v.value
        if isinstance(v, date):
            return v.isoformat()
        return str(v)


class PropertyUpdateForm(PropertyForm):
    """Partial listing update; only submitted fields are changed."""

    status: Optional[PropertyStatus] = Field(None, description="Listing status")


class PropertyImageResponse(BaseModel):
    """Image attached to a listing."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    property_id: uuid.UUID
    image_url: str
    display_order: int = 0
    created_at: datetime


class ImageCreate(BaseModel):
    """Attach an already stored image to a listing by its public URL."""

    image_url: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="Public URL of the stored image",
        examples=["https://cdn.example.com/listings/front.jpg"]
    )
    display_order: Optional[int] = Field(
        None,
        ge=0,
        description="Gallery position; appended at the end when omitted"
    )


class PropertyRecord(BaseModel):
    """Typed listing decoded from a database row, with its images."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    seller_id: uuid.UUID
    title: str
    description: str
    property_type: PropertyType
    price: Decimal
    location: str
    bedrooms: int
    bathrooms: int
    area_sqft: Optional[int] = None
    available_from: Optional[date] = None
    available_to: Optional[date] = None
    status: PropertyStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    images: List[PropertyImageResponse] = Field(default_factory=list)

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)

    @property
    def thumbnail_url(self) -> Optional[str]:
        return self.images[0].image_url if self.images else None


class PropertyListResponse(BaseModel):
    """List of listings."""

    properties: List[PropertyRecord]
    total: int


class ContactLinks(BaseModel):
    """Ways to reach a listing's seller. Missing phone means no phone links."""

    whatsapp: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class PropertyDetailResponse(BaseModel):
    """Listing with its seller and contact links."""

    property: PropertyRecord
    seller: SellerProfile
    contact: ContactLinks


class WhatsAppLinkResponse(BaseModel):
    url: str
