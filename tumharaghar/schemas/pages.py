"""
View-models returned by the page routes.
Each page carries the header and the notifications pending for it.
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional
import uuid

from tumharaghar.models.property import PropertyType
from tumharaghar.schemas.profile import SellerProfile
from tumharaghar.schemas.property import ContactLinks, PropertyRecord


class Notification(BaseModel):
    """Toast shown once on the next rendered page."""

    variant: Literal["default", "destructive"] = "default"
    title: str
    description: Optional[str] = None

    @classmethod
    def success(cls, title: str, description: Optional[str] = None) -> "Notification":
        return cls(variant="default", title=title, description=description)

    @classmethod
    def error(cls, title: str, description: Optional[str] = None) -> "Notification":
        return cls(variant="destructive", title=title, description=description)


class NavLink(BaseModel):
    label: str
    href: str


class HeaderView(BaseModel):
    """Site header: brand, navigation and the sign-in or sign-out action."""

    brand: str
    home_href: str = "/"
    links: List[NavLink] = Field(default_factory=list)
    is_authenticated: bool = False
    user_name: Optional[str] = None
    action: NavLink


class PropertyCardView(BaseModel):
    """Listing card used by every listing grid."""

    id: uuid.UUID
    href: str
    title: str
    location: str
    image_url: str
    badge: str
    property_type: PropertyType
    price_label: str
    price_suffix: Optional[str] = None
    bedrooms: int
    bathrooms: int
    area_label: Optional[str] = None


class Page(BaseModel):
    title: str
    header: HeaderView
    notifications: List[Notification] = Field(default_factory=list)


class HomePage(Page):
    tagline: str
    search_href: str = "/properties"
    featured: List[PropertyCardView] = Field(default_factory=list)


class PropertiesPage(Page):
    property_type: str = "all"
    search: str = ""
    cards: List[PropertyCardView] = Field(default_factory=list)
    empty_message: Optional[str] = None


class PropertyDetailPage(Page):
    property: PropertyRecord
    seller: SellerProfile
    price_label: str
    contact: ContactLinks
    image_urls: List[str] = Field(default_factory=list)
    is_owner: bool = False


class AuthPage(Page):
    mode: Literal["sign-in", "sign-up"] = "sign-in"
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    error: Optional[str] = None


class DashboardCard(BaseModel):
    title: str
    description: str
    href: str


class BuyerDashboardPage(Page):
    welcome: str
    cards: List[DashboardCard] = Field(default_factory=list)


class SellerListingRow(BaseModel):
    card: PropertyCardView
    status: str
    edit_href: str
    delete_action: str


class DeleteConfirmation(BaseModel):
    """Pending delete awaiting the seller's confirmation."""

    property_id: uuid.UUID
    title: str
    message: str
    confirmation_token: str
    confirm_action: str
    cancel_action: str


class SellerDashboardPage(Page):
    welcome: str
    create_href: str = "/create-property"
    listings: List[SellerListingRow] = Field(default_factory=list)
    empty_message: Optional[str] = None
    pending_delete: Optional[DeleteConfirmation] = None
    is_deleting: bool = False


class PropertyFormPage(Page):
    action: str
    submit_label: str
    values: dict = Field(default_factory=dict)
    property_types: List[str] = Field(default_factory=lambda: [t.value for t in PropertyType])
    show_availability: bool = True
    error: Optional[str] = None
    error_field: Optional[str] = None


__all__ = [
    "Notification",
    "NavLink",
    "HeaderView",
    "PropertyCardView",
    "Page",
    "HomePage",
    "PropertiesPage",
    "PropertyDetailPage",
    "AuthPage",
    "DashboardCard",
    "BuyerDashboardPage",
    "SellerListingRow",
    "DeleteConfirmation",
    "SellerDashboardPage",
    "PropertyFormPage",
]
