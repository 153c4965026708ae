"""
Price labels and seller contact links for listing pages.
"""

import re
from decimal import Decimal
from typing import Optional, Union
from urllib.parse import quote

from tumharaghar.config import settings
from tumharaghar.models.property import PropertyType
from tumharaghar.utils.exceptions import ValidationError

PHONE_UNAVAILABLE_MESSAGE = "Seller phone number is not available"

_NON_DIALABLE = re.compile(r"[^\d]")


def format_price(price: Union[Decimal, float, int]) -> str:
    """Group thousands, e.g. 1500 -> "1,500" and 2500.5 -> "2,500.5"."""
    value = Decimal(str(price))
    if value == value.to_integral_value():
        return f"{int(value):,}"
    text = f"{value:,.2f}"
    return text.rstrip("0").rstrip(".")


def price_suffix(property_type: PropertyType) -> Optional[str]:
    return "/mo" if property_type == PropertyType.RENT else None


def price_label(price: Union[Decimal, float, int], property_type: PropertyType) -> str:
    """Full price label, e.g. "PKR 1,500/mo" for rentals."""
    return f"{settings.currency} {format_price(price)}{price_suffix(property_type) or ''}"


def _dialable(phone: Optional[str]) -> str:
    """Digits of a phone number, keeping a leading plus sign."""
    text = (phone or "").strip()
    digits = _NON_DIALABLE.sub("", text)
    if not digits:
        raise ValidationError.for_field("phone", PHONE_UNAVAILABLE_MESSAGE)
    return f"+{digits}" if text.startswith("+") else digits


def whatsapp_link(
    phone: Optional[str],
    title: str,
    price: Union[Decimal, float, int],
    property_type: PropertyType
) -> str:
    """
    WhatsApp chat link with a prefilled enquiry about the listing.

    Raises:
        ValidationError: If the seller has no usable phone number
    """
    number = _dialable(phone)
    message = (
        f'Hi, I\'m interested in your property "{title}" '
        f"listed at {price_label(price, property_type)}."
    )
    return f"https://wa.me/{number}?text={quote(message, safe='')}"


def tel_link(phone: Optional[str]) -> str:
    """
    Raises:
        ValidationError: If the seller has no usable phone number
    """
    _dialable(phone)
    return f"tel:{phone.strip()}"


def mailto_link(email: str) -> str:
    return f"mailto:{email}"
