"""
View components shared by the page routes.
"""

from tumharaghar.views.header import build_header
from tumharaghar.views.property_card import build_property_card, placeholder_image

__all__ = [
    "build_header",
    "build_property_card",
    "placeholder_image"
]
