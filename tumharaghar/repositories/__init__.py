"""
Repository layer for data access operations.
These classes are the gateway to the hosted database; nothing else issues queries.
"""

from tumharaghar.repositories.base import BaseRepository, decode_row
from tumharaghar.repositories.property import PropertyRepository, PropertySearchFilters
from tumharaghar.repositories.profile import ProfileRepository
from tumharaghar.repositories.image import ImageRepository

__all__ = [
    "BaseRepository",
    "decode_row",
    "PropertyRepository",
    "PropertySearchFilters",
    "ProfileRepository",
    "ImageRepository"
]
