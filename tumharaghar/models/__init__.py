"""
Database models for the TUMHARAGHAR marketplace.
Includes Profile, Property, and PropertyImage models with relationships and validation.
"""

from tumharaghar.models.profile import Profile, UserRole
from tumharaghar.models.property import Property, PropertyType, PropertyStatus
from tumharaghar.models.image import PropertyImage

# Export all models for easy importing
__all__ = [
    "Profile",
    "UserRole",
    "Property",
    "PropertyType",
    "PropertyStatus",
    "PropertyImage",
]
