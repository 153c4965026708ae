"""
Pydantic schemas for request/response validation and page view-models.
"""

# Authentication schemas
from .auth import (
    SignInRequest,
    SignUpRequest,
    Session,
    SessionResponse
)

# Profile schemas
from .profile import (
    ProfileResponse,
    SellerProfile
)

# Property schemas
from .property import (
    PropertyForm,
    PropertyUpdateForm,
    PropertyImageResponse,
    ImageCreate,
    PropertyRecord,
    PropertyListResponse,
    ContactLinks,
    PropertyDetailResponse,
    WhatsAppLinkResponse
)

# Error schemas
from .error import (
    ErrorDetail,
    ErrorResponse,
    APIErrorResponse
)

__all__ = [
    # Authentication
    "SignInRequest",
    "SignUpRequest",
    "Session",
    "SessionResponse",

    # Profile
    "ProfileResponse",
    "SellerProfile",

    # Property
    "PropertyForm",
    "PropertyUpdateForm",
    "PropertyImageResponse",
    "ImageCreate",
    "PropertyRecord",
    "PropertyListResponse",
    "ContactLinks",
    "PropertyDetailResponse",
    "WhatsAppLinkResponse",

    # Error
    "ErrorDetail",
    "ErrorResponse",
    "APIErrorResponse"
]
