"""
Utility modules for the TUMHARAGHAR marketplace.
"""

from .auth import (
    create_access_token,
    create_confirmation_token,
    verify_token,
    verify_confirmation_token,
    sign_payload,
    read_signed_payload,
    hash_password,
    verify_password,
    TokenPayload
)

from .exceptions import (
    APIException,
    ValidationError,
    GatewayError,
    ShapeError,
    NotFoundError,
    UnexpectedError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    InvalidCredentialsError,
    DuplicateResourceError,
    InsufficientPermissionsError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "create_access_token",
    "create_confirmation_token",
    "verify_token",
    "verify_confirmation_token",
    "sign_payload",
    "read_signed_payload",
    "hash_password",
    "verify_password",
    "TokenPayload",

    # Exceptions
    "APIException",
    "ValidationError",
    "GatewayError",
    "ShapeError",
    "NotFoundError",
    "UnexpectedError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "InvalidCredentialsError",
    "DuplicateResourceError",
    "InsufficientPermissionsError",
]
