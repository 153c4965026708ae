"""
Authentication utilities for JWT token management and password hashing.
Provides session tokens, short-lived signed payloads and bcrypt hashing.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from tumharaghar.config import settings
from tumharaghar.models.profile import UserRole, pwd_context
import uuid


MIN_PASSWORD_LENGTH = 6


class TokenPayload:
    """JWT access token payload structure."""

    def __init__(self, user_id: str, email: str, role: Optional[str], exp: datetime):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from dictionary."""
        return cls(
            user_id=data["sub"],
            email=data["email"],
            role=data.get("role"),
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )


def sign_payload(data: Dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    """
    Sign an arbitrary payload as a typed, expiring JWT.

    Args:
        data: Claims to sign
        token_type: Value stored in the "type" claim
        expires_delta: Lifetime of the token

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    to_encode = {
        **data,
        "exp": now + expires_delta,
        "iat": now,
        "type": token_type,
    }
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def read_signed_payload(token: str, token_type: str) -> Dict[str, Any]:
    """
    Decode a payload produced by sign_payload.

    Raises:
        JWTError: If the token is malformed, expired, tampered with or of another type
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        raise
    except Exception as e:
        raise JWTError(f"Token validation error: {str(e)}")

    if payload.get("type") != token_type:
        raise JWTError(f"Invalid token type. Expected {token_type}")

    return payload


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    role: UserRole,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with user claims.

    Args:
        user_id: Profile UUID
        email: User's email address
        role: User's role (buyer/seller)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    return sign_payload(
        {"sub": str(user_id), "email": email, "role": role.value},
        token_type="access",
        expires_delta=expires_delta
    )


def verify_token(token: str, token_type: str = "access") -> TokenPayload:
    """
    Verify and decode a JWT access token.

    Raises:
        JWTError: If token is invalid or expired
    """
    payload = read_signed_payload(token, token_type)

    if not payload.get("sub") or not payload.get("email"):
        raise JWTError("Invalid token payload")

    return TokenPayload.from_dict(payload)


def create_confirmation_token(user_id: uuid.UUID, property_id: uuid.UUID) -> str:
    """Short-lived token proving the seller was shown the delete confirmation."""
    return sign_payload(
        {"sub": str(user_id), "property_id": str(property_id)},
        token_type="delete_confirmation",
        expires_delta=timedelta(minutes=settings.delete_confirmation_expire_minutes)
    )


def verify_confirmation_token(token: str, user_id: uuid.UUID, property_id: uuid.UUID) -> bool:
    """Check a delete confirmation token against the seller and listing it was issued for."""
    if not token:
        return False
    try:
        payload = read_signed_payload(token, "delete_confirmation")
    except JWTError:
        return False
    return payload.get("sub") == str(user_id) and payload.get("property_id") == str(property_id)


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Raises:
        ValueError: If password is too short
    """
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)
