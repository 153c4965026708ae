"""
Pydantic schemas for authentication requests and the session.
Request fields are loose strings; the credential validator applies the rules.
"""

from pydantic import BaseModel, Field
from typing import Optional
from tumharaghar.models.profile import UserRole
from tumharaghar.schemas.profile import ProfileResponse


class SignInRequest(BaseModel):
    """Sign-in request schema."""

    email: str = Field(
        ...,
        description="User's email address",
        examples=["buyer@example.com"]
    )
    password: str = Field(
        ...,
        description="User's password (minimum 6 characters)",
        examples=["secret123"]
    )


class SignUpRequest(SignInRequest):
    """Sign-up request schema. Phone is required for sellers only."""

    full_name: str = Field(
        ...,
        description="User's full name",
        examples=["Ayesha Khan"]
    )
    role: UserRole = Field(
        default=UserRole.BUYER,
        description="Account role"
    )
    phone: Optional[str] = Field(
        None,
        description="Contact phone number",
        examples=["+92 300 1234567"]
    )


class Session(BaseModel):
    """
    Authentication state of one request.
    An anonymous session has neither user nor role.
    """

    user: Optional[ProfileResponse] = None
    role: Optional[UserRole] = None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_seller(self) -> bool:
        return self.role == UserRole.SELLER

    @property
    def is_buyer(self) -> bool:
        return self.role == UserRole.BUYER


class SessionResponse(Session):
    """Session returned after sign-in or sign-up, with the token that restores it."""

    access_token: str = Field(
        ...,
        description="JWT access token",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."]
    )
    token_type: str = Field(
        default="bearer",
        description="Token type"
    )
    expires_in: int = Field(
        ...,
        description="Access token expiration time in seconds",
        examples=[86400]
    )
