"""
Pydantic schemas for user profiles.
The password hash never appears in any of these models.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
import uuid

from tumharaghar.models.profile import UserRole


class ProfileResponse(BaseModel):
    """Profile of the signed-in user."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(..., description="Profile unique identifier")

    email: str = Field(
        ...,
        description="User email address",
        examples=["seller@example.com"]
    )

    full_name: str = Field(
        ...,
        description="User's full name",
        examples=["Ayesha Khan"]
    )

    phone: Optional[str] = Field(
        None,
        description="Contact phone number",
        examples=["+92 300 1234567"]
    )

    role: UserRole = Field(..., description="Buyer or seller")

    created_at: datetime = Field(..., description="Account creation timestamp")


class SellerProfile(BaseModel):
    """Public contact card of a listing's seller."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    full_name: str
    email: str
    phone: Optional[str] = None
