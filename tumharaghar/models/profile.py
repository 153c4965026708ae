"""
Profile model with authentication and role management.
Handles buyer and seller accounts of the marketplace.
"""

from sqlalchemy import String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from tumharaghar.database import Base
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from tumharaghar.models.property import Property

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UserRole(str, enum.Enum):
    """User role enumeration for role-based page access."""
    BUYER = "buyer"
    SELLER = "seller"


class Profile(Base):
    """
    Profile of a marketplace user.
    The row doubles as the backend's auth user, so it also stores the password hash.
    """

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    full_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="User's full name"
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        comment="Contact phone number, required for sellers"
    )

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole),
        nullable=False,
        default=UserRole.BUYER,
        index=True,
        comment="Buyer or seller"
    )

    properties: Mapped[List["Property"]] = relationship(
        "Property",
        back_populates="seller",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of the profile."""
        return f"<Profile(id={self.id}, email={self.email}, role={self.role})>"

    @classmethod
    def normalize_email(cls, email: str) -> str:
        """
        Validate and normalize an email address.

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return pwd_context.verify(password, self.hashed_password)
