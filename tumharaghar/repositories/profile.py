"""
Profile repository for authentication and profile lookups.
Provides secure account creation with password hashing.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from tumharaghar.repositories.base import BaseRepository
from tumharaghar.models.profile import Profile, UserRole
from tumharaghar.utils.auth import hash_password
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for marketplace profiles.
    The profile row is also the auth record, so it owns the password hash.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Profile, db)

    async def create_profile(self, profile_data: Dict[str, Any]) -> Profile:
        """
        Create a new profile with email normalization and password hashing.

        Args:
            profile_data: Must include email, password, full_name; optional role and phone

        Returns:
            Created profile instance

        Raises:
            ValueError: If the email is already registered or invalid
            Exception: If database operation fails
        """
        data = dict(profile_data)
        email = Profile.normalize_email(data["email"])

        if await self.get_by_email(email):
            raise ValueError(f"Profile with email {email} already exists")

        create_data = {
            **data,
            "email": email,
            "hashed_password": hash_password(data.pop("password")),
            "role": data.get("role", UserRole.BUYER),
        }
        create_data.pop("password", None)

        created = await self.create(create_data)
        logger.info(f"Created profile: {created.email} (ID: {created.id}, role: {created.role.value})")
        return created

    async def get_by_email(self, email: str) -> Optional[Profile]:
        """Get profile by email address."""
        try:
            normalized_email = email.lower().strip()
            result = await self.db.execute(
                select(Profile).where(Profile.email == normalized_email)
            )
            profile = result.scalar_one_or_none()

            if profile:
                logger.debug(f"Retrieved profile by email: {email}")
            else:
                logger.debug(f"Profile with email {email} not found")

            return profile
        except Exception as e:
            logger.error(f"Failed to get profile by email {email}: {e}")
            raise

    async def authenticate(self, email: str, password: str) -> Optional[Profile]:
        """
        Authenticate a profile with email and password.

        Returns:
            Profile if the credentials match, None otherwise
        """
        profile = await self.get_by_email(email)

        if not profile:
            logger.debug(f"Authentication failed: profile {email} not found")
            return None

        if not profile.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        return profile
