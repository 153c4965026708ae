"""
Session provider for sign-in, sign-up, sign-out and session restore.
Also holds the redirect policy that guards every page.
"""

from datetime import timedelta
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from tumharaghar.config import settings
from tumharaghar.repositories.base import decode_row
from tumharaghar.repositories.profile import ProfileRepository
from tumharaghar.models.profile import Profile, UserRole
from tumharaghar.schemas.auth import Session, SessionResponse
from tumharaghar.schemas.profile import ProfileResponse
from tumharaghar.utils.auth import create_access_token, verify_token
from tumharaghar.utils.validators import CredentialValidator
from tumharaghar.utils.exceptions import (
    APIException,
    DuplicateResourceError,
    GatewayError,
    InvalidCredentialsError,
    UnexpectedError
)
from jose import JWTError
import uuid
import logging

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email is already registered. Please try logging in instead."

AUTH_PATH = "/auth"
HOME_PATH = "/"
BUYER_DASHBOARD_PATH = "/buyer-dashboard"
SELLER_DASHBOARD_PATH = "/seller-dashboard"


def dashboard_path(role: Optional[UserRole]) -> str:
    """Dashboard of a role; anonymous users are sent to sign in."""
    if role == UserRole.SELLER:
        return SELLER_DASHBOARD_PATH
    if role == UserRole.BUYER:
        return BUYER_DASHBOARD_PATH
    return AUTH_PATH


def resolve_page_redirect(
    session: Session,
    required_role: Optional[UserRole] = None,
    auth_page: bool = False
) -> Optional[str]:
    """
    Decide whether a page must redirect before rendering.

    Args:
        session: Session of the current request
        required_role: Role the page is reserved for, if any
        auth_page: True for the sign-in page, which signed-in users skip

    Returns:
        Path to redirect to, or None when the page may render
    """
    if auth_page:
        return HOME_PATH if session.is_authenticated else None

    if required_role is None:
        return None

    if not session.is_authenticated:
        return AUTH_PATH

    if session.role != required_role:
        return dashboard_path(session.role)

    return None


class SessionProvider:
    """
    Auth session provider.
    Created per request with that request's database session.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.profile_repo = ProfileRepository(db_session)

    def _issue(self, profile: Profile) -> SessionResponse:
        user = decode_row(ProfileResponse, profile)
        expires = timedelta(minutes=settings.access_token_expire_minutes)
        token = create_access_token(
            user_id=profile.id,
            email=profile.email,
            role=profile.role,
            expires_delta=expires
        )
        return SessionResponse(
            user=user,
            role=user.role,
            access_token=token,
            expires_in=int(expires.total_seconds())
        )

    async def sign_in(self, email: str, password: str) -> SessionResponse:
        """
        Sign in with email and password.

        Raises:
            ValidationError: If the input breaks a credential rule
            InvalidCredentialsError: If no profile matches the credentials
            GatewayError: If the database call fails
        """
        credentials = CredentialValidator.validate_sign_in(email, password)

        try:
            profile = await self.profile_repo.authenticate(
                credentials["email"], credentials["password"]
            )
        except SQLAlchemyError as e:
            logger.error(f"Sign-in lookup failed for {credentials['email']}: {e}")
            raise GatewayError()

        if profile is None:
            logger.warning(f"Failed sign-in attempt for email: {credentials['email']}")
            raise InvalidCredentialsError()

        logger.info(f"User signed in: {profile.email}")
        return self._issue(profile)

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: str,
        role: UserRole = UserRole.BUYER,
        phone: Optional[str] = None
    ) -> SessionResponse:
        """
        Create an account and sign it in.

        Raises:
            ValidationError: If the input breaks a credential rule
            DuplicateResourceError: If the email is already registered
            GatewayError: If the database call fails
        """
        data = CredentialValidator.validate_sign_up(email, password, full_name, role, phone)

        try:
            if await self.profile_repo.get_by_email(data["email"]):
                logger.warning(f"Sign-up with registered email: {data['email']}")
                raise DuplicateResourceError(DUPLICATE_EMAIL_MESSAGE)

            profile = await self.profile_repo.create_profile(data)
        except APIException:
            raise
        except IntegrityError:
            logger.warning(f"Sign-up raced on registered email: {data['email']}")
            raise DuplicateResourceError(DUPLICATE_EMAIL_MESSAGE)
        except SQLAlchemyError as e:
            logger.error(f"Sign-up failed for {data['email']}: {e}")
            raise GatewayError()
        except ValueError as e:
            logger.error(f"Sign-up rejected for {data['email']}: {e}")
            raise UnexpectedError()

        logger.info(f"Account created: {profile.email} ({profile.role.value})")
        return self._issue(profile)

    async def sign_out(self, session: Session) -> Session:
        """End the session. Tokens are stateless, so only the client copy is dropped."""
        if session.user is not None:
            logger.info(f"User signed out: {session.user.email}")
        return Session.anonymous()

    async def restore(self, token: Optional[str]) -> Session:
        """
        Rebuild the session from an access token.

        Invalid, expired or orphaned tokens give an anonymous session.
        """
        if not token:
            return Session.anonymous()

        try:
            payload = verify_token(token, "access")
            profile_id = uuid.UUID(payload.user_id)
        except (JWTError, ValueError) as e:
            logger.debug(f"Rejected session token: {e}")
            return Session.anonymous()

        try:
            profile = await self.profile_repo.get_by_id(profile_id)
        except SQLAlchemyError as e:
            logger.error(f"Session restore lookup failed for {profile_id}: {e}")
            raise GatewayError()

        if profile is None:
            logger.debug(f"Session token refers to missing profile {profile_id}")
            return Session.anonymous()

        user = decode_row(ProfileResponse, profile)
        return Session(user=user, role=user.role)
