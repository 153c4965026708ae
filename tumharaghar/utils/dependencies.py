"""
FastAPI dependency injection utilities for sessions and services.
Provides the per-request session provider and route protection for the API.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from tumharaghar.database import get_db
from tumharaghar.schemas.auth import Session
from tumharaghar.services.auth import SessionProvider
from tumharaghar.services.property import PropertyService
from tumharaghar.utils.cookies import read_session_token
from tumharaghar.utils.exceptions import UnauthorizedError, InsufficientPermissionsError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_session_provider(db: AsyncSession = Depends(get_db)) -> SessionProvider:
    """
    Get the session provider for this request.

    Args:
        db: Database session

    Returns:
        SessionProvider instance
    """
    return SessionProvider(db)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """
    Get property service instance.

    Args:
        db: Database session

    Returns:
        PropertyService instance
    """
    return PropertyService(db)


async def get_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    provider: SessionProvider = Depends(get_session_provider)
) -> Session:
    """
    Session of the current request.

    A bearer token takes precedence over the session cookie. Missing or
    invalid tokens give an anonymous session.
    """
    token = credentials.credentials if credentials else read_session_token(request)
    return await provider.restore(token)


async def require_session(session: Session = Depends(get_session)) -> Session:
    """
    Raises:
        UnauthorizedError: If the request is anonymous
    """
    if not session.is_authenticated:
        raise UnauthorizedError("Authentication token required")
    return session


async def require_seller(session: Session = Depends(require_session)) -> Session:
    """
    Raises:
        InsufficientPermissionsError: If the signed-in user is not a seller
    """
    if not session.is_seller:
        raise InsufficientPermissionsError("manage listings")
    return session
