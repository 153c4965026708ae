"""
Flash notifications carried across redirects in a signed cookie.
"""

import logging
from datetime import timedelta
from typing import List, Optional

from fastapi import Request, Response
from jose import JWTError
from pydantic import ValidationError as PydanticValidationError

from tumharaghar.config import settings
from tumharaghar.schemas.pages import Notification
from tumharaghar.utils.auth import read_signed_payload, sign_payload

logger = logging.getLogger(__name__)

FLASH_TOKEN_TYPE = "flash"


class FlashMessages:
    """Read and write the pending notifications of a browser."""

    @staticmethod
    def encode(notifications: List[Notification]) -> str:
        return sign_payload(
            {"messages": [n.model_dump() for n in notifications]},
            token_type=FLASH_TOKEN_TYPE,
            expires_delta=timedelta(minutes=settings.flash_expire_minutes)
        )

    @staticmethod
    def decode(token: Optional[str]) -> List[Notification]:
        """Notifications in a flash cookie; tampered or expired cookies hold none."""
        if not token:
            return []
        try:
            payload = read_signed_payload(token, FLASH_TOKEN_TYPE)
            return [Notification.model_validate(m) for m in payload.get("messages", [])]
        except (JWTError, PydanticValidationError) as e:
            logger.debug(f"Dropped unreadable flash cookie: {e}")
            return []

    @staticmethod
    def read(request: Request) -> List[Notification]:
        return FlashMessages.decode(request.cookies.get(settings.flash_cookie_name))

    @staticmethod
    def write(response: Response, notifications: List[Notification]) -> None:
        response.set_cookie(
            key=settings.flash_cookie_name,
            value=FlashMessages.encode(notifications),
            max_age=settings.flash_expire_minutes * 60,
            httponly=True,
            samesite="lax",
            secure=settings.is_production
        )

    @staticmethod
    def clear(response: Response) -> None:
        response.delete_cookie(settings.flash_cookie_name)
