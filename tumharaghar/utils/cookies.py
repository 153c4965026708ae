"""
Session cookie helpers for browser clients.
"""

from typing import Optional
from fastapi import Request, Response
from tumharaghar.config import settings


def set_session_cookie(response: Response, token: str, max_age: int) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=settings.is_production
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.session_cookie_name)


def read_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)
