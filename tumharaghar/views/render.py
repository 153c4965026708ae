"""
Response helpers for page routes.
Pages are rendered as JSON view-models; redirects carry their toasts in the flash cookie.
"""

from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from tumharaghar.config import settings
from tumharaghar.schemas.auth import Session
from tumharaghar.schemas.pages import Notification, Page
from tumharaghar.services.notifications import FlashMessages
from tumharaghar.views.header import build_header


def page_context(request: Request, session: Session, *notifications: Notification) -> Dict[str, Any]:
    """Header and pending notifications shared by every page."""
    return {
        "header": build_header(session),
        "notifications": FlashMessages.read(request) + list(notifications),
    }


def render_page(page: Page, request: Request, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Render a page; flashed notifications are consumed by this render."""
    response = JSONResponse(status_code=status_code, content=page.model_dump(mode="json"))
    if settings.flash_cookie_name in request.cookies:
        FlashMessages.clear(response)
    return response


def redirect_to(path: str, notifications: Optional[List[Notification]] = None) -> RedirectResponse:
    """303 redirect, flashing notifications to the next page."""
    response = RedirectResponse(url=path, status_code=status.HTTP_303_SEE_OTHER)
    if notifications:
        FlashMessages.write(response, notifications)
    return response
