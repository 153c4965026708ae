"""
Site header shown on every page.
"""

from tumharaghar.config import settings
from tumharaghar.schemas.auth import Session
from tumharaghar.schemas.pages import HeaderView, NavLink
from tumharaghar.services.auth import dashboard_path


def build_header(session: Session) -> HeaderView:
    """
    Header for a session.

    Signed-in users get a dashboard link for their role and a sign-out
    action; visitors get a "Get Started" link to the sign-in page.
    """
    links = [NavLink(label="Browse Properties", href="/properties")]

    if session.is_authenticated:
        links.append(NavLink(label="Dashboard", href=dashboard_path(session.role)))
        action = NavLink(label="Sign Out", href="/auth/sign-out")
    else:
        action = NavLink(label="Get Started", href="/auth")

    return HeaderView(
        brand=settings.app_name,
        links=links,
        is_authenticated=session.is_authenticated,
        user_name=session.user.full_name if session.user else None,
        action=action
    )
