"""
Route handlers for the JSON API and the page view-models.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .seller import router as seller_router
from .pages import router as pages_router
from .dashboard import router as dashboard_router

__all__ = [
    "auth_router",
    "properties_router",
    "seller_router",
    "pages_router",
    "dashboard_router"
]
