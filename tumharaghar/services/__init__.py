"""
Service layer for business logic implementation.
Contains the session provider, listing management, deletion flow and error handling.
"""

from .auth import SessionProvider, resolve_page_redirect
from .property import PropertyService
from .search import filter_properties
from .deletion import DeletionFlow, DeletionState
from .notifications import FlashMessages
from .error_handler import ErrorHandlerService

__all__ = [
    "SessionProvider",
    "resolve_page_redirect",
    "PropertyService",
    "filter_properties",
    "DeletionFlow",
    "DeletionState",
    "FlashMessages",
    "ErrorHandlerService"
]
