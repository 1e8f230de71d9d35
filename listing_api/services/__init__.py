"""
Service layer for business logic implementation.
Contains services for authentication, listing management, and error handling.
"""

from .auth import AuthService
from .listing import ListingService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "ListingService",
    "ErrorHandlerService"
]
