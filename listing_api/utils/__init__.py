"""
Utility modules for the Realtor Listing API.
"""

from .auth import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
    SessionTokenPayload
)

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ConflictError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    InvalidProductKeyError,
    InsufficientPermissionsError,
    ListingNotFoundError,
    ListingOwnershipError,
    DuplicateResourceError
)

# Guards and dependencies import models; import them directly to avoid circular imports

__all__ = [
    # Auth utilities
    "create_session_token",
    "decode_session_token",
    "hash_password",
    "verify_password",
    "SessionTokenPayload",

    # Exceptions
    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ConflictError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InvalidProductKeyError",
    "InsufficientPermissionsError",
    "ListingNotFoundError",
    "ListingOwnershipError",
    "DuplicateResourceError",
]
