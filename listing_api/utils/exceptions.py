"""
Error taxonomy for the Realtor Listing API.

Five kinds, each with one HTTP status and one error code:

    NotFound            404  NOT_FOUND
    Conflict            409  CONFLICT
    InvalidCredentials  400  INVALID_CREDENTIALS
    Unauthorized        401  UNAUTHORIZED
    Validation          422  VALIDATION_ERROR

Subclasses refine the message only; they never change status or code.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base for every error the API raises on purpose."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "API_ERROR"
    default_detail: str = "Request failed"
    default_headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, Any]] = None):
        super().__init__(
            status_code=type(self).status_code,
            detail=detail or self.default_detail,
            headers=headers if headers is not None else self.default_headers
        )


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        detail = f"{resource} not found"
        if resource_id is not None:
            detail += f" with ID: {resource_id}"
        super().__init__(detail)


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"


class InvalidCredentialsError(APIException):
    """
    Sign-in failure.
    Unknown email and wrong password produce the same error.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INVALID_CREDENTIALS"
    default_detail = "Invalid credentials"


class UnauthorizedError(APIException):
    """Missing identity, or an identity not allowed to perform the action."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"
    default_detail = "Authentication required"
    default_headers = {"WWW-Authenticate": "Bearer"}


class ValidationError(APIException):
    """Semantically invalid input that passed schema validation."""

    # Literal: the Starlette constant name differs across releases
    status_code = 422
    error_code = "VALIDATION_ERROR"

    def __init__(self, detail: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(detail)
        self.field_errors = field_errors or []


# Session tokens and registration keys
class TokenExpiredError(UnauthorizedError):
    default_detail = "Token has expired"


class InvalidTokenError(UnauthorizedError):
    default_detail = "Invalid token"


class InvalidProductKeyError(UnauthorizedError):
    """Registration key missing or not matching the requested email and role."""

    default_detail = "Invalid product key"


class InsufficientPermissionsError(UnauthorizedError):
    def __init__(self, action: str):
        super().__init__(f"Insufficient permissions to {action}")


# Listings
class ListingNotFoundError(NotFoundError):
    def __init__(self, listing_id: Optional[int] = None):
        super().__init__("Listing", listing_id)


class ListingOwnershipError(UnauthorizedError):
    """Caller is not the realtor who owns the listing."""

    default_detail = "You don't own this listing"


class DuplicateResourceError(ConflictError):
    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} with identifier '{identifier}' already exists")
