"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    SignupRequest,
    SigninRequest,
    ProductKeyRequest,
    TokenResponse,
    ProductKeyResponse,
    CurrentUserResponse
)

# Listing schemas
from .listing import (
    ImageCreate,
    ListingCreate,
    ListingUpdate,
    ImageResponse,
    RealtorContact,
    ListingResponse,
    ListingSummary,
    ListingDetailResponse
)

# Message schemas
from .message import (
    InquireRequest,
    MessageResponse,
    BuyerContact,
    ListingMessageResponse
)

# Error schemas
from .error import (
    ErrorDetail,
    ErrorResponse,
    APIErrorResponse,
    get_error_responses
)

__all__ = [
    # Authentication
    "SignupRequest",
    "SigninRequest",
    "ProductKeyRequest",
    "TokenResponse",
    "ProductKeyResponse",
    "CurrentUserResponse",

    # Listing
    "ImageCreate",
    "ListingCreate",
    "ListingUpdate",
    "ImageResponse",
    "RealtorContact",
    "ListingResponse",
    "ListingSummary",
    "ListingDetailResponse",

    # Message
    "InquireRequest",
    "MessageResponse",
    "BuyerContact",
    "ListingMessageResponse",

    # Error
    "ErrorDetail",
    "ErrorResponse",
    "APIErrorResponse",
    "get_error_responses",
]
