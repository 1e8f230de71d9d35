"""
Pydantic schemas for authentication requests and responses.
Handles signup, signin, registration keys and the current-user view.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from listing_api.models.user import UserRole
from listing_api.utils.auth import BCRYPT_MAX_BYTES


class SignupRequest(BaseModel):
    """Signup request schema. Privileged roles must also present a product key."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Jane Realtor"]
    )
    phone: str = Field(
        ...,
        min_length=5,
        max_length=32,
        description="Contact phone number",
        examples=["555-555-5555"]
    )
    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["jane@example.com"]
    )
    password: str = Field(
        ...,
        min_length=5,
        max_length=BCRYPT_MAX_BYTES,
        description="User's password (5 characters to 72 bytes)",
        examples=["securepassword"]
    )
    product_key: Optional[str] = Field(
        None,
        description="Registration key issued by an admin; required for ADMIN and REALTOR signups"
    )

    @field_validator('name', 'phone')
    @classmethod
    def strip_required_text(cls, v):
        """Reject whitespace-only values."""
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator('password')
    @classmethod
    def fits_bcrypt(cls, v):
        """Multi-byte characters can pass max_length and still overflow bcrypt's input."""
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes")
        return v


class SigninRequest(BaseModel):
    """Signin request schema."""

    email: EmailStr = Field(..., description="User's email address", examples=["jane@example.com"])
    password: str = Field(..., min_length=1, max_length=128, description="User's password")

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class ProductKeyRequest(BaseModel):
    """Request for a registration key bound to an email and role."""

    email: EmailStr = Field(..., description="Email the key will be valid for")
    role: UserRole = Field(..., description="Role the key will grant", examples=["REALTOR"])

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class TokenResponse(BaseModel):
    """Session token response schema."""

    token: str = Field(
        ...,
        description="Signed session token, sent back as a Bearer token",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."]
    )


class ProductKeyResponse(BaseModel):
    product_key: str = Field(..., description="Registration key to hand to the new user out of band")


class CurrentUserResponse(BaseModel):
    """Authenticated user's profile (excluding sensitive data)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    phone: str
    role: UserRole
