"""
Pydantic schemas for listing requests and responses.
Covers creation with images, partial updates, search summaries and detail views.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from listing_api.models.listing import PropertyType


class ImageCreate(BaseModel):
    """Image attached to a new listing."""

    url: str = Field(
        ...,
        min_length=1,
        max_length=2048,
        description="Public url of the image",
        examples=["http://x/a.jpg"]
    )


class ListingBase(BaseModel):
    """Base listing schema with common fields."""

    address: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Street address of the property",
        examples=["1 Main St"]
    )

    city: str = Field(
        ...,
        min_length=1,
        max_length=120,
        description="City; search matches it exactly",
        examples=["Springfield"]
    )

    price: float = Field(..., gt=0, description="Asking price", examples=[250000])

    land_size: float = Field(..., gt=0, description="Land size", examples=[500])

    number_of_bedrooms: int = Field(..., gt=0, description="Number of bedrooms", examples=[3])

    number_of_bathrooms: float = Field(..., gt=0, description="Number of bathrooms", examples=[2])

    property_type: PropertyType = Field(..., description="Property type", examples=["RESIDENTIAL"])

    @field_validator('address', 'city')
    @classmethod
    def validate_text(cls, v):
        """Validate and clean text fields."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()


class ListingCreate(ListingBase):
    """Schema for creating a new listing together with its images."""

    images: List[ImageCreate] = Field(
        default_factory=list,
        description="Images in display order; the first one represents the listing in search results"
    )

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "address": "1 Main St",
            "city": "Springfield",
            "price": 250000,
            "land_size": 500,
            "number_of_bedrooms": 3,
            "number_of_bathrooms": 2,
            "property_type": "RESIDENTIAL",
            "images": [{"url": "http://x/a.jpg"}]
        }
    })


class ListingUpdate(BaseModel):
    """Schema for partially updating a listing; omitted fields stay unchanged."""

    address: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=120)
    price: Optional[float] = Field(None, gt=0)
    land_size: Optional[float] = Field(None, gt=0)
    number_of_bedrooms: Optional[int] = Field(None, gt=0)
    number_of_bathrooms: Optional[float] = Field(None, gt=0)
    property_type: Optional[PropertyType] = None

    @field_validator('address', 'city')
    @classmethod
    def validate_text(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip() if v is not None else v


class ImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str


class RealtorContact(BaseModel):
    """Contact card of the realtor who owns a listing."""

    name: str
    email: str
    phone: str


class ListingResponse(BaseModel):
    """Listing fields without related records."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    address: str
    city: str
    price: float
    land_size: float
    number_of_bedrooms: int
    number_of_bathrooms: float
    property_type: PropertyType
    realtor_id: int


class ListingSummary(ListingResponse):
    """Search result entry with the url of the listing's first image."""

    image: Optional[str] = Field(None, description="First image url, or null when the listing has none")


class ListingDetailResponse(ListingResponse):
    """Full listing with every image and the owning realtor's contact card."""

    images: List[ImageResponse]
    realtor: RealtorContact
