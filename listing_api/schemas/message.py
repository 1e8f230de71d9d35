"""
Pydantic schemas for buyer inquiries.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InquireRequest(BaseModel):
    """Inquiry sent by a buyer about a listing."""

    message: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Inquiry text",
        examples=["Is this available?"]
    )

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v.strip()


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    message: str
    listing_id: int
    realtor_id: int
    buyer_id: int


class BuyerContact(BaseModel):
    name: str
    phone: str
    email: str


class ListingMessageResponse(BaseModel):
    """Message as shown in the owning realtor's inbox."""

    id: int
    listing_id: int
    message: str
    buyer: BuyerContact
