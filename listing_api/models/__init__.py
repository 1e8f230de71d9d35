"""
Database models for the Realtor Listing API.
Includes User, Listing, Image, and Message models with relationships.
"""

from listing_api.models.user import User, UserRole
from listing_api.models.listing import Listing, PropertyType
from listing_api.models.image import Image
from listing_api.models.message import Message

__all__ = [
    "User",
    "UserRole",
    "Listing",
    "PropertyType",
    "Image",
    "Message",
]
