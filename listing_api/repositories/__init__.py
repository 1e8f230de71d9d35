"""
Repository layer for data access operations.
Wraps async SQLAlchemy queries with logging and transaction handling.
"""

from listing_api.repositories.base import BaseRepository
from listing_api.repositories.listing import ListingRepository, ListingSearchFilters
from listing_api.repositories.message import MessageRepository
from listing_api.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ListingRepository",
    "ListingSearchFilters",
    "MessageRepository",
    "UserRepository"
]
