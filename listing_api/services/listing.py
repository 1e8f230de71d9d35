"""
Listing service for listing search, management and buyer inquiries.
Authorization happens at the route boundary; this service exposes get_owner_of
so the boundary can check ownership before mutating calls.
"""

from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from listing_api.repositories.listing import ListingRepository, ListingSearchFilters
from listing_api.repositories.message import MessageRepository
from listing_api.models.listing import Listing
from listing_api.models.message import Message
from listing_api.models.user import User
from listing_api.schemas.listing import ListingCreate, ListingUpdate
from listing_api.utils.guards import CallerIdentity
from listing_api.utils.exceptions import (
    NotFoundError,
    ListingNotFoundError,
    ValidationError
)
import logging

logger = logging.getLogger(__name__)


class ListingService:
    """
    Listing service for managing listings and the messages sent about them.
    Returns ORM objects; routers shape them into response schemas.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.listing_repo = ListingRepository(db_session)
        self.message_repo = MessageRepository(db_session)

    async def search(self, filters: ListingSearchFilters) -> List[Tuple[Listing, Optional[str]]]:
        """
        Search listings by city, price range and property type.

        Args:
            filters: Search criteria; absent fields place no constraint

        Returns:
            (listing, first image url) pairs ordered by listing id

        Raises:
            ValidationError: If the minimum price exceeds the maximum price
            NotFoundError: If no listing matches
        """
        if (
            filters.min_price is not None
            and filters.max_price is not None
            and filters.min_price > filters.max_price
        ):
            raise ValidationError(
                "Minimum price cannot be greater than maximum price",
                field_errors=[{
                    "field": "min_price",
                    "message": "Minimum price cannot be greater than maximum price"
                }]
            )

        results = await self.listing_repo.search_listings(filters)

        # An empty match set is reported as an error, not an empty list
        if not results:
            raise NotFoundError("Listings")

        return results

    async def get_by_id(self, listing_id: int) -> Listing:
        """
        Get a listing with every image and the owning realtor's contact info.

        Raises:
            ListingNotFoundError: If the listing doesn't exist
        """
        listing = await self.listing_repo.get_listing_with_details(listing_id)

        if not listing:
            raise ListingNotFoundError(listing_id)

        return listing

    async def create(self, listing_data: ListingCreate, owner_id: int) -> Listing:
        """
        Create a listing owned by ``owner_id`` together with its images.

        Args:
            listing_data: Listing fields and image urls
            owner_id: Id of the realtor creating the listing

        Returns:
            Created listing with images and realtor loaded
        """
        create_data = listing_data.model_dump(exclude={"images"})
        create_data["realtor_id"] = owner_id
        image_urls = [image.url for image in listing_data.images]

        listing = await self.listing_repo.create_listing(create_data, image_urls)

        logger.info(f"Listing created by realtor {owner_id}: {listing.address} (ID: {listing.id})")
        return await self.get_by_id(listing.id)

    async def update(self, listing_id: int, listing_data: ListingUpdate) -> Listing:
        """
        Apply a partial update; fields left out of the request stay unchanged.

        Raises:
            ListingNotFoundError: If the listing doesn't exist
            ValidationError: If no fields were supplied
        """
        existing_listing = await self.listing_repo.get_by_id(listing_id)
        if not existing_listing:
            raise ListingNotFoundError(listing_id)

        update_data = {
            k: v for k, v in listing_data.model_dump(exclude_unset=True).items()
            if v is not None
        }

        if not update_data:
            raise ValidationError("No valid fields provided for update")

        updated_listing = await self.listing_repo.update(listing_id, update_data)

        if not updated_listing:
            raise ListingNotFoundError(listing_id)

        logger.info(f"Listing {listing_id} updated: {', '.join(sorted(update_data))}")
        return updated_listing

    async def delete(self, listing_id: int) -> None:
        """
        Delete a listing along with its images and messages.

        Raises:
            ListingNotFoundError: If the listing doesn't exist
        """
        if not await self.listing_repo.exists(listing_id):
            raise ListingNotFoundError(listing_id)

        deleted = await self.listing_repo.delete_listing_cascade(listing_id)

        if not deleted:
            raise ListingNotFoundError(listing_id)

        logger.info(f"Listing {listing_id} deleted")

    async def get_owner_of(self, listing_id: int) -> User:
        """
        Get the realtor who owns a listing.

        Raises:
            ListingNotFoundError: If the listing doesn't exist
        """
        owner = await self.listing_repo.get_owner(listing_id)

        if not owner:
            raise ListingNotFoundError(listing_id)

        return owner

    async def inquire(self, listing_id: int, text: str, buyer: CallerIdentity) -> Message:
        """
        Send an inquiry from a buyer to the realtor who owns the listing.

        Args:
            listing_id: Listing the inquiry is about
            text: Inquiry text
            buyer: Identity of the buyer sending it

        Returns:
            Created message, addressed to the listing's current owner

        Raises:
            ListingNotFoundError: If the listing doesn't exist
        """
        realtor = await self.get_owner_of(listing_id)

        return await self.message_repo.create_message(
            listing_id=listing_id,
            realtor_id=realtor.id,
            buyer_id=buyer.id,
            text=text
        )

    async def list_messages(self, listing_id: int) -> List[Message]:
        """
        Get every message for a listing with the sending buyer's contact info loaded.

        Raises:
            ListingNotFoundError: If the listing doesn't exist
        """
        if not await self.listing_repo.exists(listing_id):
            raise ListingNotFoundError(listing_id)

        return await self.message_repo.get_by_listing(listing_id)
