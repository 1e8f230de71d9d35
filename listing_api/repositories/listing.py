"""
Listing repository for listing persistence, search and ownership lookups.
Multi-row writes (listing with images, cascading delete) run in a single transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm import selectinload, joinedload
from listing_api.repositories.base import BaseRepository
from listing_api.models.listing import Listing, PropertyType
from listing_api.models.image import Image
from listing_api.models.message import Message
from listing_api.models.user import User
from typing import Optional, List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)


class ListingSearchFilters:
    """Search criteria; a None field places no constraint on the results."""

    def __init__(
        self,
        city: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        property_type: Optional[PropertyType] = None
    ):
        self.city = city
        self.min_price = min_price
        self.max_price = max_price
        self.property_type = property_type

    def __repr__(self) -> str:
        return (
            f"ListingSearchFilters(city={self.city!r}, min_price={self.min_price}, "
            f"max_price={self.max_price}, property_type={self.property_type})"
        )


class ListingRepository(BaseRepository[Listing]):
    """
    Repository for listings and their child images.
    Relationships are loaded explicitly per query.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Listing, db)

    async def create_listing(self, listing_data: Dict[str, Any], image_urls: List[str]) -> Listing:
        """
        Create a listing and its images in one transaction.

        Args:
            listing_data: Listing column values, including realtor_id
            image_urls: Urls of the images to attach, in display order

        Returns:
            Created listing instance

        Raises:
            Exception: If either write fails; nothing is persisted in that case
        """
        try:
            listing = Listing(**listing_data)
            listing.images = [Image(url=url) for url in image_urls]
            self.db.add(listing)
            await self.db.commit()
            await self.db.refresh(listing)
            logger.info(f"Created listing {listing.id} with {len(image_urls)} images for realtor {listing.realtor_id}")
            return listing
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create listing: {e}")
            raise

    async def get_listing_with_details(self, listing_id: int) -> Optional[Listing]:
        """
        Get a listing with its images and owning realtor loaded.

        Returns:
            Listing with loaded relationships or None if not found
        """
        try:
            query = (
                select(Listing)
                .options(
                    selectinload(Listing.images),
                    joinedload(Listing.realtor)
                )
                .where(Listing.id == listing_id)
            )

            result = await self.db.execute(query)
            listing = result.unique().scalar_one_or_none()

            if listing:
                logger.debug(f"Retrieved listing with details: {listing_id}")

            return listing
        except Exception as e:
            logger.error(f"Failed to get listing with details {listing_id}: {e}")
            raise

    async def search_listings(self, filters: ListingSearchFilters) -> List[Tuple[Listing, Optional[str]]]:
        """
        Search listings, pairing each with the url of its first image.

        Args:
            filters: ListingSearchFilters instance with search criteria

        Returns:
            List of (listing, image url or None) ordered by listing id
        """
        try:
            first_image_url = (
                select(Image.url)
                .where(Image.listing_id == Listing.id)
                .order_by(Image.id)
                .limit(1)
                .correlate(Listing)
                .scalar_subquery()
            )

            query = select(Listing, first_image_url.label("image"))

            conditions = self._build_filter_conditions(filters)
            if conditions:
                query = query.where(*conditions)

            query = query.order_by(Listing.id)

            result = await self.db.execute(query)
            rows = [(row[0], row[1]) for row in result.all()]

            logger.debug(f"Listing search {filters} returned {len(rows)} results")
            return rows
        except Exception as e:
            logger.error(f"Failed to search listings: {e}")
            raise

    def _build_filter_conditions(self, filters: ListingSearchFilters) -> List:
        """
        Build SQLAlchemy filter conditions from search filters.
        Absent filters contribute no condition at all.
        """
        conditions = []

        if filters.city is not None:
            conditions.append(Listing.city == filters.city)

        # Inclusive price bounds, independently optional
        if filters.min_price is not None:
            conditions.append(Listing.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Listing.price <= filters.max_price)

        if filters.property_type is not None:
            conditions.append(Listing.property_type == filters.property_type)

        return conditions

    async def get_owner(self, listing_id: int) -> Optional[User]:
        """
        Get the realtor who owns a listing.

        Returns:
            Owning user or None if the listing does not exist
        """
        try:
            query = (
                select(User)
                .join(Listing, Listing.realtor_id == User.id)
                .where(Listing.id == listing_id)
            )
            result = await self.db.execute(query)
            owner = result.scalar_one_or_none()

            if owner is None:
                logger.debug(f"No owner found for listing {listing_id}")

            return owner
        except Exception as e:
            logger.error(f"Failed to get owner of listing {listing_id}: {e}")
            raise

    async def delete_listing_cascade(self, listing_id: int) -> bool:
        """
        Delete a listing together with its messages and images in one transaction.

        Returns:
            True if the listing was deleted, False if it did not exist
        """
        try:
            messages = await self.db.execute(delete(Message).where(Message.listing_id == listing_id))
            images = await self.db.execute(delete(Image).where(Image.listing_id == listing_id))
            result = await self.db.execute(delete(Listing).where(Listing.id == listing_id))

            if result.rowcount == 0:
                await self.db.rollback()
                logger.debug(f"Listing {listing_id} not found for deletion")
                return False

            await self.db.commit()
            logger.info(
                f"Deleted listing {listing_id} with {images.rowcount} images "
                f"and {messages.rowcount} messages"
            )
            return True
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete listing {listing_id}: {e}")
            raise
