"""
Message repository for buyer inquiries.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import joinedload
from listing_api.repositories.base import BaseRepository
from listing_api.models.message import Message
from typing import List
import logging

logger = logging.getLogger(__name__)


class MessageRepository(BaseRepository[Message]):
    """Repository for inquiry messages. Messages are written once and never updated."""

    def __init__(self, db: AsyncSession):
        super().__init__(Message, db)

    async def create_message(self, listing_id: int, realtor_id: int, buyer_id: int, text: str) -> Message:
        """
        Persist an inquiry addressed to the realtor who owns the listing.

        Args:
            listing_id: Listing the inquiry is about
            realtor_id: Owner of the listing at the time of the inquiry
            buyer_id: Buyer sending the inquiry
            text: Inquiry text

        Returns:
            Created message instance
        """
        message = await self.create({
            "listing_id": listing_id,
            "realtor_id": realtor_id,
            "buyer_id": buyer_id,
            "message": text,
        })
        logger.info(f"Buyer {buyer_id} sent message {message.id} about listing {listing_id} to realtor {realtor_id}")
        return message

    async def get_by_listing(self, listing_id: int) -> List[Message]:
        """Get every message for a listing with the sending buyer loaded, oldest first."""
        try:
            query = (
                select(Message)
                .options(joinedload(Message.buyer))
                .where(Message.listing_id == listing_id)
                .order_by(Message.id)
            )
            result = await self.db.execute(query)
            messages = list(result.scalars().all())

            logger.debug(f"Retrieved {len(messages)} messages for listing {listing_id}")
            return messages
        except Exception as e:
            logger.error(f"Failed to get messages for listing {listing_id}: {e}")
            raise
