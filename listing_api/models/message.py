"""
Message model for buyer inquiries about a listing.
The realtor id is copied from the listing when the message is created.
"""

from sqlalchemy import Text, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_api.database import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listing_api.models.user import User


class Message(Base):
    """
    Inquiry sent by a buyer to the realtor who owns a listing.
    Messages are immutable once written.
    """

    __tablename__ = "messages"

    message: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Inquiry text"
    )

    listing_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("listings.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    realtor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Owner of the listing at the time of the inquiry"
    )

    buyer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    buyer: Mapped["User"] = relationship(
        "User",
        foreign_keys=[buyer_id],
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, listing_id={self.listing_id}, buyer_id={self.buyer_id})>"

    def to_inbox_dict(self) -> dict:
        """Message as shown to the realtor, with the buyer's contact card."""
        return {
            "id": self.id,
            "listing_id": self.listing_id,
            "message": self.message,
            "buyer": {
                "name": self.buyer.name,
                "phone": self.buyer.phone,
                "email": self.buyer.email,
            },
        }


# Realtor inbox lookups go by listing
listing_messages_index = Index(
    "idx_messages_listing_realtor",
    Message.listing_id,
    Message.realtor_id
)
