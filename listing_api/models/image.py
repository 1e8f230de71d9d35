"""
Image model for listing photos referenced by url.
"""

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_api.database import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listing_api.models.listing import Listing


class Image(Base):
    """Child record of a listing; removed together with it."""

    __tablename__ = "images"

    url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        comment="Public url of the image"
    )

    listing_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("listings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the listing this image belongs to"
    )

    listing: Mapped["Listing"] = relationship(
        "Listing",
        back_populates="images",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Image(id={self.id}, listing_id={self.listing_id}, url={self.url})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
        }
