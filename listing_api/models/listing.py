"""
Listing model for properties offered for sale.
Handles listing data, pricing, ownership by a realtor, and the image collection.
"""

from sqlalchemy import String, Integer, Float, Enum as SQLEnum, Index, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_api.database import Base
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from listing_api.models.user import User
    from listing_api.models.image import Image


class PropertyType(str, enum.Enum):
    """Property type enumeration."""
    RESIDENTIAL = "RESIDENTIAL"
    CONDO = "CONDO"


class Listing(Base):
    """
    Listing model owned by a single realtor.
    Relationships never load implicitly; repositories choose what to load per query.
    """

    __tablename__ = "listings"

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Street address of the property"
    )

    city: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
        index=True,
        comment="City, matched exactly by search"
    )

    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        index=True,
        comment="Asking price"
    )

    land_size: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Land size"
    )

    number_of_bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False
    )

    number_of_bathrooms: Mapped[float] = mapped_column(
        Float,
        nullable=False
    )

    property_type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType),
        nullable=False,
        index=True
    )

    realtor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="ID of the realtor who owns this listing"
    )

    realtor: Mapped["User"] = relationship("User", lazy="raise")

    images: Mapped[List["Image"]] = relationship(
        "Image",
        back_populates="listing",
        lazy="raise",
        order_by="Image.id"
    )

    def __repr__(self) -> str:
        return f"<Listing(id={self.id}, address={self.address}, price={self.price})>"

    def to_dict(self, image: Optional[str] = None) -> dict:
        """
        Convert listing to dictionary.

        Args:
            image: Representative image url for summary views

        Returns:
            Dictionary of the listing's own columns, plus ``image`` when given
        """
        result = {
            "id": self.id,
            "address": self.address,
            "city": self.city,
            "price": self.price,
            "land_size": self.land_size,
            "number_of_bedrooms": self.number_of_bedrooms,
            "number_of_bathrooms": self.number_of_bathrooms,
            "property_type": self.property_type.value,
            "realtor_id": self.realtor_id,
        }
        if image is not None:
            result["image"] = image
        return result

    def to_detail_dict(self) -> dict:
        """Listing with every image and the owning realtor's contact info."""
        result = self.to_dict()
        result["images"] = [image.to_dict() for image in self.images]
        result["realtor"] = self.realtor.to_contact_dict()
        return result


# Search filters combine city, price range and type
search_index = Index(
    "idx_listings_search",
    Listing.city,
    Listing.price,
    Listing.property_type
)
