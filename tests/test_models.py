"""
Tests for database models.
Covers serialization helpers, email normalization and password checks.
"""

import pytest

from listing_api.models.user import User, UserRole
from listing_api.models.listing import Listing, PropertyType
from listing_api.models.image import Image
from listing_api.models.message import Message
from pydantic import ValidationError as PydanticValidationError

from listing_api.schemas.auth import SignupRequest
from listing_api.utils.auth import BCRYPT_MAX_BYTES, hash_password


def make_realtor() -> User:
    return User(
        id=9,
        name="Jane Realtor",
        email="jane@example.com",
        phone="555-555-5555",
        hashed_password=hash_password("secret123"),
        role=UserRole.REALTOR
    )


def make_listing(realtor: User) -> Listing:
    listing = Listing(
        id=1,
        address="1 Main St",
        city="Springfield",
        price=250000.0,
        land_size=500.0,
        number_of_bedrooms=3,
        number_of_bathrooms=2.0,
        property_type=PropertyType.RESIDENTIAL,
        realtor_id=realtor.id
    )
    listing.realtor = realtor
    listing.images = [Image(id=1, url="http://x/a.jpg"), Image(id=2, url="http://x/b.jpg")]
    return listing


class TestUserModel:
    """Test User model helpers."""

    def test_normalize_email_lowercases(self):
        assert User.normalize_email("Jane.Doe@Example.COM") == "jane.doe@example.com"

    def test_normalize_email_rejects_invalid(self):
        with pytest.raises(ValueError, match="Invalid email format"):
            User.normalize_email("not-an-email")

    def test_verify_password(self):
        user = make_realtor()
        assert user.verify_password("secret123") is True
        assert user.verify_password("wrong") is False

    def test_password_past_bcrypt_limit_does_not_verify(self):
        password = "p" * BCRYPT_MAX_BYTES
        user = make_realtor()
        user.hashed_password = hash_password(password)

        assert user.verify_password(password)
        assert not user.verify_password(password + "anything")

    def test_hash_password_rejects_overlong_secret(self):
        with pytest.raises(ValueError, match="exceed"):
            hash_password("p" * (BCRYPT_MAX_BYTES + 1))

    def test_contact_dict(self):
        assert make_realtor().to_contact_dict() == {
            "name": "Jane Realtor",
            "email": "jane@example.com",
            "phone": "555-555-5555",
        }


class TestListingModel:
    """Test Listing model helpers."""

    def test_to_dict_without_image_omits_key(self):
        data = make_listing(make_realtor()).to_dict()
        assert "image" not in data
        assert data["property_type"] == "RESIDENTIAL"
        assert data["realtor_id"] == 9

    def test_to_dict_with_image(self):
        data = make_listing(make_realtor()).to_dict(image="http://x/a.jpg")
        assert data["image"] == "http://x/a.jpg"

    def test_to_detail_dict_includes_images_and_realtor(self):
        data = make_listing(make_realtor()).to_detail_dict()
        assert data["images"] == [
            {"id": 1, "url": "http://x/a.jpg"},
            {"id": 2, "url": "http://x/b.jpg"},
        ]
        assert data["realtor"] == {
            "name": "Jane Realtor",
            "email": "jane@example.com",
            "phone": "555-555-5555",
        }


class TestMessageModel:
    """Test Message model helpers."""

    def test_inbox_dict_attaches_buyer_contact(self):
        buyer = User(
            id=11,
            name="Bob Buyer",
            email="bob@example.com",
            phone="555-111-2222",
            hashed_password="x",
            role=UserRole.BUYER
        )
        message = Message(id=3, message="Is this available?", listing_id=1, realtor_id=9, buyer_id=11)
        message.buyer = buyer

        assert message.to_inbox_dict() == {
            "id": 3,
            "listing_id": 1,
            "message": "Is this available?",
            "buyer": {"name": "Bob Buyer", "phone": "555-111-2222", "email": "bob@example.com"},
        }


class TestSignupPasswordLimits:
    """Signup passwords must fit in what bcrypt actually hashes."""

    @staticmethod
    def signup(password: str) -> SignupRequest:
        return SignupRequest(
            name="Jane",
            phone="555-555-5555",
            email="jane@example.com",
            password=password
        )

    def test_password_at_limit_accepted(self):
        assert self.signup("p" * BCRYPT_MAX_BYTES).password == "p" * BCRYPT_MAX_BYTES

    @pytest.mark.parametrize("password", ["p" * (BCRYPT_MAX_BYTES + 1), "é" * 40])
    def test_password_over_limit_rejected(self, password):
        with pytest.raises(PydanticValidationError):
            self.signup(password)
