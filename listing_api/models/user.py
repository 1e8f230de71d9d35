"""
User model with authentication and role management.
Covers administrators, realtors who own listings, and buyers who send inquiries.
"""

from sqlalchemy import String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from listing_api.database import Base
from listing_api.utils.auth import verify_password
from email_validator import validate_email, EmailNotValidError
import enum


class UserRole(str, enum.Enum):
    """User role enumeration for role-based access control."""
    ADMIN = "ADMIN"
    REALTOR = "REALTOR"
    BUYER = "BUYER"


class User(Base):
    """
    User model for authentication and authorization.
    The role is fixed at signup.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="User's display name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )

    phone: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Contact phone number"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole),
        nullable=False,
        index=True,
        comment="User role for access control"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

    @classmethod
    def normalize_email(cls, email: str) -> str:
        """
        Validate email format using email-validator.

        Args:
            email: Email address to validate

        Returns:
            Normalized email address

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    def verify_password(self, password: str) -> bool:
        """Verify a plain text password against the stored hash."""
        return verify_password(password, self.hashed_password)

    def to_contact_dict(self) -> dict:
        """Public contact card, as attached to listings and messages."""
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
        }
