"""
User repository for account registration and credential lookups.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from listing_api.repositories.base import BaseRepository
from listing_api.models.user import User
from listing_api.utils.auth import hash_password
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Emails are stored lower-cased so lookups are case-insensitive.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user, hashing the supplied password.

        Args:
            user_data: Dictionary with name, email, phone, password and role

        Returns:
            Created user instance

        Raises:
            ValueError: If the email or password is invalid
        """
        try:
            data = dict(user_data)
            email = User.normalize_email(data.pop("email"))
            hashed_password = hash_password(data.pop("password"))

            created_user = await self.create({
                **data,
                "email": email,
                "hashed_password": hashed_password,
            })
            logger.info(f"Created user: {created_user.email} (ID: {created_user.id}, role: {created_user.role.value})")
            return created_user
        except ValueError as e:
            logger.error(f"User validation failed: {e}")
            raise

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Returns:
            User instance if found, None otherwise
        """
        try:
            normalized_email = email.lower().strip()
            result = await self.db.execute(select(User).where(User.email == normalized_email))
            user = result.scalar_one_or_none()

            if user:
                logger.debug(f"Retrieved user by email: {email}")
            else:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def email_exists(self, email: str) -> bool:
        """Check whether an account already uses this email."""
        try:
            normalized_email = email.lower().strip()
            result = await self.db.execute(
                select(func.count(User.id)).where(User.email == normalized_email)
            )
            return result.scalar() > 0
        except Exception as e:
            logger.error(f"Failed to check email availability for {email}: {e}")
            raise
