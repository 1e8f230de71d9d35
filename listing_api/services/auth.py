"""
Authentication service for signup, signin, session tokens and registration keys.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from listing_api.config import settings
from listing_api.repositories.user import UserRepository
from listing_api.models.user import User, UserRole
from listing_api.schemas.auth import SignupRequest
from listing_api.utils.auth import (
    create_session_token,
    decode_session_token,
    pwd_context,
    verify_password
)
from listing_api.utils.guards import CallerIdentity
from listing_api.utils.exceptions import (
    DuplicateResourceError,
    InvalidCredentialsError,
    InvalidProductKeyError,
    InvalidTokenError,
    NotFoundError,
    TokenExpiredError,
    UnauthorizedError
)
from jose import JWTError
from jose.exceptions import ExpiredSignatureError
import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

# Roles that may only self-register with an admin-issued product key
PRIVILEGED_ROLES = frozenset({UserRole.ADMIN, UserRole.REALTOR})


class AuthService:
    """
    Authentication service for managing accounts and session tokens.
    Product keys are never stored; verification recomputes the key material.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def signup(self, signup_data: SignupRequest, role: UserRole) -> str:
        """
        Register a new user with the given role and return a session token.

        Args:
            signup_data: Name, phone, email, password and optional product key
            role: Role the account is created with

        Returns:
            Signed session token for the new user

        Raises:
            InvalidProductKeyError: If a privileged role is requested without a valid key
            DuplicateResourceError: If the email is already registered
        """
        if role in PRIVILEGED_ROLES:
            if not signup_data.product_key or not self.verify_product_key(
                signup_data.email, role, signup_data.product_key
            ):
                logger.warning(f"Rejected {role.value} signup without a valid product key: {signup_data.email}")
                raise InvalidProductKeyError()

        if await self.user_repo.email_exists(signup_data.email):
            raise DuplicateResourceError("User", signup_data.email)

        try:
            user = await self.user_repo.create_user({
                "name": signup_data.name,
                "phone": signup_data.phone,
                "email": signup_data.email,
                "password": signup_data.password,
                "role": role,
            })
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            raise DuplicateResourceError("User", signup_data.email)

        logger.info(f"User signed up: {user.email} as {role.value}")
        return self.generate_token(user.name, user.id)

    async def signin(self, email: str, password: str) -> str:
        """
        Verify credentials and return a session token.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.get_by_email(email)

        if not user or not user.verify_password(password):
            logger.warning(f"Failed signin attempt for email: {email}")
            raise InvalidCredentialsError()

        logger.info(f"User signed in: {user.email}")
        return self.generate_token(user.name, user.id)

    def generate_token(self, name: str, user_id: int) -> str:
        """Issue a session token carrying the user's name and id."""
        return create_session_token(name=name, user_id=user_id)

    def generate_product_key(self, email: str, role: UserRole) -> str:
        """
        Derive a registration key for an email and role.

        Returns:
            Salted bcrypt hash of an HMAC over the email and role, keyed by the server secret
        """
        return pwd_context.hash(self._product_key_material(email, role))

    def verify_product_key(self, email: str, role: UserRole, product_key: str) -> bool:
        """Check a presented registration key against the email and role it must be bound to."""
        return verify_password(self._product_key_material(email, role), product_key)

    async def get_identity(self, token: str) -> CallerIdentity:
        """
        Resolve a session token to the caller's identity.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is malformed or badly signed
            UnauthorizedError: If the token's user no longer exists
        """
        try:
            payload = decode_session_token(token)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            logger.warning(f"Rejected session token: {e}")
            raise InvalidTokenError()

        user = await self.user_repo.get_by_id(payload.user_id)
        if not user:
            raise UnauthorizedError("User no longer exists")

        return CallerIdentity(id=user.id, name=user.name, role=user.role)

    async def get_user(self, user_id: int) -> User:
        """
        Get a user by id.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user = await self.user_repo.get_by_id(user_id)

        if not user:
            raise NotFoundError("User", user_id)

        return user

    @staticmethod
    def _product_key_material(email: str, role: UserRole) -> str:
        """
        Keyed digest of the email and role.
        bcrypt reads only 72 bytes, so the secret goes into an HMAC rather than the hashed text.
        """
        message = f"{email.lower().strip()}-{UserRole(role).value}".encode("utf-8")
        return hmac.new(settings.product_key_secret.encode("utf-8"), message, hashlib.sha256).hexdigest()
