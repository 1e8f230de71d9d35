"""
Authentication utilities for session token management and password hashing.
Provides bcrypt hashing through passlib and JWT signing through python-jose.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from listing_api.config import settings


# Password hashing context, cost factor from settings
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds
)

# bcrypt ignores input past this many bytes
BCRYPT_MAX_BYTES = 72


class SessionTokenPayload:
    """Decoded session token claims."""

    def __init__(self, user_id: int, name: str, exp: datetime):
        self.user_id = user_id
        self.name = name
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionTokenPayload":
        """Create SessionTokenPayload from decoded claims."""
        return cls(
            user_id=int(data["id"]),
            name=data["name"],
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )


def create_session_token(
    name: str,
    user_id: int,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed, time-bounded session token.

    Args:
        name: User's display name
        user_id: User's id
        expires_delta: Optional custom validity window

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.session_token_expire_minutes)

    to_encode = {
        "name": name,
        "id": user_id,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def decode_session_token(token: str) -> SessionTokenPayload:
    """
    Verify and decode a session token.

    Args:
        token: JWT token string

    Returns:
        Decoded payload

    Raises:
        JWTError: If the token is malformed, badly signed, expired or lacks claims
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )

    if payload.get("id") is None or payload.get("name") is None:
        raise JWTError("Invalid token payload")

    try:
        return SessionTokenPayload.from_dict(payload)
    except (KeyError, TypeError, ValueError) as e:
        raise JWTError(f"Token validation error: {str(e)}")


def hash_password(password: str) -> str:
    """
    Hash a secret using bcrypt.

    Args:
        password: Plain text secret

    Returns:
        Salted bcrypt hash
    """
    if not password:
        raise ValueError("Password cannot be empty")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes")

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a secret against a bcrypt hash.
    Malformed hashes, and secrets longer than bcrypt reads, verify as False.
    """
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False

