"""
FastAPI dependency injection utilities for authentication and services.
Provides reusable dependencies for identity extraction, role gates and ownership checks.
"""

from typing import Optional
from fastapi import Depends, Path
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from listing_api.database import get_db
from listing_api.models.user import UserRole
from listing_api.services.auth import AuthService
from listing_api.services.listing import ListingService
from listing_api.utils.guards import CallerIdentity, check_role, check_ownership
from listing_api.utils.exceptions import UnauthorizedError


# HTTP Bearer token security scheme; a missing header is reported as our own 401
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Get authentication service instance."""
    return AuthService(db)


async def get_listing_service(db: AsyncSession = Depends(get_db)) -> ListingService:
    """Get listing service instance."""
    return ListingService(db)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> CallerIdentity:
    """
    Get the authenticated caller from the bearer token.

    Raises:
        UnauthorizedError: If no token is provided or its user no longer exists
        InvalidTokenError: If the token is invalid
        TokenExpiredError: If the token has expired
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_identity(credentials.credentials)


def require_roles(*roles: UserRole, action: str = "perform this action"):
    """
    Create a dependency that admits only callers holding one of ``roles``.

    Args:
        roles: Allowed roles
        action: Description used in the rejection message

    Returns:
        Dependency function resolving to the caller identity
    """
    async def role_dependency(
        identity: CallerIdentity = Depends(get_current_identity)
    ) -> CallerIdentity:
        error = check_role(identity, roles, action)
        if error is not None:
            raise error
        return identity

    return role_dependency


async def ensure_listing_owner(
    listing_id: int,
    identity: CallerIdentity,
    listing_service: ListingService
) -> None:
    """
    Reject the caller unless they own the listing.

    Raises:
        ListingNotFoundError: If the listing doesn't exist
        ListingOwnershipError: If the caller is not the listing's realtor
    """
    owner = await listing_service.get_owner_of(listing_id)
    error = check_ownership(identity, owner.id)
    if error is not None:
        raise error


def require_listing_owner(*roles: UserRole, action: str = "manage this listing"):
    """
    Create a dependency combining the role gate with the ownership check
    for the ``listing_id`` path parameter.
    """
    role_dependency = require_roles(*roles, action=action)

    async def ownership_dependency(
        listing_id: int = Path(..., description="Listing ID"),
        identity: CallerIdentity = Depends(role_dependency),
        listing_service: ListingService = Depends(get_listing_service)
    ) -> CallerIdentity:
        await ensure_listing_owner(listing_id, identity, listing_service)
        return identity

    return ownership_dependency
