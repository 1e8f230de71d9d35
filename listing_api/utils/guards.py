"""
Authorization guards.

Plain functions that inspect a caller identity and return the error to raise,
or None when the caller may proceed. Route dependencies and handlers invoke
them before any service call, so a rejected request never reaches the store
for writing.
"""

from dataclasses import dataclass
from typing import Iterable, Optional
from listing_api.models.user import UserRole
from listing_api.utils.exceptions import (
    InsufficientPermissionsError,
    ListingOwnershipError,
    UnauthorizedError
)


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller, as resolved from a verified session token."""
    id: int
    name: str
    role: UserRole


def check_role(
    identity: Optional[CallerIdentity],
    allowed: Iterable[UserRole],
    action: str = "perform this action"
) -> Optional[UnauthorizedError]:
    """Reject callers whose role is not in ``allowed``."""
    if identity is None:
        return UnauthorizedError()

    allowed_roles = set(allowed)
    if identity.role not in allowed_roles:
        return InsufficientPermissionsError(action)
    return None


def check_ownership(
    identity: Optional[CallerIdentity],
    owner_id: int
) -> Optional[UnauthorizedError]:
    """
    Reject callers who are not the recorded owner.
    Admins are not exempt: ownership binds to the owner id alone.
    """
    if identity is None:
        return UnauthorizedError()

    if identity.id != owner_id:
        return ListingOwnershipError()
    return None
