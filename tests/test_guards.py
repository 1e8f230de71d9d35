"""
Tests for role and ownership guards.
"""

import pytest

from listing_api.models.user import UserRole
from listing_api.utils.guards import CallerIdentity, check_role, check_ownership
from listing_api.utils.exceptions import (
    InsufficientPermissionsError,
    ListingOwnershipError,
    UnauthorizedError
)


REALTOR = CallerIdentity(id=9, name="Realtor", role=UserRole.REALTOR)
ADMIN = CallerIdentity(id=1, name="Admin", role=UserRole.ADMIN)
BUYER = CallerIdentity(id=11, name="Buyer", role=UserRole.BUYER)


class TestCheckRole:

    def test_allowed_role_passes(self):
        assert check_role(REALTOR, [UserRole.REALTOR]) is None
        assert check_role(ADMIN, {UserRole.ADMIN, UserRole.REALTOR}) is None

    def test_disallowed_role_returns_error(self):
        error = check_role(BUYER, [UserRole.REALTOR], "create listings")

        assert isinstance(error, InsufficientPermissionsError)
        assert error.status_code == 401
        assert "create listings" in error.detail

    def test_missing_identity_returns_unauthorized(self):
        error = check_role(None, [UserRole.BUYER])
        assert type(error) is UnauthorizedError

    @pytest.mark.parametrize("role", list(UserRole))
    def test_empty_allowed_set_rejects_everyone(self, role):
        identity = CallerIdentity(id=1, name="Anyone", role=role)
        assert check_role(identity, []) is not None


class TestCheckOwnership:

    def test_owner_passes(self):
        assert check_ownership(REALTOR, 9) is None

    def test_other_realtor_rejected(self):
        error = check_ownership(REALTOR, 10)

        assert isinstance(error, ListingOwnershipError)
        assert error.status_code == 401

    def test_admin_is_not_exempt(self):
        assert isinstance(check_ownership(ADMIN, 9), ListingOwnershipError)

    def test_missing_identity(self):
        assert type(check_ownership(None, 9)) is UnauthorizedError

    def test_identity_is_immutable(self):
        with pytest.raises(AttributeError):
            REALTOR.id = 10
