"""
Tests for the management command line.
"""

import pytest

from listing_api.manage import build_parser, create_admin, main
from listing_api.models.user import UserRole
from listing_api.services.auth import AuthService


class TestCreateAdmin:

    @pytest.mark.asyncio
    async def test_creates_admin(self, db_session):
        admin = await create_admin(db_session, "Root", "Root@Example.com", "555-000-0000", "adminpass")

        assert admin.role == UserRole.ADMIN
        assert admin.email == "root@example.com"
        assert admin.verify_password("adminpass")

    @pytest.mark.asyncio
    async def test_existing_email_is_skipped(self, db_session, test_buyer):
        assert await create_admin(db_session, "Root", "buyer@example.com", "555", "adminpass") is None


class TestParser:

    def test_product_key_arguments(self):
        args = build_parser().parse_args(["product-key", "rita@example.com", "REALTOR"])

        assert args.email == "rita@example.com"
        assert args.role is UserRole.REALTOR

    def test_unknown_role_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["product-key", "rita@example.com", "OWNER"])

    def test_product_key_command_prints_valid_key(self, capsys):
        main(["product-key", "rita@example.com", "REALTOR"])

        key = capsys.readouterr().out.strip()
        assert AuthService(None).verify_product_key("rita@example.com", UserRole.REALTOR, key)
        assert not AuthService(None).verify_product_key("rita@example.com", UserRole.ADMIN, key)
