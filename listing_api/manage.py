"""
Management commands: table lifecycle, first-admin bootstrap and product keys.

ADMIN and REALTOR signups need a product key issued by an admin, so the very
first admin account is created here rather than over HTTP.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from listing_api.config import settings
from listing_api.database import AsyncSessionLocal, create_tables, drop_tables, close_db_connection
from listing_api.models.user import User, UserRole
from listing_api.repositories.user import UserRepository
from listing_api.services.auth import AuthService

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def create_admin(
    session: AsyncSession,
    name: str,
    email: str,
    phone: str,
    password: str
) -> Optional[User]:
    """
    Create an admin account unless the email is already registered.

    Returns:
        The new admin, or None if an account with that email exists
    """
    user_repo = UserRepository(session)

    if await user_repo.email_exists(email):
        logger.info(f"User {email} already exists, skipping admin creation")
        return None

    admin = await user_repo.create_user({
        "name": name,
        "email": email,
        "phone": phone,
        "password": password,
        "role": UserRole.ADMIN,
    })
    logger.info(f"Admin user created: {admin.email} (ID: {admin.id})")
    return admin


async def _create_admin_command(args: argparse.Namespace) -> None:
    async with AsyncSessionLocal() as session:
        await create_admin(session, args.name, args.email, args.phone, args.password)


async def _reset_database() -> None:
    logger.warning("Resetting database - all data will be lost!")
    await drop_tables()
    await create_tables()
    logger.info("Database reset completed")


async def _run(coro) -> None:
    try:
        await coro
    finally:
        await close_db_connection()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"{settings.app_name} management commands")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create all tables")

    reset_parser = subparsers.add_parser("reset-db", help="Drop and recreate all tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    admin_parser = subparsers.add_parser("create-admin", help="Create the first admin account")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--phone", required=True)
    admin_parser.add_argument("--password", required=True)

    key_parser = subparsers.add_parser("product-key", help="Print a registration key for an email and role")
    key_parser.add_argument("email")
    key_parser.add_argument("role", type=UserRole, choices=list(UserRole))

    return parser


def main(argv=None):
    """Main CLI interface for management commands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        if args.command == "init-db":
            asyncio.run(_run(create_tables()))

        elif args.command == "reset-db":
            if not args.confirm:
                print("Database reset requires --confirm flag")
                return
            asyncio.run(_run(_reset_database()))

        elif args.command == "create-admin":
            asyncio.run(_run(_create_admin_command(args)))

        elif args.command == "product-key":
            # Key derivation needs no database session
            print(AuthService(None).generate_product_key(args.email, args.role))

    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
