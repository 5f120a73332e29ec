"""
contact_tracing/cli.py
Admin bootstrap for the configured store.

Usage:
    contact-tracing-admin create-admin <username> <password>
    contact-tracing-admin set-password <username> <password>
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from contact_tracing.core.config import settings
from contact_tracing.core.errors import ContactTracingError
from contact_tracing.services import accounts
from contact_tracing.store.provider import StoreProvider, build_store_provider

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contact-tracing-admin",
        description="Manage administrator accounts in the configured store.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create-admin", help="create an admin, or promote an existing member")
    create.add_argument("username")
    create.add_argument("password")

    reset = sub.add_parser("set-password", help="change a user's password")
    reset.add_argument("username")
    reset.add_argument("password")
    return parser


def main(argv: Optional[Sequence[str]] = None, stores: Optional[StoreProvider] = None) -> int:
    args = _build_parser().parse_args(argv)
    if stores is None:
        if settings.use_memory_store:
            print("STORE_BACKEND=memory: accounts would vanish on exit; point DATABASE_URL at a database.")
            return 1
        stores = build_store_provider(settings)
    stores.prepare()

    try:
        with stores.session() as store:
            if args.command == "create-admin":
                outcome, user = accounts.create_admin(store, username=args.username, password=args.password)
                if outcome == "exists":
                    print(f'Admin account "{user.username}" already exists.')
                elif outcome == "promoted":
                    print(f'Updated user "{user.username}" to admin role.')
                else:
                    print("Admin account created successfully!")
                    print(f"  Username: {user.username}")
                    print(f"  Role: {user.role}")
                    print(f"  ID: {user.id}")
                return 0

            user = accounts.set_password(store, username=args.username, password=args.password)
            if user is None:
                print(f"No user found with username: {args.username}")
                return 1
            print(f"Updated password for user: {user.username} (id={user.id}, role={user.role})")
            return 0
    except ContactTracingError as exc:
        logger.error("%s failed: %s", args.command, exc.message)
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
