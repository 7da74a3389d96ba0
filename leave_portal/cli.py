"""
Operator commands: create tables, provision accounts, load demo data.

    leave-portal init-db
    leave-portal create-user "Jane Doe" jane@example.com s3cret --admin
    leave-portal seed
"""

import argparse
import sys
from typing import List, Optional

from leave_portal.config.logging import get_logger, setup_logging
from leave_portal.db.init_db import init_db, reset_db
from leave_portal.db.session import SessionLocal
from leave_portal.services.user import UserService

logger = get_logger(__name__)

DEMO_ACCOUNTS = (
    ("Admin User", "admin@example.com", "admin123", True),
    ("Alice Employee", "alice@example.com", "alice123", False),
    ("Bob Employee", "bob@example.com", "bob123", False),
)


def create_user(full_name: str, email: str, password: str, is_admin: bool = False) -> bool:
    """Provision one account. Returns True when it was created."""
    db = SessionLocal()
    try:
        result = UserService(db).create_user(full_name, email, password, is_admin=is_admin)
    finally:
        db.close()

    if not result:
        logger.error(f"Could not create {email}: {result.message}")
        return False
    logger.info(f"Created {'admin' if is_admin else 'employee'} {email}")
    return True


def seed() -> int:
    """Create the demo accounts that do not exist yet."""
    init_db()
    return sum(create_user(*account) for account in DEMO_ACCOUNTS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="leave-portal", description=__doc__.splitlines()[1])
    commands = parser.add_subparsers(dest="command", required=True)

    init_cmd = commands.add_parser("init-db", help="create missing tables")
    init_cmd.add_argument("--reset", action="store_true", help="drop every table first")

    user_cmd = commands.add_parser("create-user", help="provision an account")
    user_cmd.add_argument("full_name")
    user_cmd.add_argument("email")
    user_cmd.add_argument("password")
    user_cmd.add_argument("--admin", action="store_true")

    commands.add_parser("seed", help="create demo accounts")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    if args.command == "init-db":
        if args.reset:
            reset_db()
        else:
            init_db()
        return 0
    if args.command == "create-user":
        init_db()
        return 0 if create_user(args.full_name, args.email, args.password, args.admin) else 1
    if args.command == "seed":
        created = seed()
        logger.info(f"Seed finished, {created} account(s) created")
        return 0
    return 2


if __name__ == "__main__":
    sys.exit(main())
