"""Utility script to create a shop and its first administrator."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from shopkeep.application.use_cases.users import create_shop_with_owner
from shopkeep.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a shop together with its owner account.",
    )
    parser.add_argument("--shop", default="My Shop", help="Shop name (default: My Shop)")
    parser.add_argument("--first-name", default="Shop", help="Owner first name")
    parser.add_argument("--last-name", default="Owner", help="Owner last name")
    parser.add_argument(
        "--email",
        default="owner@example.com",
        help="Owner email address (default: owner@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Owner password. Prompted for when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a shop and owner from the command line arguments."""

    args = parse_args()

    password = args.password or getpass("Owner password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        shop, owner = create_shop_with_owner(
            session,
            shop_name=args.shop,
            first_name=args.first_name,
            last_name=args.last_name,
            email=args.email,
            password=password,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the shop: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while creating the shop: {exc}") from exc
    else:
        print(
            "Shop created:\n"
            f"  Shop ID: {shop.id}\n"
            f"  Shop: {shop.name}\n"
            f"  Owner ID: {owner.id}\n"
            f"  Owner email: {owner.email}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
