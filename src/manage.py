"""Argile storefront management CLI.

Creates and drops the database schema and loads the sample catalogue.
Reuses the setup_db/drop_db utilities from storefront.utils.db.

Usage:
    python src/manage.py setup-db                 # Create all tables
    python src/manage.py drop-db                  # Drop all tables
    python src/manage.py seed-products [--force]  # Load the sample catalogue
"""

import argparse
import sys


def setup_database():
    """Create the storefront database schema."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop the storefront database schema."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def seed_products(force=False):
    """Insert the sample products into the catalogue."""
    from storefront.catalogue.seed import seed_catalogue
    from storefront.domain import storefront

    storefront.init()
    with storefront.domain_context():
        inserted = seed_catalogue(force=force)

    if inserted:
        print(f"Inserted {inserted} sample products.")
    else:
        print("Catalogue already has products; use --force to seed anyway.")


def main():
    parser = argparse.ArgumentParser(description="Argile storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-products", help="Load the sample catalogue")
    seed_parser.add_argument(
        "--force",
        action="store_true",
        help="Seed even when the catalogue already has products",
    )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-products":
        seed_products(force=args.force)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
