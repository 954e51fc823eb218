"""Storefront database management CLI.

Usage:
    storefront-manage setup-db   # Create all tables
    storefront-manage drop-db    # Drop all tables

Tables are only created for SQL providers; set PROTEAN_ENV=production and
DATABASE_URL to target PostgreSQL.
"""

import argparse
import sys


def setup_database():
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating database schema...")
    created = setup_db(storefront)
    if created:
        print("  Schema ready.")
    else:
        print("  No SQL database configured; nothing to create.")


def drop_database():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping database schema...")
    dropped = drop_db(storefront)
    if dropped:
        print("  Schema dropped.")
    else:
        print("  No SQL database configured; nothing to drop.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
