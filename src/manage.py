"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db       # Create all tables
    python src/manage.py drop-db        # Drop all tables
    python src/manage.py create-admin --email admin@shop.local --password secret1 --name Admin
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def create_admin(email, password, name):
    from protean.exceptions import ValidationError

    from storefront.identity.administration import CreateUser
    from storefront.identity.credentials import hash_password
    from storefront.identity.user import Role

    domain = _domain()
    with domain.domain_context():
        command = CreateUser(
            email=email,
            name=name,
            password_hash=hash_password(password),
            role=Role.ADMIN.value,
            actor="manage.py",
        )
        try:
            user_id = domain.process(command, asynchronous=False)
        except ValidationError as exc:
            print(f"Could not create admin: {exc.messages}", file=sys.stderr)
            sys.exit(1)
    print(f"Admin {email} created with id {user_id}.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Create an ADMIN user")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--name", default="Administrator")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        if len(args.password) < 6:
            parser.error("--password must be at least 6 characters")
        create_admin(args.email, args.password, args.name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
