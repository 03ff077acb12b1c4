"""
Retouch CLI - Command-line interface for the engine.

Usage:
    retouch serve [--data-file F] [--host H] [--port P]   Run the HTTP API
    retouch seed --data-file F                            Seed an empty account store
    retouch accounts --data-file F                        List accounts
    retouch add-account USER PASS --data-file F [--days N]
    retouch set-password USER PASS --data-file F          Out-of-band reset (admins too)
"""

import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Retouch - Iterative AI image editing engine",
        prog="retouch",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--data-file", help="JSON account store (in-memory if omitted)")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--model", help="Image model name")

    # Store commands
    seed_parser = subparsers.add_parser("seed", help="Seed an empty account store")
    seed_parser.add_argument("--data-file", required=True)

    accounts_parser = subparsers.add_parser("accounts", help="List accounts")
    accounts_parser.add_argument("--data-file", required=True)

    add_parser = subparsers.add_parser("add-account", help="Add a member account")
    add_parser.add_argument("username")
    add_parser.add_argument("password")
    add_parser.add_argument("--data-file", required=True)
    add_parser.add_argument("--days", type=int, help="Days of validity (lifetime if omitted)")

    password_parser = subparsers.add_parser("set-password", help="Reset any account's password")
    password_parser.add_argument("username")
    password_parser.add_argument("password")
    password_parser.add_argument("--data-file", required=True)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "seed":
        cmd_seed(args)
    elif args.command == "accounts":
        cmd_accounts(args)
    elif args.command == "add-account":
        cmd_add_account(args)
    elif args.command == "set-password":
        cmd_set_password(args)
    else:
        parser.print_help()
        sys.exit(1)


def _open_store(path):
    from .accounts import JsonFileAccountStore, seed_if_empty

    store = JsonFileAccountStore(path)
    seed_if_empty(store)
    return store


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn
    from .api.app import build_service, create_app, RETOUCH_IMAGE_MODEL

    service = build_service(args.data_file, image_model=args.model or RETOUCH_IMAGE_MODEL)
    uvicorn.run(create_app(service), host=args.host, port=args.port)


def cmd_seed(args):
    """Seed an empty account store."""
    from .accounts import JsonFileAccountStore, seed_if_empty

    if seed_if_empty(JsonFileAccountStore(args.data_file)):
        print(f"Seeded {args.data_file}")
    else:
        print(f"{args.data_file} already has accounts")


def cmd_accounts(args):
    """List accounts."""
    store = _open_store(args.data_file)
    for account in store.list_accounts():
        expiry = account.expiry_date.date().isoformat() if account.expiry_date else "Lifetime"
        status = "Active" if account.is_active else "Inactive"
        print(f"{account.id:<20} {account.username:<20} {account.role.value:<7} {expiry:<11} {status}")


def cmd_add_account(args):
    """Add a member account."""
    from .accounts import AccountRegistry, SessionAuthority
    from .errors import RetouchError

    store = _open_store(args.data_file)
    registry = AccountRegistry(store, SessionAuthority(store))
    expiry = None
    if args.days is not None:
        expiry = datetime.now(timezone.utc) + timedelta(days=args.days)

    try:
        account = registry.add_account(args.username, args.password, expiry_date=expiry)
    except RetouchError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    print(f"Added {account.username} ({account.id})")


def cmd_set_password(args):
    """
    Reset a password outside the admin panel.

    This is the only path that can reset an ADMIN password.
    """
    from .accounts import SessionAuthority

    store = _open_store(args.data_file)
    if store.get_account(args.username) is None:
        print(f"Error: Account not found: {args.username}")
        sys.exit(1)

    store.put_secret(args.username, args.password)
    SessionAuthority(store).invalidate(args.username)
    print(f"Password updated for {args.username}")


if __name__ == "__main__":
    main()
