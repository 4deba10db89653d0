#!/usr/bin/env python3
"""
Operator commands for a MiniLink deployment.

    minilink create-token --user-id 1 --days 30
    minilink reset-password --email ann@example.com

``reset-password`` never reads or reveals the existing password; it
replaces the stored hash.  If ``--password`` is omitted, the new
password is prompted for without echo.  Both commands use the
database configured through ``DATABASE_URL`` (or ``--db``).
"""

import argparse
import asyncio
import getpass
import sys
from typing import List, Optional

from minilink_api.app.core.config import settings
from minilink_api.app.core.db import init_db
from minilink_api.app.core.errors import AppError
from minilink_api.app.core.security import create_user_token
from minilink_api.app.services.user_service import UserService


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _create_token(args: argparse.Namespace) -> int:
    user = asyncio.run(UserService.get_user_by_id(args.user_id))
    if not user:
        print(f"[!] No user with id {args.user_id}", file=sys.stderr)
        return 1
    print(create_user_token(user.id, expires_delta=args.days * 24 * 60 * 60))
    return 0


def _reset_password(args: argparse.Namespace) -> int:
    password = args.password
    if password is None:
        password = getpass.getpass("New password: ")
        if password != getpass.getpass("Repeat password: "):
            print("[!] Passwords do not match", file=sys.stderr)
            return 1
    try:
        user = asyncio.run(UserService.set_password(args.email, password))
    except AppError as e:
        print(f"[!] {e.message}", file=sys.stderr)
        return 1
    print(f"[+] Password updated for {user.email}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minilink", description="MiniLink operator commands.")
    parser.add_argument("--db", help="Path to the SQLite database (defaults to DATABASE_URL)")
    sub = parser.add_subparsers(dest="command", required=True)

    token = sub.add_parser("create-token", help="Print a signed token for a user")
    token.add_argument("--user-id", type=int, required=True)
    token.add_argument("--days", type=_positive_int, default=7, help="Token lifetime in days (default 7)")
    token.set_defaults(func=_create_token)

    reset = sub.add_parser("reset-password", help="Set a new password for a user")
    reset.add_argument("--email", required=True)
    reset.add_argument("--password", help="New password; prompted for if omitted")
    reset.set_defaults(func=_reset_password)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.db:
        settings.database_url = args.db
    init_db()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
