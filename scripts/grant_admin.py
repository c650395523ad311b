"""Grant (or revoke) administrator rights for an existing account.

The first administrator has to be created out of band; this script writes
the admin grant row directly. Database settings come from the environment
or the .env file, same as the API server.

Usage:
  python scripts/grant_admin.py alice123
  python scripts/grant_admin.py alice123 --role super_admin --permission user_manage
  python scripts/grant_admin.py alice123 --revoke
"""

from __future__ import annotations

import argparse
import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from nums_api.core.config import get_settings
from nums_api.core.db import init_database
from nums_api.core.errors import AppError
from nums_api.core.logging_config import configure_logging
from nums_api.models.tables import ADMIN_PERMISSIONS, ADMIN_ROLES
from nums_api.services.admin import grant_admin, revoke_admin


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("username", help="Account to promote")
    parser.add_argument("--role", default="admin", choices=ADMIN_ROLES)
    parser.add_argument(
        "--permission",
        action="append",
        default=[],
        choices=ADMIN_PERMISSIONS,
        help="May be repeated",
    )
    parser.add_argument(
        "--revoke",
        action="store_true",
        help="Deactivate the existing grant instead",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)
    init_database()

    if args.revoke:
        if not revoke_admin(args.username):
            print(f"No active admin grant for {args.username}")
            return 1
        print(f"Revoked admin rights of {args.username}")
        return 0

    try:
        grant = grant_admin(args.username, role=args.role, permissions=args.permission)
    except AppError as exc:
        print(f"{exc.error_code}: {exc.message}", file=sys.stderr)
        return 1

    print(f"Granted {grant.role} to {args.username} (admin_id={grant.admin_id})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
