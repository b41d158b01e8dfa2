"""CLI entrypoint for userbase."""

import argparse
import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

from .api.users_api import (
    UserOutput,
    create_user,
    delete_user,
    list_all_users,
    list_users,
    restore_user,
    soft_delete_user,
)
from .config.loader import load_config, load_config_or_defaults
from .database.migrate import ensure_users_name_normalized
from .database.sqlite_client import session_context
from .database.user_repo import UserSqlRepository
from .shared.errors import RepositoryError
from .shared.search import SearchParams
from .users.in_memory_repo import UserInMemoryRepository
from .users.repository import UserRepository
from .utils.logging import configure_logging, get_logger
from .utils.time import to_utc_z

logger = get_logger(__name__)


@contextmanager
def open_repository(config: Dict[str, Any]) -> Generator[UserRepository, None, None]:
    """Build the repository named by config['storage']['backend']."""
    storage = config["storage"]
    if storage["backend"] == "memory":
        logger.warning("Memory backend selected; data is discarded when this command exits")
        yield UserInMemoryRepository()
        return

    sqlite_path = storage["sqlite_path"]
    ensure_users_name_normalized(sqlite_path)
    with session_context(sqlite_path) as session:
        yield UserSqlRepository(session)


def _print_users(users: List[UserOutput]) -> None:
    if not users:
        print("No users found.")
        return
    print(f"{'ID':<38} {'Name':<30} {'Email':<30} {'Created':<28} {'Deleted':<28}")
    print("-" * 158)
    for user in users:
        deleted = to_utc_z(user.deleted_at) if user.deleted_at else "-"
        print(f"{user.id:<38} {user.name:<30} {user.email:<30} {to_utc_z(user.created_at):<28} {deleted:<28}")


def cmd_add(args: argparse.Namespace, repo: UserRepository) -> None:
    """Create a user."""
    user = create_user(repo, name=args.name, email=args.email, password=args.password)
    print(user.id)


def cmd_search(args: argparse.Namespace, repo: UserRepository) -> None:
    """Search active users."""
    params = SearchParams(
        page=args.page,
        per_page=args.per_page,
        sort=args.sort,
        sort_dir=args.sort_dir,
        filter=args.filter,
    )
    result = list_users(repo, params)
    if args.format == "json":
        print(result.model_dump_json(indent=2))
        return
    _print_users(result.items)
    print(f"\nPage {result.current_page}/{result.last_page} ({result.total} total, sorted by {result.sort} {result.sort_dir.value})")


def cmd_list(args: argparse.Namespace, repo: UserRepository) -> None:
    """List every user, optionally including soft-deleted ones."""
    users = list_all_users(repo, include_deleted=args.include_deleted)
    if args.format == "json":
        print(json.dumps([user.model_dump(mode="json") for user in users], indent=2))
        return
    _print_users(users)


def cmd_delete(args: argparse.Namespace, repo: UserRepository) -> None:
    """Soft delete a user, or remove it permanently with --hard."""
    if args.hard:
        delete_user(repo, args.user_id)
        print(f"Deleted {args.user_id} permanently")
    else:
        soft_delete_user(repo, args.user_id)
        print(f"Soft deleted {args.user_id}")


def cmd_restore(args: argparse.Namespace, repo: UserRepository) -> None:
    """Restore a soft-deleted user."""
    user = restore_user(repo, args.user_id)
    print(f"Restored {user.id}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="userbase",
        description="User directory with soft delete and accent-insensitive search",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: userbase.config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override logging.level from config (e.g. DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    add_parser = subparsers.add_parser("add", help="Create a user")
    add_parser.add_argument("--name", required=True)
    add_parser.add_argument("--email", required=True)
    add_parser.add_argument("--password", required=True)
    add_parser.set_defaults(func=cmd_add)

    search_parser = subparsers.add_parser("search", help="Search active users by name")
    search_parser.add_argument("--filter", type=str, default=None, help="Accent-insensitive name filter")
    search_parser.add_argument("--page", type=int, default=1)
    search_parser.add_argument("--per-page", type=int, default=15)
    search_parser.add_argument(
        "--sort",
        type=str,
        default=None,
        help="name, created_at or updated_at (default: created_at, newest first)",
    )
    search_parser.add_argument("--sort-dir", type=str, choices=["asc", "desc"], default=None)
    search_parser.add_argument("--format", choices=["table", "json"], default="table")
    search_parser.set_defaults(func=cmd_search)

    list_parser = subparsers.add_parser("list", help="List users")
    list_parser.add_argument(
        "--include-deleted",
        action="store_true",
        help="Include soft-deleted users",
    )
    list_parser.add_argument("--format", choices=["table", "json"], default="table")
    list_parser.set_defaults(func=cmd_list)

    delete_parser = subparsers.add_parser("delete", help="Soft delete a user")
    delete_parser.add_argument("user_id")
    delete_parser.add_argument(
        "--hard",
        action="store_true",
        help="Remove the user permanently instead of soft deleting",
    )
    delete_parser.set_defaults(func=cmd_delete)

    restore_parser = subparsers.add_parser("restore", help="Restore a soft-deleted user")
    restore_parser.add_argument("user_id")
    restore_parser.set_defaults(func=cmd_restore)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else load_config_or_defaults()
    configure_logging(args.log_level or config["logging"]["level"])

    try:
        with open_repository(config) as repo:
            args.func(args, repo)
    except RepositoryError as e:
        logger.debug(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
