"""Seed the database with an Admin role and, optionally, a first admin user.

Safe to run repeatedly: existing records are left in place (the Admin role
gets any permission it is missing).

Examples:
    python scripts/seed.py
    ADMIN_PASSWORD='S3cret!pass' python scripts/seed.py --admin-username admin --admin-email admin@example.com
"""
from __future__ import annotations
import argparse
import logging
import os
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backoffice.config import load_settings
from backoffice.container import Container, build_container
from backoffice.core.rbac import Permission
from backoffice.core.use_case import run
from backoffice.db.session import get_engine, init_db, make_session_scope

logger = logging.getLogger("seed")

ADMIN_ROLE_NAME = "Admin"


def ensure_admin_role(container: Container) -> str:
    """Create the Admin role (or top up its permissions) and return its id."""
    all_permissions = [p.value for p in Permission]
    role = container.role_repo.find_one(name=ADMIN_ROLE_NAME)

    if role is None:
        result = run(container.create_role, {
            "name": ADMIN_ROLE_NAME,
            "description": "Full access to every back-office resource",
            "permissions": all_permissions,
        })
        if result.is_failure():
            raise RuntimeError(f"Could not create role {ADMIN_ROLE_NAME}: {result.value.message}")
        logger.info("Created role %s (%s)", ADMIN_ROLE_NAME, result.value["id"])
        return result.value["id"]

    missing = set(Permission) - set(role.permissions)
    if missing:
        result = run(container.update_role, {"id": role.id, "permissions": all_permissions})
        if result.is_failure():
            raise RuntimeError(f"Could not update role {ADMIN_ROLE_NAME}: {result.value.message}")
        logger.info("Granted %s to role %s", sorted(p.value for p in missing), ADMIN_ROLE_NAME)
    else:
        logger.info("Role %s already up to date", ADMIN_ROLE_NAME)
    return role.id


def ensure_admin_user(container: Container, role_id: str, args: argparse.Namespace) -> None:
    if container.user_repo.exists(username=args.admin_username):
        logger.info("User %s already exists", args.admin_username)
        return

    password = args.admin_password or os.environ.get("ADMIN_PASSWORD")
    if not password:
        raise RuntimeError("Admin password required (--admin-password or ADMIN_PASSWORD)")

    result = run(container.create_user, {
        "name": args.admin_name,
        "username": args.admin_username,
        "email": args.admin_email,
        "password": password,
        "role_id": role_id,
    })
    if result.is_failure():
        raise RuntimeError(f"Could not create user {args.admin_username}: {result.value.message}")
    logger.info("Created user %s (%s)", args.admin_username, result.value["id"])


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Back-office database seeding")
    parser.add_argument("--admin-username", help="Also create this admin user")
    parser.add_argument("--admin-email", default=os.environ.get("ADMIN_EMAIL"))
    parser.add_argument("--admin-name", default="Administrator")
    parser.add_argument("--admin-password", help="Defaults to the ADMIN_PASSWORD environment variable")
    args = parser.parse_args(argv)

    if args.admin_username and not args.admin_email:
        parser.error("--admin-email (or ADMIN_EMAIL) is required with --admin-username")

    logging.basicConfig(level=logging.INFO, format="[%(name)s] %(message)s")

    cfg = load_settings()
    engine = get_engine(cfg.database_url, echo=cfg.sql_echo)
    init_db(engine)
    container = build_container(cfg, make_session_scope(engine))

    try:
        role_id = ensure_admin_role(container)
        if args.admin_username:
            ensure_admin_user(container, role_id, args)
    except RuntimeError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        engine.dispose()

    return 0


if __name__ == "__main__":
    sys.exit(main())
