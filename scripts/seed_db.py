from __future__ import annotations

import argparse
import importlib
import os

from dotenv import load_dotenv

from monthly_tracker.config import get_settings_module
from monthly_tracker.container import build_container
from monthly_tracker.database.bootstrap import ensure_admin_user

DEMO_MEMBERS = ["Ann", "Bo", "Chen", "Dara"]


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo members and an admin account.")
    parser.add_argument("--admin-email", default=os.getenv("ADMIN_EMAIL", "admin@example.com"))
    parser.add_argument("--admin-password", default=os.getenv("ADMIN_PASSWORD", "admin123"))
    parser.add_argument("--no-members", action="store_true", help="only ensure the admin account")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))

    ensure_admin_user(container.conn, email=args.admin_email.lower(), password=args.admin_password)

    if not args.no_members:
        existing = {m.name for m in container.members_repo.list_all()}
        for name in DEMO_MEMBERS:
            if name not in existing:
                container.members_repo.insert(name=name)

    print(f"OK: Seeded database (admin={args.admin_email})")


if __name__ == "__main__":
    main()
