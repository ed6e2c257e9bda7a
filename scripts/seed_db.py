from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.meal_registration.meal_registration.database.bootstrap import apply_seed_sql, ensure_default_admin


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    parser = argparse.ArgumentParser(description="Seed groups, meal windows and the first admin account.")
    parser.add_argument("--admin-username", default=getattr(settings, "DEFAULT_ADMIN_USERNAME", "admin"))
    parser.add_argument("--admin-password", default=getattr(settings, "DEFAULT_ADMIN_PASSWORD", ""))
    parser.add_argument("--admin-name", default="Administrador")
    args = parser.parse_args()

    seed_path = REPO_ROOT / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    if args.admin_password:
        ensure_default_admin(db_config, username=args.admin_username, password=args.admin_password, name=args.admin_name)
    else:
        print("WARN: no admin password given; admin account not created")

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
