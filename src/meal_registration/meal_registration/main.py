from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_default_admin, list_tables

from .container import build_container
from .admins.controller import register as register_admins
from .groups.controller import register as register_groups
from .meals.controller import register as register_meals
from .reports.controller import register as register_reports
from .system_settings.controller import register as register_settings
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    session_hours = int(getattr(settings, "ADMIN_SESSION_HOURS", 24))
    app.permanent_session_lifetime = timedelta(hours=session_hours)

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        admin_password = getattr(settings, "DEFAULT_ADMIN_PASSWORD", "")
        if admin_password:
            ensure_default_admin(
                db_config,
                username=getattr(settings, "DEFAULT_ADMIN_USERNAME", "admin"),
                password=admin_password,
            )

    local_store_path = getattr(settings, "LOCAL_STORE_PATH", "") or None
    if local_store_path and not Path(local_store_path).is_absolute():
        local_store_path = str(REPO_ROOT / local_store_path)

    container = build_container(
        db_config=db_config,
        local_store_path=local_store_path,
        sync_interval_seconds=int(getattr(settings, "SYNC_INTERVAL_SECONDS", 30)),
        user_cache_ttl_hours=int(getattr(settings, "USER_CACHE_TTL_HOURS", 24)),
        serve_stale_user_cache=bool(getattr(settings, "SERVE_STALE_USER_CACHE", True)),
        admin_session_hours=session_hours,
    )
    app.extensions["meal_registration"] = container

    register_routes(app, container)

    if bool(getattr(settings, "ENABLE_SYNC_SCHEDULER", False)):
        container.sync_scheduler.start()

    return app


def register_routes(app: Flask, container) -> None:
    register_admins(app, container)
    register_groups(app, container)
    register_users(app, container)
    register_settings(app, container)
    register_meals(app, container)
    register_reports(app, container)

    @app.route("/health", endpoint="health")
    def health():
        return jsonify(
            {
                "success": True,
                "online": container.monitor.is_online,
                "pending_count": container.sync_scheduler.pending_count,
            }
        )
