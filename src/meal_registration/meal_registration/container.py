from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .admins.mysql_admin_repository import MySQLAdminUserRepository
from .admins.service import AdminUserService, AuthService
from .admins.session import AdminSessionManager
from .core.constants import (
    DEFAULT_ADMIN_SESSION_HOURS,
    DEFAULT_SYNC_INTERVAL_SECONDS,
    DEFAULT_USER_CACHE_TTL_HOURS,
)
from .database.connection import DBConfig, DatabaseConnection
from .database.connectivity import ConnectivityMonitor
from .groups.mysql_group_repository import MySQLGroupRepository
from .groups.service import GroupService
from .meals.mysql_meal_repository import MySQLMealRepository
from .meals.offline_queue import OfflineQueue
from .meals.service import MealRegistrationService
from .meals.sync import OfflineSyncScheduler
from .reports.service import ReportService
from .storage.flask_session_store import FlaskSessionStore
from .storage.json_file_store import FileKeyValueStore
from .storage.memory_store import InMemoryKeyValueStore
from .storage.repository import KeyValueStore
from .system_settings.mysql_settings_repository import MySQLSystemSettingsRepository
from .system_settings.service import SystemSettingsService
from .users.cache import UserCache
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    monitor: ConnectivityMonitor
    local_store: KeyValueStore

    offline_queue: OfflineQueue
    sync_scheduler: OfflineSyncScheduler
    user_cache: UserCache
    admin_sessions: AdminSessionManager

    auth_service: AuthService
    admin_user_service: AdminUserService
    user_service: UserService
    group_service: GroupService
    settings_service: SystemSettingsService
    meal_service: MealRegistrationService
    report_service: ReportService


def build_container(
    *,
    db_config: dict,
    local_store_path: Optional[str] = None,
    sync_interval_seconds: int = DEFAULT_SYNC_INTERVAL_SECONDS,
    user_cache_ttl_hours: int = DEFAULT_USER_CACHE_TTL_HOURS,
    serve_stale_user_cache: bool = True,
    admin_session_hours: int = DEFAULT_ADMIN_SESSION_HOURS,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connect_timeout=int(db_config.get("connect_timeout", 5)),
    )
    conn = DatabaseConnection.get_instance(config)
    monitor = ConnectivityMonitor(conn.ping)

    local_store: KeyValueStore
    if local_store_path:
        local_store = FileKeyValueStore(local_store_path)
    else:
        local_store = InMemoryKeyValueStore()

    meals_repo = MySQLMealRepository(conn)
    users_repo = MySQLUserRepository(conn)
    groups_repo = MySQLGroupRepository(conn)
    admins_repo = MySQLAdminUserRepository(conn)
    settings_repo = MySQLSystemSettingsRepository(conn)

    offline_queue = OfflineQueue(local_store, meals_repo)
    sync_scheduler = OfflineSyncScheduler(offline_queue, monitor, interval_seconds=sync_interval_seconds)
    user_cache = UserCache(
        local_store,
        users_repo,
        monitor=monitor,
        ttl_hours=user_cache_ttl_hours,
        serve_stale=serve_stale_user_cache,
    )
    admin_sessions = AdminSessionManager(FlaskSessionStore(), lifetime_hours=admin_session_hours)

    meal_service = MealRegistrationService(meals_repo, settings_repo, offline_queue, monitor, user_cache)

    return Container(
        monitor=monitor,
        local_store=local_store,
        offline_queue=offline_queue,
        sync_scheduler=sync_scheduler,
        user_cache=user_cache,
        admin_sessions=admin_sessions,
        auth_service=AuthService(admins_repo),
        admin_user_service=AdminUserService(admins_repo),
        user_service=UserService(users_repo, groups_repo),
        group_service=GroupService(groups_repo),
        settings_service=SystemSettingsService(settings_repo),
        meal_service=meal_service,
        report_service=ReportService(meals_repo, users_repo, groups_repo),
    )
