from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import SystemSettings
from .repository import SystemSettingsRepository


class MySQLSystemSettingsRepository(SystemSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[SystemSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, breakfast_start_time, breakfast_deadline, lunch_start_time, lunch_deadline, updated_at
                FROM system_settings
                LIMIT 1
                """
            )
            row = fetchone(cur)
            if not row:
                return None
            return SystemSettings(
                settings_id=str(row["id"]),
                breakfast_start_time=normalize_mysql_time(row.get("breakfast_start_time")),
                breakfast_deadline=normalize_mysql_time(row["breakfast_deadline"]),
                lunch_start_time=normalize_mysql_time(row.get("lunch_start_time")),
                lunch_deadline=normalize_mysql_time(row["lunch_deadline"]),
                updated_at=row.get("updated_at"),
            )

    def update_times(
        self,
        settings_id: str,
        *,
        breakfast_start_time: Optional[time],
        breakfast_deadline: time,
        lunch_start_time: Optional[time],
        lunch_deadline: time,
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE system_settings
                SET breakfast_start_time=%s, breakfast_deadline=%s,
                    lunch_start_time=%s, lunch_deadline=%s, updated_at=%s
                WHERE id=%s
                """,
                (breakfast_start_time, breakfast_deadline, lunch_start_time, lunch_deadline, updated_at, settings_id),
            )
            return cur.rowcount > 0
