from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AdminUser
from .repository import AdminUserRepository

_COLUMNS = "id, username, name, password_hash, active, created_at, updated_at"


def _row_to_admin(row: Dict[str, Any]) -> AdminUser:
    return AdminUser(
        admin_id=str(row["id"]),
        username=row["username"],
        name=row["name"],
        password_hash=row["password_hash"],
        active=bool(row.get("active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLAdminUserRepository(AdminUserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, admin_id: str) -> Optional[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM admin_users WHERE id=%s", (admin_id,))
            row = fetchone(cur)
            return _row_to_admin(row) if row else None

    def get_by_username(self, username: str) -> Optional[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM admin_users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _row_to_admin(row) if row else None

    def list_all(self) -> Sequence[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM admin_users ORDER BY created_at DESC")
            return [_row_to_admin(r) for r in fetchall(cur)]

    def create_admin(self, *, username: str, name: str, password_hash: str) -> str:
        admin_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO admin_users(id, username, name, password_hash, active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (admin_id, username, name, password_hash),
            )
        return admin_id

    def update_password(self, admin_id: str, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE admin_users SET password_hash=%s WHERE id=%s", (password_hash, admin_id))
            return cur.rowcount > 0

    def set_active(self, admin_id: str, *, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE admin_users SET active=%s WHERE id=%s", (1 if active else 0, admin_id))
            return cur.rowcount > 0
