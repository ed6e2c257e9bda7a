from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_equals
from .model import User
from .repository import UserRepository

_COLUMNS = "id, name, group_type, group_id, active, created_at, updated_at"


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=str(row["id"]),
        name=row["name"],
        group_type=row["group_type"],
        group_id=row.get("group_id"),
        active=bool(row.get("active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_active(self, *, group_id: Optional[str] = None) -> Sequence[User]:
        filters: Dict[str, Any] = {"active": 1}
        if group_id:
            filters["group_id"] = group_id
        where, params = where_equals(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users {where} ORDER BY name", params)
            return [_row_to_user(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY name")
            return [_row_to_user(r) for r in fetchall(cur)]

    def list_admin_view(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.name, u.group_type, u.group_id, u.active, u.created_at,
                       g.display_name AS group_display_name, g.color AS group_color
                FROM users u
                LEFT JOIN `groups` g ON g.id = u.group_id
                ORDER BY u.name
                """
            )
            rows = fetchall(cur)
            out: list[dict] = []
            for r in rows:
                out.append(
                    {
                        "id": r["id"],
                        "name": r["name"],
                        "group_type": r["group_type"],
                        "group_id": r.get("group_id"),
                        "group_name": r.get("group_display_name") or "-",
                        "group_color": r.get("group_color"),
                        "active": bool(r.get("active", True)),
                        "created_at": r["created_at"].isoformat() if r.get("created_at") else None,
                    }
                )
            return out

    def create_user(self, *, name: str, group_type: str, group_id: str) -> str:
        user_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, name, group_type, group_id, active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (user_id, name, group_type, group_id),
            )
        return user_id

    def update_user(self, user_id: str, *, name: str, group_type: str, group_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET name=%s, group_type=%s, group_id=%s WHERE id=%s",
                (name, group_type, group_id, user_id),
            )
            return cur.rowcount > 0

    def set_active(self, user_id: str, *, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET active=%s WHERE id=%s", (1 if active else 0, user_id))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0
