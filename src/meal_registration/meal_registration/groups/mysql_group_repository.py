from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Group
from .repository import GroupRepository

_COLUMNS = "id, name, display_name, color, active, created_at, updated_at"


def _row_to_group(row: Dict[str, Any]) -> Group:
    return Group(
        group_id=str(row["id"]),
        name=row["name"],
        display_name=row["display_name"],
        color=row["color"],
        active=bool(row.get("active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLGroupRepository(GroupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, group_id: str) -> Optional[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM `groups` WHERE id=%s", (group_id,))
            row = fetchone(cur)
            return _row_to_group(row) if row else None

    def get_by_name(self, name: str) -> Optional[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM `groups` WHERE name=%s", (name,))
            row = fetchone(cur)
            return _row_to_group(row) if row else None

    def list_active(self) -> Sequence[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM `groups` WHERE active=1 ORDER BY display_name")
            return [_row_to_group(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM `groups` ORDER BY display_name")
            return [_row_to_group(r) for r in fetchall(cur)]

    def create_group(self, *, name: str, display_name: str, color: str) -> str:
        group_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO `groups`(id, name, display_name, color, active) VALUES(%s,%s,%s,%s,1)",
                (group_id, name, display_name, color),
            )
        return group_id

    def update_group(self, group_id: str, *, display_name: str, color: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE `groups` SET display_name=%s, color=%s WHERE id=%s",
                (display_name, color, group_id),
            )
            return cur.rowcount > 0

    def set_active(self, group_id: str, *, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE `groups` SET active=%s WHERE id=%s", (1 if active else 0, group_id))
            return cur.rowcount > 0
