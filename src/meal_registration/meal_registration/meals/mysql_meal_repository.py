from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import MealType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_contains, normalize_mysql_time
from .model import MealRecord, NewMealRecord
from .repository import MealRepository

_COLUMNS = "id, user_id, user_name, group_id, group_type, meal_type, meal_date, meal_time, created_at"


def _row_to_record(row: Dict[str, Any]) -> MealRecord:
    return MealRecord(
        record_id=str(row["id"]),
        user_id=row.get("user_id"),
        user_name=row["user_name"],
        group_id=row.get("group_id"),
        group_type=row["group_type"],
        meal_type=MealType(row["meal_type"]),
        meal_date=row["meal_date"],
        meal_time=normalize_mysql_time(row["meal_time"]),
        created_at=row.get("created_at"),
    )


class MySQLMealRepository(MealRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_existing(self, *, user_id: str, meal_type: MealType, meal_date: date) -> Optional[MealRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM meal_records
                WHERE user_id=%s AND meal_type=%s AND meal_date=%s
                LIMIT 1
                """,
                (user_id, meal_type.value, meal_date),
            )
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def create(self, record: NewMealRecord) -> str:
        record_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO meal_records(id, user_id, user_name, group_id, group_type, meal_type, meal_date, meal_time)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record_id,
                    record.user_id,
                    record.user_name,
                    record.group_id,
                    record.group_type,
                    record.meal_type.value,
                    record.meal_date,
                    record.meal_time,
                ),
            )
        return record_id

    def delete_by_id(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM meal_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0

    def list_recent(self, limit: int) -> Sequence[MealRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM meal_records
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_filtered(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        group_id: Optional[str] = None,
        group_type: Optional[str] = None,
        user_name: Optional[str] = None,
    ) -> Sequence[MealRecord]:
        clauses: list[str] = []
        params: list[Any] = []
        if start is not None:
            clauses.append("meal_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("meal_date <= %s")
            params.append(end)
        if group_id:
            clauses.append("group_id = %s")
            params.append(group_id)
        if group_type:
            clauses.append("group_type = %s")
            params.append(group_type)
        if user_name:
            clauses.append("LOWER(user_name) LIKE %s ESCAPE '\\\\'")
            params.append(like_contains(user_name.lower()))

        where = ("WHERE " + " AND ".join(clauses)) if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM meal_records
                {where}
                ORDER BY meal_date DESC, meal_time DESC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
