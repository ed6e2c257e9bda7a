from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import MealType
from .model import MealRecord, NewMealRecord


class MealRepository(Protocol):
    """Remote store of meal records."""

    def find_existing(self, *, user_id: str, meal_type: MealType, meal_date: date) -> Optional[MealRecord]:
        raise NotImplementedError

    def create(self, record: NewMealRecord) -> str:
        raise NotImplementedError

    def delete_by_id(self, record_id: str) -> bool:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[MealRecord]:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        group_id: Optional[str] = None,
        group_type: Optional[str] = None,
        user_name: Optional[str] = None,
    ) -> Sequence[MealRecord]:
        """Records ordered by meal_date DESC, meal_time DESC.

        `user_name` matches as a case-insensitive substring.
        """
        raise NotImplementedError
