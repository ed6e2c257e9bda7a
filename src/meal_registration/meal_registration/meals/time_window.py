from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Tuple

from ..common.datetime_utils import format_hhmm, minutes_since_midnight
from ..core.enums import MealType
from ..system_settings.model import SystemSettings


def is_within_window(now_minutes: int, start_minutes: Optional[int], end_minutes: Optional[int]) -> bool:
    """True iff start <= now <= end, all in minutes since midnight.

    No start (or no end) means the window is closed. A window whose start is after
    its end never admits; overnight windows are not supported.
    """
    if start_minutes is None or end_minutes is None:
        return False
    return start_minutes <= now_minutes <= end_minutes


class MealWindowGate:
    """Evaluates the meal windows of one SystemSettings snapshot."""

    def __init__(self, settings: SystemSettings):
        self._settings = settings

    def window_for(self, meal_type: MealType) -> Tuple[Optional[time], Optional[time]]:
        s = self._settings
        if meal_type == MealType.BREAKFAST:
            return s.breakfast_start_time, s.breakfast_deadline
        return s.lunch_start_time, s.lunch_deadline

    def is_open(self, meal_type: MealType, now: datetime) -> bool:
        start, end = self.window_for(meal_type)
        return is_within_window(
            minutes_since_midnight(now.time()),
            minutes_since_midnight(start) if start else None,
            minutes_since_midnight(end) if end else None,
        )

    def window_label(self, meal_type: MealType) -> str:
        start, end = self.window_for(meal_type)
        if not start or not end:
            return "não configurado"
        return f"{format_hhmm(start)} às {format_hhmm(end)}"

    def open_meals(self, now: datetime) -> list[MealType]:
        return [m for m in MealType if self.is_open(m, now)]
