from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Dict, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import MealType


@dataclass(frozen=True)
class MealRecord:
    """Registered meal as stored in `meal_records`.

    `user_id` is None for visitor entries.
    """

    record_id: str
    user_id: Optional[str]
    user_name: str
    group_id: Optional[str]
    group_type: str
    meal_type: MealType
    meal_date: date
    meal_time: time
    created_at: Optional[datetime] = None

    @property
    def is_visitor(self) -> bool:
        return self.user_id is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.record_id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "group_id": self.group_id,
            "group_type": self.group_type,
            "meal_type": self.meal_type.value,
            "meal_date": self.meal_date.isoformat(),
            "meal_time": self.meal_time.strftime("%H:%M:%S"),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class NewMealRecord:
    """Write fields of a meal record, before the backend assigns an id."""

    user_id: Optional[str]
    user_name: str
    group_id: Optional[str]
    group_type: str
    meal_type: MealType
    meal_date: date
    meal_time: time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "user_name": self.user_name,
            "group_id": self.group_id,
            "group_type": self.group_type,
            "meal_type": self.meal_type.value,
            "meal_date": self.meal_date.isoformat(),
            "meal_time": self.meal_time.strftime("%H:%M:%S"),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NewMealRecord":
        return cls(
            user_id=data.get("user_id"),
            user_name=str(data["user_name"]),
            group_id=data.get("group_id"),
            group_type=str(data["group_type"]),
            meal_type=MealType(data["meal_type"]),
            meal_date=parse_iso_date(str(data["meal_date"])),
            meal_time=time.fromisoformat(str(data["meal_time"])),
        )


@dataclass(frozen=True)
class OfflineMealRecord:
    """A NewMealRecord waiting in the offline queue.

    `offline_id` is local only (`offline_<epoch-ms>_<random>`); `timestamp` is the enqueue time in epoch ms.
    """

    offline_id: str
    timestamp: int
    record: NewMealRecord

    def to_dict(self) -> Dict[str, Any]:
        data = self.record.to_dict()
        data["id"] = self.offline_id
        data["timestamp"] = self.timestamp
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OfflineMealRecord":
        return cls(
            offline_id=str(data["id"]),
            timestamp=int(data["timestamp"]),
            record=NewMealRecord.from_dict(data),
        )
