from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional


@dataclass(frozen=True)
class SystemSettings:
    """Singleton row holding the breakfast and lunch windows.

    A missing start time keeps that meal closed.
    """

    settings_id: str
    breakfast_start_time: Optional[time]
    breakfast_deadline: time
    lunch_start_time: Optional[time]
    lunch_deadline: time
    updated_at: Optional[datetime] = None
