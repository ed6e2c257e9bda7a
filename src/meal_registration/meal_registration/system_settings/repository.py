from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Protocol

from .model import SystemSettings


class SystemSettingsRepository(Protocol):
    def get(self) -> Optional[SystemSettings]:
        raise NotImplementedError

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
        raise NotImplementedError
