from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..core.exceptions import BackendError, ValidationError
from .model import SystemSettings
from .repository import SystemSettingsRepository


class SystemSettingsService:
    """Use case: read and edit the meal windows."""

    def __init__(self, settings: SystemSettingsRepository):
        self._settings = settings

    def get(self) -> SystemSettings:
        current = self._settings.get()
        if current is None:
            raise BackendError("Configurações do sistema não encontradas")
        return current

    def update_times(
        self,
        *,
        breakfast_start_time: Optional[str],
        breakfast_deadline: Optional[str],
        lunch_start_time: Optional[str],
        lunch_deadline: Optional[str],
        now: datetime | None = None,
    ) -> SystemSettings:
        now = now or datetime.now()
        current = self.get()

        b_start = parse_hhmm(breakfast_start_time, "Início do café")
        b_end = parse_hhmm(breakfast_deadline, "Limite do café")
        l_start = parse_hhmm(lunch_start_time, "Início do almoço")
        l_end = parse_hhmm(lunch_deadline, "Limite do almoço")
        if b_end is None:
            raise ValidationError("Limite do café é obrigatório")
        if l_end is None:
            raise ValidationError("Limite do almoço é obrigatório")

        self._settings.update_times(
            current.settings_id,
            breakfast_start_time=b_start,
            breakfast_deadline=b_end,
            lunch_start_time=l_start,
            lunch_deadline=l_end,
            updated_at=now,
        )
        return SystemSettings(
            settings_id=current.settings_id,
            breakfast_start_time=b_start,
            breakfast_deadline=b_end,
            lunch_start_time=l_start,
            lunch_deadline=l_end,
            updated_at=now,
        )

    @staticmethod
    def to_view(settings: SystemSettings) -> dict:
        return {
            "breakfast_start_time": format_hhmm(settings.breakfast_start_time) or None,
            "breakfast_deadline": format_hhmm(settings.breakfast_deadline),
            "lunch_start_time": format_hhmm(settings.lunch_start_time) or None,
            "lunch_deadline": format_hhmm(settings.lunch_deadline),
            "updated_at": settings.updated_at.isoformat() if settings.updated_at else None,
        }
