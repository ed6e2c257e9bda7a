from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.validators import require_non_empty
from ..core.constants import CUSTOM_COMPANY_OPTION, DEFAULT_RECENT_LIMIT, VISITOR_COMPANIES, VISITOR_SUFFIX
from ..core.enums import MealType, RegistrationOutcome
from ..core.exceptions import BackendError, DuplicateRecordError, TimeWindowError, ValidationError
from ..database.connectivity import ConnectivityMonitor
from ..system_settings.model import SystemSettings
from ..system_settings.repository import SystemSettingsRepository
from ..users.cache import UserCache
from .model import MealRecord, NewMealRecord
from .offline_queue import OfflineQueue
from .repository import MealRepository
from .time_window import MealWindowGate

logger = logging.getLogger(__name__)

MSG_SAVED_OFFLINE = (
    "Sem conexão com o servidor. Registro salvo localmente e será enviado quando a conexão for restabelecida."
)
MSG_FAILED = "Não foi possível salvar o registro. Tente novamente."


@dataclass(frozen=True)
class RegistrationResult:
    outcome: RegistrationOutcome
    message: str
    record: NewMealRecord

    @property
    def ok(self) -> bool:
        return self.outcome != RegistrationOutcome.FAILED

    def to_dict(self) -> dict:
        return {"outcome": self.outcome.value, "message": self.message, "record": self.record.to_dict()}


def format_visitor_name(name: str, company: str) -> str:
    return f"{name} | {company} {VISITOR_SUFFIX}"


def parse_meal_type(value: Optional[str]) -> MealType:
    try:
        return MealType((value or "").strip())
    except ValueError:
        raise ValidationError("Tipo de refeição inválido")


class MealRegistrationService:
    """Use case: register meals from the kiosk and query/administer meal records.

    Writes go to the backend when it is reachable; otherwise they land in the offline
    queue and the scheduler sends them later.
    """

    def __init__(
        self,
        meals: MealRepository,
        settings: SystemSettingsRepository,
        queue: OfflineQueue,
        monitor: ConnectivityMonitor,
        user_cache: UserCache,
        *,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ):
        self._meals = meals
        self._settings = settings
        self._queue = queue
        self._monitor = monitor
        self._user_cache = user_cache
        self._recent_limit = int(recent_limit)
        self._last_settings: Optional[SystemSettings] = None
        self._settings_lock = threading.Lock()

    # --- kiosk -----------------------------------------------------------------

    def current_settings(self) -> SystemSettings:
        """Settings from the backend; the last snapshot seen is used while offline."""
        try:
            current = self._settings.get()
        except BackendError:
            self._monitor.report(False)
            with self._settings_lock:
                if self._last_settings is None:
                    raise
                return self._last_settings
        if current is None:
            raise BackendError("Configurações do sistema não encontradas")
        self._monitor.report(True)
        with self._settings_lock:
            self._last_settings = current
        return current

    def gate(self) -> MealWindowGate:
        return MealWindowGate(self.current_settings())

    def register_member(
        self,
        *,
        group_id: str,
        user_id: str,
        meal_type: MealType,
        now: datetime | None = None,
    ) -> RegistrationResult:
        group_id = require_non_empty(group_id, "Grupo")
        user_id = require_non_empty(user_id, "Usuário")

        user = next((u for u in self._user_cache.fetch_with_cache(group_id) if u.user_id == user_id), None)
        if user is None:
            raise ValidationError("Usuário não encontrado neste grupo")

        return self.register(
            user_id=user.user_id,
            user_name=user.name,
            group_id=user.group_id,
            group_type=user.group_type,
            meal_type=meal_type,
            now=now,
        )

    def register_visitor(
        self,
        *,
        name: str,
        company: str,
        area: str,
        meal_type: MealType,
        custom_company: Optional[str] = None,
        now: datetime | None = None,
    ) -> RegistrationResult:
        """Visitors carry no user id and skip the duplicate check."""
        name = require_non_empty(name, "Nome")
        company = require_non_empty(company, "Empresa")
        if company == CUSTOM_COMPANY_OPTION:
            company = require_non_empty(custom_company, "Nome da empresa")
        elif company not in VISITOR_COMPANIES:
            raise ValidationError("Empresa inválida")

        return self.register(
            user_id=None,
            user_name=format_visitor_name(name, company),
            group_id=None,
            group_type=require_non_empty(area, "Área"),
            meal_type=meal_type,
            now=now,
        )

    def register(
        self,
        *,
        user_id: Optional[str],
        user_name: str,
        group_id: Optional[str],
        group_type: str,
        meal_type: MealType,
        now: datetime | None = None,
    ) -> RegistrationResult:
        now = now or datetime.now()

        if not (group_type or "").strip():
            raise ValidationError("Selecione um grupo")
        if not (user_name or "").strip():
            raise ValidationError("Informe o nome")

        gate = self.gate()
        if not gate.is_open(meal_type, now):
            raise TimeWindowError(f"{meal_type.label} disponível apenas das {gate.window_label(meal_type)}")

        record = NewMealRecord(
            user_id=user_id,
            user_name=user_name.strip(),
            group_id=group_id,
            group_type=group_type.strip(),
            meal_type=meal_type,
            meal_date=now.date(),
            meal_time=now.time().replace(microsecond=0),
        )

        if user_id and self._already_registered(record):
            raise DuplicateRecordError(f"{record.user_name} já registrou {meal_type.label.lower()} hoje")

        return self._write(record, now=now)

    def _already_registered(self, record: NewMealRecord) -> bool:
        # Offline the server cannot be asked; the queue sync deduplicates later.
        if not self._monitor.is_online:
            return False
        try:
            existing = self._meals.find_existing(
                user_id=record.user_id,
                meal_type=record.meal_type,
                meal_date=record.meal_date,
            )
        except BackendError as e:
            logger.warning("duplicate check failed, assuming no duplicate: %s", e)
            return False
        return existing is not None

    def _write(self, record: NewMealRecord, *, now: datetime) -> RegistrationResult:
        label = record.meal_type.label
        if self._monitor.is_online:
            try:
                self._meals.create(record)
                self._monitor.report(True)
                logger.info("meal registered: %s (%s)", record.user_name, record.meal_type.value)
                return RegistrationResult(
                    RegistrationOutcome.SAVED,
                    f"{label} registrado para {record.user_name}",
                    record,
                )
            except BackendError as e:
                logger.warning("backend write failed, saving offline: %s", e)
                self._monitor.report(False)

        try:
            self._queue.enqueue(record, now=now)
        except (BackendError, OSError):
            logger.exception("could not save meal record locally")
            return RegistrationResult(RegistrationOutcome.FAILED, MSG_FAILED, record)
        return RegistrationResult(RegistrationOutcome.ENQUEUED, MSG_SAVED_OFFLINE, record)

    def recent(self, limit: Optional[int] = None) -> Sequence[MealRecord]:
        return self._meals.list_recent(limit or self._recent_limit)

    def today_summary(self, *, now: datetime | None = None) -> dict:
        today = (now or datetime.now()).date()
        records = self._meals.list_filtered(start=today, end=today)
        out = {m.value: 0 for m in MealType}
        for r in records:
            out[r.meal_type.value] += 1
        out["total"] = len(records)
        return out

    # --- admin -----------------------------------------------------------------

    def list_records(
        self,
        *,
        month: Optional[str] = None,
        day: Optional[str] = None,
        group_id: Optional[str] = None,
        group_type: Optional[str] = None,
        user_name: Optional[str] = None,
    ) -> Sequence[MealRecord]:
        """Filtered records, newest first. A specific day overrides the month."""
        start: Optional[date] = None
        end: Optional[date] = None
        try:
            if day:
                start = end = parse_iso_date(day)
            elif month:
                start, end = parse_month(month)
        except ValueError:
            raise ValidationError("Data inválida")

        return self._meals.list_filtered(
            start=start,
            end=end,
            group_id=group_id or None,
            group_type=group_type or None,
            user_name=(user_name or "").strip() or None,
        )

    def delete_record(self, record_id: str) -> None:
        if not self._meals.delete_by_id(record_id):
            raise ValidationError("Registro não encontrado")
        logger.info("meal record %s deleted", record_id)
