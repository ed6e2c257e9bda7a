from __future__ import annotations

import logging
import secrets
import string
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from ..common.datetime_utils import epoch_millis
from ..core.constants import OFFLINE_RECORDS_KEY
from ..core.exceptions import DuplicateRecordError
from ..storage.repository import KeyValueStore
from .model import NewMealRecord, OfflineMealRecord
from .repository import MealRepository

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def make_offline_id(now: datetime) -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"offline_{epoch_millis(now)}_{suffix}"


@dataclass(frozen=True)
class SyncResult:
    success: int
    failed: int

    @property
    def total(self) -> int:
        return self.success + self.failed


class OfflineQueue:
    """Locally persisted meal records waiting for the backend.

    The whole sequence lives as a JSON list under one key of the injected store.
    Read-modify-write sections hold `_lock`; backend calls during sync run outside it.
    """

    def __init__(
        self,
        store: KeyValueStore,
        meals: MealRepository,
        *,
        key: str = OFFLINE_RECORDS_KEY,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._meals = meals
        self._key = key
        self._clock = clock
        self._lock = threading.RLock()

    def _read(self) -> List[OfflineMealRecord]:
        raw = self._store.get(self._key) or []
        out: List[OfflineMealRecord] = []
        for item in raw:
            try:
                out.append(OfflineMealRecord.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("dropping unreadable offline entry: %r", item)
        return out

    def _write(self, records: List[OfflineMealRecord]) -> None:
        if records:
            self._store.set(self._key, [r.to_dict() for r in records])
        else:
            self._store.remove(self._key)

    def enqueue(self, record: NewMealRecord, *, now: Optional[datetime] = None) -> OfflineMealRecord:
        now = now or self._clock()
        entry = OfflineMealRecord(offline_id=make_offline_id(now), timestamp=epoch_millis(now), record=record)
        with self._lock:
            records = self._read()
            records.append(entry)
            self._write(records)
        logger.info("meal record queued offline (%s, %s)", record.user_name, record.meal_type.value)
        return entry

    def records(self) -> List[OfflineMealRecord]:
        with self._lock:
            return self._read()

    def pending_count(self) -> int:
        return len(self.records())

    def has_pending(self) -> bool:
        return self.pending_count() > 0

    def clear(self) -> None:
        with self._lock:
            self._store.remove(self._key)

    def sync(self) -> SyncResult:
        """Send queued records in enqueue order.

        A registered user's entry that already exists remotely counts as sent. Failed
        entries stay queued, followed by anything enqueued while the sync was running.
        """
        snapshot = self.records()
        if not snapshot:
            return SyncResult(success=0, failed=0)

        success = 0
        failed: List[OfflineMealRecord] = []
        for entry in snapshot:
            try:
                self._send(entry.record)
                success += 1
            except Exception:
                logger.warning("offline record %s failed to sync", entry.offline_id, exc_info=True)
                failed.append(entry)

        sent_ids = {e.offline_id for e in snapshot}
        with self._lock:
            arrived = [e for e in self._read() if e.offline_id not in sent_ids]
            self._write(failed + arrived)

        logger.info("offline sync finished: %d sent, %d failed", success, len(failed))
        return SyncResult(success=success, failed=len(failed))

    def _send(self, record: NewMealRecord) -> None:
        if record.user_id is not None:
            existing = self._meals.find_existing(
                user_id=record.user_id,
                meal_type=record.meal_type,
                meal_date=record.meal_date,
            )
            if existing:
                logger.info("offline record for user %s already on server; dropped", record.user_id)
                return
        try:
            self._meals.create(record)
        except DuplicateRecordError:
            logger.info("offline record for user %s inserted concurrently; dropped", record.user_id)
