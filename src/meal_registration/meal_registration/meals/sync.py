from __future__ import annotations

import logging
import threading
from typing import Optional

import schedule

from ..core.constants import DEFAULT_SYNC_INTERVAL_SECONDS
from ..database.connectivity import ConnectivityMonitor
from .offline_queue import OfflineQueue, SyncResult

logger = logging.getLogger(__name__)


class OfflineSyncScheduler:
    """Background retry of the offline queue.

    Every tick refreshes `pending_count`, probes connectivity and syncs when online
    with pending records. Coming back online wakes the background thread, which
    syncs right away; the caller that reported the transition never waits for it.
    At most one sync runs at a time; an overlapping trigger is skipped.
    """

    def __init__(
        self,
        queue: OfflineQueue,
        monitor: ConnectivityMonitor,
        *,
        interval_seconds: int = DEFAULT_SYNC_INTERVAL_SECONDS,
    ):
        self._queue = queue
        self._monitor = monitor
        self._interval = int(interval_seconds)
        self._scheduler = schedule.Scheduler()
        self._sync_lock = threading.Lock()
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self.pending_count = 0
        self.last_result: Optional[SyncResult] = None

        monitor.add_online_listener(self.request_sync)

    @property
    def is_syncing(self) -> bool:
        return self._sync_lock.locked()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def refresh_pending(self) -> int:
        self.pending_count = self._queue.pending_count()
        return self.pending_count

    def tick(self) -> None:
        self.refresh_pending()
        if self._monitor.check() and self.pending_count > 0:
            self.trigger_sync()

    @property
    def sync_requested(self) -> bool:
        return self._wake.is_set()

    def request_sync(self) -> None:
        """Ask the background thread for a sync as soon as possible."""
        self._wake.set()

    def trigger_sync(self) -> Optional[SyncResult]:
        """Run one sync unless another is in flight (returns None when skipped)."""
        if not self._sync_lock.acquire(blocking=False):
            logger.debug("sync already in progress; trigger skipped")
            return None
        try:
            result = self._queue.sync()
            self.last_result = result
            return result
        finally:
            self._sync_lock.release()
            self.refresh_pending()

    def start(self) -> None:
        if self.is_running:
            return
        self.refresh_pending()
        self._stop.clear()
        self._scheduler.clear()
        self._scheduler.every(self._interval).seconds.do(self.tick)
        self._thread = threading.Thread(target=self._run, name="offline-sync", daemon=True)
        self._thread.start()
        logger.info("offline sync scheduler started (every %ss)", self._interval)

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        self._wake.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self._scheduler.clear()
        self._wake.clear()

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                if self._wake.is_set():
                    self._wake.clear()
                    self.trigger_sync()
                self._scheduler.run_pending()
            except Exception:
                logger.exception("offline sync tick failed")
            self._wake.wait(1)
