from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class ConnectivityMonitor:
    """Tracks whether the backend is reachable.

    State changes come from an optional probe (`check`) and from outcomes that remote
    calls report (`report`). Listeners fire on the offline -> online transition only.
    """

    def __init__(self, probe: Optional[Callable[[], bool]] = None, *, initially_online: bool = True):
        self._probe = probe
        self._online = bool(initially_online)
        self._listeners: List[Callable[[], object]] = []
        self._lock = threading.Lock()

    @property
    def is_online(self) -> bool:
        return self._online

    def add_online_listener(self, callback: Callable[[], object]) -> None:
        with self._lock:
            self._listeners.append(callback)

    def report(self, online: bool) -> None:
        with self._lock:
            came_back = online and not self._online
            went_down = not online and self._online
            self._online = bool(online)
            listeners = list(self._listeners) if came_back else []

        if went_down:
            logger.warning("backend unreachable; working offline")
        if came_back:
            logger.info("backend reachable again")
        for callback in listeners:
            try:
                callback()
            except Exception:
                logger.exception("online listener %r failed", callback)

    def check(self) -> bool:
        if self._probe is not None:
            self.report(bool(self._probe()))
        return self._online
