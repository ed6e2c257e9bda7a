from __future__ import annotations

import copy
import threading
from typing import Any, Dict, Optional

from .repository import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store (tests, or kiosks without a writable disk)."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            # Copies keep callers from mutating stored state in place.
            return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
