from __future__ import annotations

from typing import Any, Optional, Protocol


class KeyValueStore(Protocol):
    """Local durable storage used by the offline queue, the user cache and the admin session.

    Values are JSON-compatible (dict / list / str / int / float / bool / None).
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError
