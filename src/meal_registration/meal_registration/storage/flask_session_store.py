from __future__ import annotations

from typing import Any, Optional

from flask import session

from .repository import KeyValueStore


class FlaskSessionStore(KeyValueStore):
    """KeyValueStore over the signed Flask session cookie of the current request."""

    def get(self, key: str) -> Optional[Any]:
        return session.get(key)

    def set(self, key: str, value: Any) -> None:
        session.permanent = True
        session[key] = value

    def remove(self, key: str) -> None:
        session.pop(key, None)
