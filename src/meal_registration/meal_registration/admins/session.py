from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..core.constants import ADMIN_SESSION_KEY, DEFAULT_ADMIN_SESSION_HOURS
from ..storage.repository import KeyValueStore
from .model import AdminUser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminSession:
    """What we keep in the session store after an admin logs in."""

    admin_id: str
    username: str
    name: str
    login_time: int

    def to_dict(self) -> dict:
        return {"id": self.admin_id, "username": self.username, "name": self.name, "loginTime": self.login_time}

    @classmethod
    def from_dict(cls, data: dict) -> "AdminSession":
        return cls(
            admin_id=str(data["id"]),
            username=str(data["username"]),
            name=str(data["name"]),
            login_time=int(data["loginTime"]),
        )


class AdminSessionManager:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        lifetime_hours: int = DEFAULT_ADMIN_SESSION_HOURS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._lifetime = timedelta(hours=int(lifetime_hours))
        self._clock = clock

    def start(self, admin: AdminUser) -> AdminSession:
        s = AdminSession(
            admin_id=admin.admin_id,
            username=admin.username,
            name=admin.name,
            login_time=int(self._clock().timestamp()),
        )
        self._store.set(ADMIN_SESSION_KEY, s.to_dict())
        logger.info("admin %s logged in", admin.username)
        return s

    def load(self) -> Optional[AdminSession]:
        """Current session, or None when absent, unreadable or expired (then cleared)."""
        raw = self._store.get(ADMIN_SESSION_KEY)
        if not raw:
            return None
        try:
            s = AdminSession.from_dict(raw)
        except (KeyError, TypeError, ValueError):
            logger.warning("discarding unreadable admin session")
            self.clear()
            return None

        expires_at = datetime.fromtimestamp(s.login_time) + self._lifetime
        if self._clock() > expires_at:
            logger.info("admin session for %s expired", s.username)
            self.clear()
            return None
        return s

    def clear(self) -> None:
        self._store.remove(ADMIN_SESSION_KEY)
