from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from ..common.datetime_utils import epoch_millis, from_epoch_millis
from ..core.constants import DEFAULT_USER_CACHE_TTL_HOURS, USERS_CACHE_EXPIRY_KEY, USERS_CACHE_KEY
from ..core.exceptions import BackendError
from ..database.connectivity import ConnectivityMonitor
from ..storage.repository import KeyValueStore
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheStats:
    users_count: int
    is_expired: bool
    last_update: Optional[datetime]

    def to_dict(self) -> dict:
        return {
            "users_count": self.users_count,
            "is_expired": self.is_expired,
            "last_update": self.last_update.isoformat() if self.last_update else None,
        }


class UserCache:
    """Read-through cache of the active-user directory.

    Only unfiltered fetches refresh the cache. When the backend read fails, cached
    users are served (group filter applied locally). With `serve_stale=True` that
    fallback ignores expiry; `get_cached_users` always enforces it.
    """

    def __init__(
        self,
        store: KeyValueStore,
        users: UserRepository,
        *,
        monitor: Optional[ConnectivityMonitor] = None,
        ttl_hours: int = DEFAULT_USER_CACHE_TTL_HOURS,
        serve_stale: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._users = users
        self._monitor = monitor
        self._ttl = timedelta(hours=int(ttl_hours))
        self._serve_stale = bool(serve_stale)
        self._clock = clock

    def fetch_with_cache(self, group_id: Optional[str] = None) -> List[User]:
        try:
            users = list(self._users.list_active(group_id=group_id))
        except BackendError as e:
            logger.warning("user directory unavailable, using local cache: %s", e)
            if self._monitor:
                self._monitor.report(False)
            cached = self._read(enforce_expiry=not self._serve_stale)
            if group_id:
                return [u for u in cached if u.group_id == group_id]
            return cached

        if self._monitor:
            self._monitor.report(True)
        if not group_id:
            self.save(users)
        return users

    def save(self, users: List[User]) -> None:
        now = self._clock()
        self._store.set(USERS_CACHE_KEY, {"users": [u.to_dict() for u in users], "timestamp": epoch_millis(now)})
        self._store.set(USERS_CACHE_EXPIRY_KEY, epoch_millis(now + self._ttl))
        logger.info("user cache refreshed (%d users)", len(users))

    def get_cached_users(self) -> List[User]:
        return self._read(enforce_expiry=True)

    def has_cached_users(self) -> bool:
        data = self._store.get(USERS_CACHE_KEY)
        expiry = self._store.get(USERS_CACHE_EXPIRY_KEY)
        if not data or expiry is None:
            return False
        return not self._is_expired(expiry)

    def cache_stats(self) -> CacheStats:
        data = self._store.get(USERS_CACHE_KEY)
        if not isinstance(data, dict):
            return CacheStats(users_count=0, is_expired=True, last_update=None)
        expiry = self._store.get(USERS_CACHE_EXPIRY_KEY)
        timestamp = data.get("timestamp")
        return CacheStats(
            users_count=len(data.get("users") or []),
            is_expired=expiry is None or self._is_expired(expiry),
            last_update=from_epoch_millis(timestamp) if timestamp else None,
        )

    def clear(self) -> None:
        self._store.remove(USERS_CACHE_KEY)
        self._store.remove(USERS_CACHE_EXPIRY_KEY)
        logger.info("user cache cleared")

    def _is_expired(self, expiry) -> bool:
        return epoch_millis(self._clock()) > int(expiry)

    def _read(self, *, enforce_expiry: bool) -> List[User]:
        data = self._store.get(USERS_CACHE_KEY)
        expiry = self._store.get(USERS_CACHE_EXPIRY_KEY)
        if not isinstance(data, dict):
            return []
        if enforce_expiry:
            if expiry is None:
                return []
            if self._is_expired(expiry):
                logger.info("user cache expired")
                self.clear()
                return []
        out: List[User] = []
        for item in data.get("users") or []:
            try:
                out.append(User.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("skipping unreadable cached user: %r", item)
        return out
