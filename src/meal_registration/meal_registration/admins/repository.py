from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AdminUser


class AdminUserRepository(Protocol):
    def get_by_id(self, admin_id: str) -> Optional[AdminUser]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[AdminUser]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AdminUser]:
        raise NotImplementedError

    def create_admin(self, *, username: str, name: str, password_hash: str) -> str:
        raise NotImplementedError

    def update_password(self, admin_id: str, *, password_hash: str) -> bool:
        raise NotImplementedError

    def set_active(self, admin_id: str, *, active: bool) -> bool:
        raise NotImplementedError
