from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for the user directory.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_active(self, *, group_id: Optional[str] = None) -> Sequence[User]:
        """Active users ordered by name, optionally restricted to one group."""
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def list_admin_view(self) -> Sequence[dict]:
        raise NotImplementedError

    def create_user(self, *, name: str, group_type: str, group_id: str) -> str:
        raise NotImplementedError

    def update_user(self, user_id: str, *, name: str, group_type: str, group_id: str) -> bool:
        raise NotImplementedError

    def set_active(self, user_id: str, *, active: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
