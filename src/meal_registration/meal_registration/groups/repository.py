from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Group


class GroupRepository(Protocol):
    def get_by_id(self, group_id: str) -> Optional[Group]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Group]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Group]:
        """Active groups ordered by display name."""
        raise NotImplementedError

    def list_all(self) -> Sequence[Group]:
        raise NotImplementedError

    def create_group(self, *, name: str, display_name: str, color: str) -> str:
        raise NotImplementedError

    def update_group(self, group_id: str, *, display_name: str, color: str) -> bool:
        raise NotImplementedError

    def set_active(self, group_id: str, *, active: bool) -> bool:
        raise NotImplementedError
