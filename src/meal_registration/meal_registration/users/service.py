from __future__ import annotations

from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..groups.model import Group
from ..groups.repository import GroupRepository
from .repository import UserRepository


class UserService:
    """Use case: manage the user directory (admin)."""

    def __init__(self, users: UserRepository, groups: GroupRepository):
        self._users = users
        self._groups = groups

    def list_admin_view(self) -> Sequence[dict]:
        return self._users.list_admin_view()

    def _active_group(self, group_id: str) -> Group:
        group_id = require_non_empty(group_id, "Grupo")
        group = self._groups.get_by_id(group_id)
        if not group or not group.active:
            raise ValidationError("Grupo inválido ou inativo")
        return group

    def create_user(self, *, name: str, group_id: str) -> str:
        name = require_non_empty(name, "Nome")
        group = self._active_group(group_id)
        return self._users.create_user(name=name, group_type=group.name, group_id=group.group_id)

    def update_user(self, user_id: str, *, name: str, group_id: str) -> None:
        name = require_non_empty(name, "Nome")
        group = self._active_group(group_id)
        if not self._users.get_by_id(user_id):
            raise ValidationError("Usuário não encontrado")
        self._users.update_user(user_id, name=name, group_type=group.name, group_id=group.group_id)

    def deactivate_user(self, user_id: str) -> None:
        if not self._users.set_active(user_id, active=False):
            raise ValidationError("Usuário não encontrado")

    def delete_user(self, user_id: str) -> None:
        if not self._users.delete_by_id(user_id):
            raise ValidationError("Usuário não encontrado")
