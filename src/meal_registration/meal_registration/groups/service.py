from __future__ import annotations

import re
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_GROUP_COLOR
from ..core.exceptions import ValidationError
from .model import Group
from .repository import GroupRepository

_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


class GroupService:
    """Use case: manage groups (admin) and list them for the kiosk."""

    def __init__(self, groups: GroupRepository):
        self._groups = groups

    def list_active(self) -> Sequence[Group]:
        return self._groups.list_active()

    def list_all(self) -> Sequence[Group]:
        return self._groups.list_all()

    def get(self, group_id: str) -> Group:
        group = self._groups.get_by_id(group_id)
        if not group:
            raise ValidationError("Grupo não encontrado")
        return group

    def add_group(self, *, name: str, display_name: str, color: Optional[str] = None) -> str:
        name = require_non_empty(name, "Nome do sistema").lower()
        display_name = require_non_empty(display_name, "Nome de exibição")
        color = self._check_color(color)

        if self._groups.get_by_name(name):
            raise ValidationError("Já existe um grupo com esse nome")

        return self._groups.create_group(name=name, display_name=display_name, color=color)

    def update_group(self, group_id: str, *, display_name: str, color: Optional[str] = None) -> None:
        display_name = require_non_empty(display_name, "Nome de exibição")
        current = self.get(group_id)
        self._groups.update_group(group_id, display_name=display_name, color=self._check_color(color or current.color))

    def deactivate_group(self, group_id: str) -> None:
        self.get(group_id)
        self._groups.set_active(group_id, active=False)

    def toggle_group(self, group_id: str) -> bool:
        """Flip the active flag and return the new value."""
        group = self.get(group_id)
        self._groups.set_active(group_id, active=not group.active)
        return not group.active

    @staticmethod
    def _check_color(color: Optional[str]) -> str:
        color = (color or "").strip() or DEFAULT_GROUP_COLOR
        if not _COLOR_RE.match(color):
            raise ValidationError("Cor inválida (use #RRGGBB)")
        return color
