from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Group:
    """Grupo/área de trabalho.

    `name` is the lowercase system key copied into `User.group_type` and `MealRecord.group_type`;
    `display_name` is what people see.
    """

    group_id: str
    name: str
    display_name: str
    color: str
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.group_id,
            "name": self.name,
            "display_name": self.display_name,
            "color": self.color,
            "active": self.active,
        }
