from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AdminUser:
    """Administrator account of the back office.

    Note: only the werkzeug hash is stored, never the password.
    """

    admin_id: str
    username: str
    name: str
    password_hash: str
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        return {
            "id": self.admin_id,
            "username": self.username,
            "name": self.name,
            "active": self.active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
