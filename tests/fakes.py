from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

from src.meal_registration.meal_registration.admins.model import AdminUser
from src.meal_registration.meal_registration.core.enums import MealType
from src.meal_registration.meal_registration.core.exceptions import BackendError
from src.meal_registration.meal_registration.groups.model import Group
from src.meal_registration.meal_registration.meals.model import MealRecord, NewMealRecord
from src.meal_registration.meal_registration.system_settings.model import SystemSettings
from src.meal_registration.meal_registration.users.model import User


class Clock:
    """Mutable clock for services that take a `clock` callable."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class _Backend:
    """`down = True` makes every call raise BackendError."""

    down = False

    def _check(self):
        if self.down:
            raise BackendError("backend offline")


class InMemoryMeals(_Backend):
    def __init__(self, records: Optional[list[MealRecord]] = None):
        self.records: list[MealRecord] = list(records or [])
        self.fail_user_names: set[str] = set()
        self.created: list[NewMealRecord] = []
        self.on_create = None

    def find_existing(self, *, user_id: str, meal_type: MealType, meal_date: date):
        self._check()
        for r in self.records:
            if r.user_id == user_id and r.meal_type == meal_type and r.meal_date == meal_date:
                return r
        return None

    def create(self, record: NewMealRecord) -> str:
        self._check()
        if record.user_name in self.fail_user_names:
            raise BackendError(f"insert rejected for {record.user_name}")
        if self.on_create:
            self.on_create(record)
        record_id = str(uuid.uuid4())
        self.records.append(
            MealRecord(
                record_id=record_id,
                user_id=record.user_id,
                user_name=record.user_name,
                group_id=record.group_id,
                group_type=record.group_type,
                meal_type=record.meal_type,
                meal_date=record.meal_date,
                meal_time=record.meal_time,
                created_at=datetime.combine(record.meal_date, record.meal_time),
            )
        )
        self.created.append(record)
        return record_id

    def delete_by_id(self, record_id: str) -> bool:
        self._check()
        before = len(self.records)
        self.records = [r for r in self.records if r.record_id != record_id]
        return len(self.records) < before

    def list_recent(self, limit: int):
        self._check()
        return sorted(self.records, key=lambda r: r.created_at or datetime.min, reverse=True)[:limit]

    def list_filtered(self, *, start=None, end=None, group_id=None, group_type=None, user_name=None):
        self._check()
        out = []
        for r in self.records:
            if start and r.meal_date < start:
                continue
            if end and r.meal_date > end:
                continue
            if group_id and r.group_id != group_id:
                continue
            if group_type and r.group_type != group_type:
                continue
            if user_name and user_name.lower() not in r.user_name.lower():
                continue
            out.append(r)
        return sorted(out, key=lambda r: (r.meal_date, r.meal_time), reverse=True)


class InMemoryUsers(_Backend):
    def __init__(self, users: Optional[list[User]] = None):
        self.users: dict[str, User] = {u.user_id: u for u in users or []}

    def get_by_id(self, user_id: str):
        self._check()
        return self.users.get(user_id)

    def list_active(self, *, group_id=None):
        self._check()
        out = [u for u in self.users.values() if u.active and (not group_id or u.group_id == group_id)]
        return sorted(out, key=lambda u: u.name)

    def list_all(self):
        self._check()
        return sorted(self.users.values(), key=lambda u: u.name)

    def list_admin_view(self):
        self._check()
        return [u.to_dict() for u in self.list_all()]

    def create_user(self, *, name: str, group_type: str, group_id: str) -> str:
        self._check()
        user_id = str(uuid.uuid4())
        self.users[user_id] = User(user_id=user_id, name=name, group_type=group_type, group_id=group_id)
        return user_id

    def update_user(self, user_id: str, *, name: str, group_type: str, group_id: str) -> bool:
        self._check()
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], name=name, group_type=group_type, group_id=group_id)
        return True

    def set_active(self, user_id: str, *, active: bool) -> bool:
        self._check()
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], active=active)
        return True

    def delete_by_id(self, user_id: str) -> bool:
        self._check()
        return self.users.pop(user_id, None) is not None


class InMemoryGroups(_Backend):
    def __init__(self, groups: Optional[list[Group]] = None):
        self.groups: dict[str, Group] = {g.group_id: g for g in groups or []}

    def get_by_id(self, group_id: str):
        self._check()
        return self.groups.get(group_id)

    def get_by_name(self, name: str):
        self._check()
        return next((g for g in self.groups.values() if g.name == name), None)

    def list_active(self):
        return sorted((g for g in self.list_all() if g.active), key=lambda g: g.display_name)

    def list_all(self):
        self._check()
        return sorted(self.groups.values(), key=lambda g: g.display_name)

    def create_group(self, *, name: str, display_name: str, color: str) -> str:
        self._check()
        group_id = str(uuid.uuid4())
        self.groups[group_id] = Group(group_id=group_id, name=name, display_name=display_name, color=color)
        return group_id

    def update_group(self, group_id: str, *, display_name: str, color: str) -> bool:
        self._check()
        self.groups[group_id] = replace(self.groups[group_id], display_name=display_name, color=color)
        return True

    def set_active(self, group_id: str, *, active: bool) -> bool:
        self._check()
        self.groups[group_id] = replace(self.groups[group_id], active=active)
        return True


class InMemoryAdmins(_Backend):
    def __init__(self, admins: Optional[list[AdminUser]] = None):
        self.admins: dict[str, AdminUser] = {a.admin_id: a for a in admins or []}

    def get_by_id(self, admin_id: str):
        self._check()
        return self.admins.get(admin_id)

    def get_by_username(self, username: str):
        self._check()
        return next((a for a in self.admins.values() if a.username == username), None)

    def list_all(self):
        self._check()
        return list(self.admins.values())

    def create_admin(self, *, username: str, name: str, password_hash: str) -> str:
        self._check()
        admin_id = str(uuid.uuid4())
        self.admins[admin_id] = AdminUser(admin_id=admin_id, username=username, name=name, password_hash=password_hash)
        return admin_id

    def update_password(self, admin_id: str, *, password_hash: str) -> bool:
        self._check()
        self.admins[admin_id] = replace(self.admins[admin_id], password_hash=password_hash)
        return True

    def set_active(self, admin_id: str, *, active: bool) -> bool:
        self._check()
        if admin_id not in self.admins:
            return False
        self.admins[admin_id] = replace(self.admins[admin_id], active=active)
        return True


class InMemorySettings(_Backend):
    def __init__(self, settings: Optional[SystemSettings]):
        self.settings = settings

    def get(self):
        self._check()
        return self.settings

    def update_times(self, settings_id: str, **fields) -> bool:
        self._check()
        self.settings = replace(self.settings, **fields)
        return True


def make_settings(
    breakfast=(time(6, 0), time(9, 0)),
    lunch=(time(11, 0), time(14, 0)),
) -> SystemSettings:
    return SystemSettings(
        settings_id="settings-1",
        breakfast_start_time=breakfast[0],
        breakfast_deadline=breakfast[1],
        lunch_start_time=lunch[0],
        lunch_deadline=lunch[1],
    )


def make_record(
    *,
    user_id: Optional[str],
    user_name: str,
    meal_type: MealType,
    meal_date: date,
    meal_time: time = time(8, 0),
    group_type: str = "operacao",
    group_id: Optional[str] = "g-op",
) -> MealRecord:
    return MealRecord(
        record_id=str(uuid.uuid4()),
        user_id=user_id,
        user_name=user_name,
        group_id=group_id,
        group_type=group_type,
        meal_type=meal_type,
        meal_date=meal_date,
        meal_time=meal_time,
        created_at=datetime.combine(meal_date, meal_time),
    )
