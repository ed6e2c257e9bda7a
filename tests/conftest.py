from __future__ import annotations

from datetime import datetime

import pytest

from src.meal_registration.meal_registration.groups.model import Group
from src.meal_registration.meal_registration.users.model import User
from src.meal_registration.meal_registration.storage.memory_store import InMemoryKeyValueStore


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 10, 8, 30, 0)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def groups() -> list[Group]:
    return [
        Group(group_id="g-op", name="operacao", display_name="Operação", color="#2563eb"),
        Group(group_id="g-pj", name="projetos", display_name="Projetos", color="#16a34a"),
    ]


@pytest.fixture
def users() -> list[User]:
    return [
        User(user_id="u-ana", name="Ana Souza", group_type="operacao", group_id="g-op"),
        User(user_id="u-bruno", name="Bruno Lima", group_type="projetos", group_id="g-pj"),
        User(user_id="u-carla", name="Carla Dias", group_type="operacao", group_id="g-op", active=False),
    ]
