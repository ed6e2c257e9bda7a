from __future__ import annotations

import re
from datetime import date, datetime, time

from src.meal_registration.meal_registration.core.constants import OFFLINE_RECORDS_KEY
from src.meal_registration.meal_registration.core.enums import MealType
from src.meal_registration.meal_registration.core.exceptions import DuplicateRecordError
from src.meal_registration.meal_registration.meals.model import NewMealRecord
from src.meal_registration.meal_registration.meals.offline_queue import OfflineQueue
from tests.fakes import InMemoryMeals, make_record

DAY = date(2025, 3, 10)


def _record(name: str, user_id: str | None = None, meal_type: MealType = MealType.BREAKFAST) -> NewMealRecord:
    return NewMealRecord(
        user_id=user_id,
        user_name=name,
        group_id="g-op" if user_id else None,
        group_type="operacao",
        meal_type=meal_type,
        meal_date=DAY,
        meal_time=time(8, 15),
    )


def test_enqueue_persists_with_generated_id_and_timestamp(store, fixed_now):
    queue = OfflineQueue(store, InMemoryMeals())

    entry = queue.enqueue(_record("Ana", "u-ana"), now=fixed_now)

    assert re.fullmatch(r"offline_\d+_[a-z0-9]{9}", entry.offline_id)
    assert entry.timestamp == int(fixed_now.timestamp() * 1000)
    raw = store.get(OFFLINE_RECORDS_KEY)
    assert len(raw) == 1
    assert raw[0]["id"] == entry.offline_id
    assert raw[0]["user_name"] == "Ana"
    assert raw[0]["meal_date"] == "2025-03-10"
    assert queue.pending_count() == 1
    assert queue.has_pending()


def test_queue_survives_a_new_instance(store, fixed_now):
    OfflineQueue(store, InMemoryMeals()).enqueue(_record("Ana", "u-ana"), now=fixed_now)

    reopened = OfflineQueue(store, InMemoryMeals())

    assert [e.record.user_name for e in reopened.records()] == ["Ana"]


def test_sync_sends_in_order_and_clears_queue(store, fixed_now):
    meals = InMemoryMeals()
    queue = OfflineQueue(store, meals)
    queue.enqueue(_record("Ana", "u-ana"), now=fixed_now)
    queue.enqueue(_record("Visitante", None), now=fixed_now)

    result = queue.sync()

    assert (result.success, result.failed) == (2, 0)
    assert [r.user_name for r in meals.created] == ["Ana", "Visitante"]
    assert store.get(OFFLINE_RECORDS_KEY) is None
    assert queue.pending_count() == 0


def test_sync_partial_failure_keeps_only_failed_entries(store, fixed_now):
    meals = InMemoryMeals()
    meals.fail_user_names = {"B"}
    queue = OfflineQueue(store, meals)
    for name in ("A", "B", "C"):
        queue.enqueue(_record(name, f"u-{name}"), now=fixed_now)

    result = queue.sync()

    assert (result.success, result.failed) == (2, 1)
    assert [e.record.user_name for e in queue.records()] == ["B"]
    assert [r.user_name for r in meals.created] == ["A", "C"]


def test_sync_counts_existing_server_record_as_success_without_insert(store, fixed_now):
    meals = InMemoryMeals([make_record(user_id="u-ana", user_name="Ana", meal_type=MealType.BREAKFAST, meal_date=DAY)])
    queue = OfflineQueue(store, meals)
    queue.enqueue(_record("Ana", "u-ana"), now=fixed_now)

    result = queue.sync()

    assert (result.success, result.failed) == (1, 0)
    assert meals.created == []
    assert queue.pending_count() == 0


def test_visitor_entries_skip_duplicate_check(store, fixed_now):
    meals = InMemoryMeals([make_record(user_id=None, user_name="Joana | VALE (Visitante)", meal_type=MealType.LUNCH, meal_date=DAY)])
    queue = OfflineQueue(store, meals)
    queue.enqueue(_record("Joana | VALE (Visitante)", None, MealType.LUNCH), now=fixed_now)

    result = queue.sync()

    assert result.success == 1
    assert len(meals.created) == 1


def test_duplicate_raised_on_insert_counts_as_success(store, fixed_now):
    meals = InMemoryMeals()

    def _race(record):
        raise DuplicateRecordError("Registro duplicado")

    meals.on_create = _race
    queue = OfflineQueue(store, meals)
    queue.enqueue(_record("Ana", "u-ana"), now=fixed_now)

    result = queue.sync()

    assert (result.success, result.failed) == (1, 0)
    assert queue.pending_count() == 0


def test_backend_down_keeps_everything(store, fixed_now):
    meals = InMemoryMeals()
    meals.down = True
    queue = OfflineQueue(store, meals)
    queue.enqueue(_record("A", "u-a"), now=fixed_now)
    queue.enqueue(_record("B", "u-b"), now=fixed_now)

    result = queue.sync()

    assert (result.success, result.failed) == (0, 2)
    assert [e.record.user_name for e in queue.records()] == ["A", "B"]


def test_entries_enqueued_during_sync_are_kept_after_failures(store, fixed_now):
    meals = InMemoryMeals()
    meals.fail_user_names = {"B"}
    queue = OfflineQueue(store, meals)
    queue.enqueue(_record("A", "u-a"), now=fixed_now)
    queue.enqueue(_record("B", "u-b"), now=fixed_now)

    def _enqueue_while_syncing(record):
        if record.user_name == "A":
            queue.enqueue(_record("Late", "u-late"), now=datetime(2025, 3, 10, 8, 31))

    meals.on_create = _enqueue_while_syncing

    result = queue.sync()

    assert (result.success, result.failed) == (1, 1)
    assert [e.record.user_name for e in queue.records()] == ["B", "Late"]


def test_sync_on_empty_queue_is_a_noop(store):
    meals = InMemoryMeals()
    meals.down = True

    result = OfflineQueue(store, meals).sync()

    assert (result.success, result.failed) == (0, 0)


def test_clear(store, fixed_now):
    queue = OfflineQueue(store, InMemoryMeals())
    queue.enqueue(_record("A", "u-a"), now=fixed_now)

    queue.clear()

    assert queue.records() == []
