"""Example: drive the service layer without Flask.

Prints the meal windows, the pending offline queue and flushes it once.
"""

import importlib
from datetime import datetime

from config import get_settings_module

from src.meal_registration.meal_registration.container import build_container
from src.meal_registration.meal_registration.core.enums import MealType


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, local_store_path=settings.LOCAL_STORE_PATH or None)

    gate = container.meal_service.gate()
    now = datetime.now()
    for meal in MealType:
        state = "aberto" if gate.is_open(meal, now) else "fechado"
        print(f"{meal.label}: {gate.window_label(meal)} ({state})")

    print("pendentes:", container.offline_queue.pending_count())
    print(container.sync_scheduler.trigger_sync())


if __name__ == "__main__":
    main()
