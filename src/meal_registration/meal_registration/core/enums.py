from __future__ import annotations

from enum import Enum


class MealType(str, Enum):
    """Refeições que podem ser registradas no totem."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"

    @property
    def label(self) -> str:
        return {
            MealType.BREAKFAST: "Café da Manhã",
            MealType.LUNCH: "Almoço",
        }[self]


class RegistrationOutcome(str, Enum):
    """Result tag of a meal registration write."""

    SAVED = "saved"
    ENQUEUED = "enqueued"
    FAILED = "failed"
