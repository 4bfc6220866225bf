"""Domain models for foods, logged entries and daily logs."""

from dataclasses import dataclass, field
from enum import StrEnum


class MealType(StrEnum):
    """Meal buckets an entry can be logged under."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodItem:
    """Food available for logging, either from the catalog or user-created."""

    id: str
    name: str
    calories: float
    serving_size: float
    serving_unit: str
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    is_custom: bool = False


@dataclass(frozen=True)
class FoodEntry:
    """Logged food with a snapshot of the item at logging time."""

    id: str
    food_item_id: str
    food_item: FoodItem
    servings: float
    meal_type: MealType
    date: str
    created_at: str


@dataclass(frozen=True)
class DailyLog:
    """Derived view of the entries logged on one calendar day."""

    date: str
    entries: list[FoodEntry]
    total_calories: float
    goal_calories: int
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    meal_calories: dict[MealType, float] = field(default_factory=dict)

    @property
    def remaining_calories(self) -> float:
        """Calories left before reaching the goal, never negative."""
        return max(self.goal_calories - self.total_calories, 0.0)
