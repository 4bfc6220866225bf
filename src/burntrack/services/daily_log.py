"""Daily log aggregation over logged food entries."""

from collections.abc import Iterable

from burntrack.domain.foods import DailyLog, FoodEntry, MealType
from burntrack.domain.profile import UserProfile

DEFAULT_GOAL_CALORIES = 2000


def entry_calories(entry: FoodEntry) -> float:
    """Calories contributed by an entry, from its item snapshot."""
    return entry.food_item.calories * entry.servings


def resolve_goal_calories(
    profile: UserProfile | None, default: int = DEFAULT_GOAL_CALORIES
) -> int:
    """Return the profile goal, or the default when it is missing or not positive."""
    if profile is None or profile.goal_calories <= 0:
        return default
    return profile.goal_calories


def build_daily_log(
    day: str, entries: Iterable[FoodEntry], goal_calories: int
) -> DailyLog:
    """Aggregate the entries logged on a day against the calorie goal."""
    day_entries = [entry for entry in entries if entry.date == day]
    meal_calories = {meal_type: 0.0 for meal_type in MealType}
    total_calories = 0.0
    total_protein = 0.0
    total_carbs = 0.0
    total_fat = 0.0
    for entry in day_entries:
        calories = entry_calories(entry)
        total_calories += calories
        meal_calories[entry.meal_type] += calories
        total_protein += (entry.food_item.protein or 0.0) * entry.servings
        total_carbs += (entry.food_item.carbs or 0.0) * entry.servings
        total_fat += (entry.food_item.fat or 0.0) * entry.servings
    return DailyLog(
        date=day,
        entries=day_entries,
        total_calories=total_calories,
        goal_calories=goal_calories,
        total_protein=total_protein,
        total_carbs=total_carbs,
        total_fat=total_fat,
        meal_calories=meal_calories,
    )


def group_by_meal(entries: Iterable[FoodEntry]) -> dict[MealType, list[FoodEntry]]:
    """Partition entries into meal buckets, keeping insertion order."""
    groups: dict[MealType, list[FoodEntry]] = {meal_type: [] for meal_type in MealType}
    for entry in entries:
        groups[MealType(entry.meal_type)].append(entry)
    return groups


def calculate_percentage(value: float, total: float) -> float:
    """Return value as a percentage of total, clamped to 0-100."""
    if total == 0:
        return 0.0
    percentage = value / total * 100
    return min(max(percentage, 0.0), 100.0)


def progress_percentage(log: DailyLog) -> float:
    """Share of the calorie goal consumed on the log's day."""
    return calculate_percentage(log.total_calories, log.goal_calories)
