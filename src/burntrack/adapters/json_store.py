"""JSON file implementation of the tracker store."""

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from burntrack.domain.foods import FoodEntry, FoodItem, MealType
from burntrack.domain.profile import (
    ActivityLevel,
    Gender,
    UserProfile,
    WeightEntry,
    WeightGoal,
)
from burntrack.services.tracker import TrackerStore

USER_PROFILE_KEY = "burntrack_userProfile"
FOOD_ITEMS_KEY = "burntrack_foodItems"
FOOD_ENTRIES_KEY = "burntrack_foodEntries"
WEIGHT_ENTRIES_KEY = "burntrack_weightEntries"

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileTrackerStore(TrackerStore):
    """Key-value document store persisted to a single JSON file."""

    path: Path

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, if any."""
        row = self._read().get(USER_PROFILE_KEY)
        if not row:
            return None
        return _parse_profile(row)

    def save_profile(self, profile: UserProfile) -> None:
        """Store the profile."""
        self._set(USER_PROFILE_KEY, asdict(profile))

    def get_food_items(self) -> list[FoodItem]:
        """Return stored food items."""
        return [_parse_food_item(row) for row in self._read().get(FOOD_ITEMS_KEY, [])]

    def save_food_items(self, items: list[FoodItem]) -> None:
        """Replace stored food items."""
        self._set(FOOD_ITEMS_KEY, [asdict(item) for item in items])

    def add_food_entry(self, entry: FoodEntry) -> None:
        """Append a food entry."""
        entries = self._read().get(FOOD_ENTRIES_KEY, [])
        entries.append(asdict(entry))
        self._set(FOOD_ENTRIES_KEY, entries)

    def update_food_entry(self, entry: FoodEntry) -> None:
        """Replace the entry with the same id, if present."""
        entries = self._read().get(FOOD_ENTRIES_KEY, [])
        for index, row in enumerate(entries):
            if row.get("id") == entry.id:
                entries[index] = asdict(entry)
                self._set(FOOD_ENTRIES_KEY, entries)
                return

    def delete_food_entry(self, entry_id: str) -> None:
        """Remove an entry by id."""
        entries = self._read().get(FOOD_ENTRIES_KEY, [])
        self._set(
            FOOD_ENTRIES_KEY, [row for row in entries if row.get("id") != entry_id]
        )

    def list_food_entries(self) -> list[FoodEntry]:
        """Return all food entries."""
        return [
            _parse_food_entry(row) for row in self._read().get(FOOD_ENTRIES_KEY, [])
        ]

    def get_entries_by_date(self, day: str) -> list[FoodEntry]:
        """Return entries logged on a day."""
        return [entry for entry in self.list_food_entries() if entry.date == day]

    def get_weight_entries(self) -> list[WeightEntry]:
        """Return the stored weight series."""
        return [
            WeightEntry(date=str(row["date"]), weight=float(row["weight"]))
            for row in self._read().get(WEIGHT_ENTRIES_KEY, [])
        ]

    def upsert_weight_entry(self, entry: WeightEntry) -> None:
        """Insert a weight entry or replace the one on the same date."""
        rows = self._read().get(WEIGHT_ENTRIES_KEY, [])
        for index, row in enumerate(rows):
            if row.get("date") == entry.date:
                rows[index] = asdict(entry)
                break
        else:
            rows.append(asdict(entry))
        self._set(WEIGHT_ENTRIES_KEY, rows)

    def clear_all(self) -> None:
        """Remove every collection."""
        document = self._read()
        for key in (
            USER_PROFILE_KEY,
            FOOD_ITEMS_KEY,
            FOOD_ENTRIES_KEY,
            WEIGHT_ENTRIES_KEY,
        ):
            document.pop(key, None)
        self._write(document)

    def _set(self, key: str, value: object) -> None:
        document = self._read()
        document[key] = value
        self._write(document)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RuntimeError(f"Corrupt tracker data file: {self.path}") from exc
        if not isinstance(document, dict):
            raise RuntimeError(f"Corrupt tracker data file: {self.path}")
        return document

    def _write(self, document: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        os.replace(tmp_path, self.path)
        _logger.debug("Wrote tracker data to %s", self.path)


def _parse_profile(row: dict[str, object]) -> UserProfile:
    """Parse a stored profile document."""
    return UserProfile(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        age=int(row.get("age", 0)),
        gender=Gender(row.get("gender", Gender.OTHER)),
        height=float(row["height"]),
        weight=float(row["weight"]),
        activity_level=ActivityLevel(
            row.get("activity_level", ActivityLevel.SEDENTARY)
        ),
        weight_goal=WeightGoal(row.get("weight_goal", WeightGoal.MAINTAIN)),
        goal_calories=int(row.get("goal_calories", 0)),
        created_at=str(row.get("created_at", "")),
        updated_at=str(row.get("updated_at", "")),
    )


def _parse_food_item(row: dict[str, object]) -> FoodItem:
    """Parse a stored food item document."""
    return FoodItem(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories=float(row.get("calories", 0.0)),
        serving_size=float(row.get("serving_size", 1.0)),
        serving_unit=str(row.get("serving_unit", "")),
        protein=_optional_float(row.get("protein")),
        carbs=_optional_float(row.get("carbs")),
        fat=_optional_float(row.get("fat")),
        is_custom=bool(row.get("is_custom", False)),
    )


def _parse_food_entry(row: dict[str, object]) -> FoodEntry:
    """Parse a stored food entry document."""
    return FoodEntry(
        id=str(row["id"]),
        food_item_id=str(row["food_item_id"]),
        food_item=_parse_food_item(row["food_item"]),
        servings=float(row.get("servings", 1.0)),
        meal_type=MealType(row.get("meal_type", MealType.SNACK)),
        date=str(row["date"]),
        created_at=str(row.get("created_at", "")),
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None
