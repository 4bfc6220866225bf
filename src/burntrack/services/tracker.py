"""Tracker controller owning the application state."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Protocol

from burntrack.domain.foods import DailyLog, FoodEntry, FoodItem, MealType
from burntrack.domain.profile import ProfileInput, UserProfile, WeightEntry
from burntrack.domain.state import AppState
from burntrack.services.catalog import FoodCatalogService, search_food_items
from burntrack.services.daily_log import (
    DEFAULT_GOAL_CALORIES,
    build_daily_log,
    group_by_meal,
    resolve_goal_calories,
)
from burntrack.services.energy import with_goal_calories
from burntrack.services.identity import (
    generate_id,
    is_future_date,
    normalize_date,
    now_timestamp,
    today,
)

_logger = logging.getLogger(__name__)

StateListener = Callable[[AppState], None]


class TrackerStore(Protocol):
    """Persistence interface for the tracker's document collections."""

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: UserProfile) -> None:
        """Store the profile, replacing any previous one."""

    def get_food_items(self) -> list[FoodItem]:
        """Return all food items in stored order."""

    def save_food_items(self, items: list[FoodItem]) -> None:
        """Replace the stored food items."""

    def add_food_entry(self, entry: FoodEntry) -> None:
        """Append a food entry."""

    def update_food_entry(self, entry: FoodEntry) -> None:
        """Replace the food entry with the same id."""

    def delete_food_entry(self, entry_id: str) -> None:
        """Remove a food entry by id."""

    def list_food_entries(self) -> list[FoodEntry]:
        """Return every food entry in insertion order."""

    def get_entries_by_date(self, day: str) -> list[FoodEntry]:
        """Return the food entries logged on a day."""

    def get_weight_entries(self) -> list[WeightEntry]:
        """Return the weight series in stored order."""

    def upsert_weight_entry(self, entry: WeightEntry) -> None:
        """Insert a weight entry or replace the one for the same date."""

    def clear_all(self) -> None:
        """Remove every stored collection."""


@dataclass
class TrackerService:
    """Application controller exposing typed commands over the tracker state.

    Every command replaces ``state`` with a new frozen snapshot, so states
    handed to listeners or callers never change afterwards.
    """

    store: TrackerStore
    catalog_service: FoodCatalogService
    timezone: str = "UTC"
    default_goal_calories: int = DEFAULT_GOAL_CALORIES
    state: AppState = field(init=False)
    _listeners: list[StateListener] = field(default_factory=list, init=False)
    _catalog_lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    def __post_init__(self) -> None:
        self.state = AppState(selected_date=today(self.timezone))

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with the state after every command."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self) -> AppState:
        """Load persisted collections into the state."""
        self.state = replace(
            self.state,
            profile=self.store.get_profile(),
            food_items=self.store.get_food_items(),
            weight_entries=self.store.get_weight_entries(),
            selected_date=today(self.timezone),
        )
        self._refresh_daily_log()
        self._notify()
        return self.state

    async def initialize_catalog(self) -> list[FoodItem]:
        """Load the food catalog, keeping persisted custom items."""
        async with self._catalog_lock:
            existing = self.store.get_food_items()
            items = await self.catalog_service.initialize(existing)
            self._commit_food_items(items)
            return items

    async def reset(self) -> AppState:
        """Clear every collection and reload the catalog from scratch."""
        async with self._catalog_lock:
            self.store.clear_all()
            self.state = replace(
                self.state,
                profile=None,
                weight_entries=[],
                selected_date=today(self.timezone),
            )
            items = await self.catalog_service.reset()
            self._commit_food_items(items)
        _logger.info("Tracker data reset")
        return self.state

    def set_profile(self, profile_input: ProfileInput) -> UserProfile:
        """Create or update the profile, recomputing its calorie goal."""
        current = self.state.profile
        timestamp = now_timestamp()
        profile = with_goal_calories(
            UserProfile(
                id=current.id if current else generate_id(),
                name=profile_input.name,
                age=profile_input.age,
                gender=profile_input.gender,
                height=profile_input.height,
                weight=profile_input.weight,
                activity_level=profile_input.activity_level,
                weight_goal=profile_input.weight_goal,
                goal_calories=0,
                created_at=current.created_at if current else timestamp,
                updated_at=timestamp,
            )
        )
        self.store.save_profile(profile)
        if current is None:
            self.store.upsert_weight_entry(
                WeightEntry(date=today(self.timezone), weight=profile.weight)
            )
        self.state = replace(
            self.state,
            profile=profile,
            weight_entries=self.store.get_weight_entries(),
        )
        self._refresh_daily_log()
        self._notify()
        return profile

    async def add_food_item(  # noqa: PLR0913
        self,
        name: str,
        calories: float,
        serving_size: float,
        serving_unit: str,
        protein: float | None = None,
        carbs: float | None = None,
        fat: float | None = None,
    ) -> FoodItem:
        """Create a custom food item."""
        item = FoodItem(
            id=generate_id(),
            name=name,
            calories=calories,
            serving_size=serving_size,
            serving_unit=serving_unit,
            protein=protein,
            carbs=carbs,
            fat=fat,
            is_custom=True,
        )
        async with self._catalog_lock:
            self._commit_food_items([*self.store.get_food_items(), item])
        return item

    async def update_food_item(self, item: FoodItem) -> FoodItem | None:
        """Replace a food item by id; returns None when it does not exist."""
        async with self._catalog_lock:
            items = self.store.get_food_items()
            if not any(existing.id == item.id for existing in items):
                return None
            self._commit_food_items(
                [item if existing.id == item.id else existing for existing in items]
            )
        return item

    async def delete_food_item(self, food_item_id: str) -> bool:
        """Delete a food item by id; logged entries keep their snapshot."""
        async with self._catalog_lock:
            items = self.store.get_food_items()
            remaining = [item for item in items if item.id != food_item_id]
            if len(remaining) == len(items):
                return False
            self._commit_food_items(remaining)
        return True

    def get_food_item(self, food_item_id: str) -> FoodItem | None:
        """Return a food item by id."""
        for item in self.state.food_items:
            if item.id == food_item_id:
                return item
        return None

    def search_foods(self, query: str | None) -> list[FoodItem]:
        """Search the catalog by name."""
        return search_food_items(self.state.food_items, query)

    def select_date(self, day: date | str) -> DailyLog | None:
        """Change the selected day; future days are rejected."""
        normalized = normalize_date(day)
        if is_future_date(normalized, today(self.timezone)):
            return None
        self.state = replace(self.state, selected_date=normalized)
        log = self._refresh_daily_log()
        self._notify()
        return log

    def add_food_entry(
        self,
        food_item_id: str,
        servings: float,
        meal_type: MealType,
        day: date | str | None = None,
    ) -> DailyLog | None:
        """Log servings of a food item; returns the selected day's log."""
        item = self.get_food_item(food_item_id)
        if item is None:
            return None
        entry = FoodEntry(
            id=generate_id(),
            food_item_id=item.id,
            food_item=item,
            servings=servings,
            meal_type=meal_type,
            date=normalize_date(day) if day else self.state.selected_date,
            created_at=now_timestamp(),
        )
        self.store.add_food_entry(entry)
        log = self._refresh_daily_log()
        self._notify()
        return log

    def update_food_entry(
        self,
        entry_id: str,
        servings: float | None = None,
        meal_type: MealType | None = None,
        day: date | str | None = None,
    ) -> DailyLog | None:
        """Edit an entry's servings, meal or day, keeping its item snapshot."""
        entry = self._find_entry(entry_id)
        if entry is None:
            return None
        updated = replace(
            entry,
            servings=entry.servings if servings is None else servings,
            meal_type=meal_type or entry.meal_type,
            date=normalize_date(day) if day else entry.date,
        )
        self.store.update_food_entry(updated)
        log = self._refresh_daily_log()
        self._notify()
        return log

    def delete_food_entry(self, entry_id: str) -> DailyLog | None:
        """Delete an entry; returns None when it does not exist."""
        if self._find_entry(entry_id) is None:
            return None
        self.store.delete_food_entry(entry_id)
        log = self._refresh_daily_log()
        self._notify()
        return log

    def daily_log(self, day: date | str | None = None) -> DailyLog:
        """Return a freshly aggregated log for a day, default the selected one."""
        target = normalize_date(day) if day else self.state.selected_date
        return build_daily_log(
            target,
            self.store.get_entries_by_date(target),
            resolve_goal_calories(self.state.profile, self.default_goal_calories),
        )

    def meal_groups(
        self, day: date | str | None = None
    ) -> dict[MealType, list[FoodEntry]]:
        """Return the day's entries grouped by meal type."""
        return group_by_meal(self.daily_log(day).entries)

    def add_weight_entry(
        self, day: date | str, weight: float
    ) -> list[WeightEntry] | None:
        """Record a day's weight and refresh the profile weight and goal."""
        normalized = normalize_date(day)
        if is_future_date(normalized, today(self.timezone)):
            return None
        self.store.upsert_weight_entry(WeightEntry(date=normalized, weight=weight))
        profile = self.state.profile
        if profile is not None:
            profile = with_goal_calories(
                replace(profile, weight=weight, updated_at=now_timestamp())
            )
            self.store.save_profile(profile)
        self.state = replace(
            self.state,
            profile=profile,
            weight_entries=self.store.get_weight_entries(),
        )
        self._refresh_daily_log()
        self._notify()
        return self.weight_history()

    def weight_history(self) -> list[WeightEntry]:
        """Return the weight series sorted by date."""
        return sorted(self.state.weight_entries, key=lambda entry: entry.date)

    def _find_entry(self, entry_id: str) -> FoodEntry | None:
        for entry in self.store.list_food_entries():
            if entry.id == entry_id:
                return entry
        return None

    def _commit_food_items(self, items: list[FoodItem]) -> None:
        self.store.save_food_items(items)
        self.state = replace(
            self.state,
            food_items=list(items),
            catalog_state=self.catalog_service.state,
        )
        self._refresh_daily_log()
        self._notify()

    def _refresh_daily_log(self) -> DailyLog:
        log = self.daily_log()
        self.state = replace(self.state, daily_log=log)
        return log

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)
