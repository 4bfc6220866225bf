"""Tests for the tracker controller."""

import asyncio
from dataclasses import replace
from datetime import date, timedelta

from burntrack.domain.catalog import CatalogState
from burntrack.domain.foods import MealType
from burntrack.domain.profile import ActivityLevel, Gender, ProfileInput, WeightGoal
from burntrack.domain.state import AppState
from burntrack.services.catalog import FoodCatalogService
from burntrack.services.identity import today
from burntrack.services.tracker import TrackerService
from tests.conftest import FakeFoodSourceClient, InMemoryTrackerStore


def _profile_input(weight: float = 70.0) -> ProfileInput:
    return ProfileInput(
        name="Asha",
        age=30,
        gender=Gender.MALE,
        height=175.0,
        weight=weight,
        activity_level=ActivityLevel.MODERATE,
        weight_goal=WeightGoal.MAINTAIN,
    )


def _ready(tracker) -> None:  # type: ignore[no-untyped-def]
    tracker.load()
    asyncio.run(tracker.initialize_catalog())


def test_load_without_profile_uses_default_goal(tracker) -> None:
    state = tracker.load()

    assert state.profile is None
    assert not state.is_profile_complete
    assert state.selected_date == today()
    assert state.daily_log.goal_calories == 2000
    assert state.daily_log.total_calories == 0


def test_initialize_catalog_persists_items(tracker, store) -> None:
    _ready(tracker)

    assert tracker.state.catalog_state == CatalogState.READY
    assert [item.name for item in store.food_items] == [
        "Chapati",
        "Dal Makhani",
        "Masala Dosa",
    ]


def test_set_profile_derives_goal_and_seeds_weight(tracker, store) -> None:
    tracker.load()

    profile = tracker.set_profile(_profile_input())

    assert profile.goal_calories == 2556
    assert store.profile == profile
    assert [(w.date, w.weight) for w in store.weights] == [(today(), 70.0)]
    assert tracker.state.daily_log.goal_calories == 2556


def test_set_profile_edit_keeps_identity(tracker, store) -> None:
    tracker.load()
    created = tracker.set_profile(_profile_input())

    edited = tracker.set_profile(_profile_input(weight=80.0))

    assert edited.id == created.id
    assert edited.created_at == created.created_at
    assert edited.goal_calories == 2711
    assert len(store.weights) == 1


def test_add_food_entry_recomputes_daily_log(tracker) -> None:
    _ready(tracker)
    chapati = tracker.search_foods("chapati")[0]

    log = tracker.add_food_entry(chapati.id, 2, MealType.BREAKFAST)

    assert log is not None
    assert log.total_calories == 240
    assert tracker.state.daily_log == log
    assert tracker.meal_groups()[MealType.BREAKFAST][0].food_item == chapati


def test_entry_keeps_snapshot_after_item_edit(tracker) -> None:
    _ready(tracker)
    chapati = tracker.search_foods("chapati")[0]
    tracker.add_food_entry(chapati.id, 1, MealType.LUNCH)

    asyncio.run(tracker.update_food_item(replace(chapati, calories=999)))

    assert tracker.daily_log().total_calories == 120


def test_add_food_entry_unknown_item_returns_none(tracker) -> None:
    _ready(tracker)

    assert tracker.add_food_entry("missing", 1, MealType.SNACK) is None


def test_update_and_delete_food_entry(tracker, store) -> None:
    _ready(tracker)
    dal = tracker.search_foods("dal")[0]
    tracker.add_food_entry(dal.id, 1, MealType.DINNER)
    entry_id = store.entries[0].id

    updated = tracker.update_food_entry(entry_id, servings=3)
    assert updated is not None
    assert updated.total_calories == 690

    deleted = tracker.delete_food_entry(entry_id)
    assert deleted is not None
    assert deleted.total_calories == 0
    assert tracker.delete_food_entry(entry_id) is None


def test_daily_log_for_other_day_excludes_today(tracker) -> None:
    _ready(tracker)
    yesterday = (date.fromisoformat(today()) - timedelta(days=1)).isoformat()
    dal = tracker.search_foods("dal")[0]
    tracker.add_food_entry(dal.id, 1, MealType.DINNER, day=yesterday)

    assert tracker.daily_log().total_calories == 0
    assert tracker.daily_log(yesterday).total_calories == 230
    selected = tracker.select_date(yesterday)
    assert selected is not None
    assert selected.total_calories == 230


def test_select_future_date_is_rejected(tracker) -> None:
    tracker.load()
    tomorrow = (date.fromisoformat(today()) + timedelta(days=1)).isoformat()

    assert tracker.select_date(tomorrow) is None
    assert tracker.state.selected_date == today()


def test_add_custom_food_item_survives_reload(tracker, store) -> None:
    _ready(tracker)

    custom = asyncio.run(tracker.add_food_item("Home Khichdi", 180, 1, "bowl"))
    asyncio.run(tracker.initialize_catalog())

    assert custom.is_custom
    assert store.food_items[-1] == custom
    assert tracker.search_foods("khichdi") == [custom]


def test_custom_item_added_during_load_is_kept(store) -> None:
    class SlowSource(FakeFoodSourceClient):
        async def fetch_text(self) -> str:
            await asyncio.sleep(0.01)
            return await super().fetch_text()

    tracker = TrackerService(
        store=store, catalog_service=FoodCatalogService(SlowSource())
    )

    async def scenario() -> None:
        load = asyncio.create_task(tracker.initialize_catalog())
        await asyncio.sleep(0)
        await tracker.add_food_item("Late Custom", 50, 1, "piece")
        await load

    asyncio.run(scenario())

    assert [item.name for item in store.food_items][-1] == "Late Custom"


def test_delete_food_item(tracker) -> None:
    _ready(tracker)
    chapati = tracker.search_foods("chapati")[0]

    assert asyncio.run(tracker.delete_food_item(chapati.id)) is True
    assert asyncio.run(tracker.delete_food_item(chapati.id)) is False
    assert tracker.search_foods("chapati") == []


def test_weight_upsert_replaces_same_day(tracker, store) -> None:
    tracker.load()
    tracker.set_profile(_profile_input())

    history = tracker.add_weight_entry(today(), 68.0)

    assert history is not None
    assert len(history) == 1
    assert history[0].weight == 68.0
    assert store.profile is not None
    assert store.profile.weight == 68.0
    assert store.profile.goal_calories == 2525


def test_weight_history_sorted_and_future_rejected(tracker) -> None:
    tracker.load()
    tracker.add_weight_entry("2024-02-01", 71.0)
    tracker.add_weight_entry("2024-01-01", 72.0)
    tomorrow = (date.fromisoformat(today()) + timedelta(days=1)).isoformat()

    assert tracker.add_weight_entry(tomorrow, 70.0) is None
    assert [w.date for w in tracker.weight_history()] == ["2024-01-01", "2024-02-01"]


def test_reset_clears_everything(tracker, store) -> None:
    _ready(tracker)
    tracker.set_profile(_profile_input())
    asyncio.run(tracker.add_food_item("Home Khichdi", 180, 1, "bowl"))
    chapati = tracker.search_foods("chapati")[0]
    tracker.add_food_entry(chapati.id, 1, MealType.LUNCH)

    state = asyncio.run(tracker.reset())

    assert state.profile is None
    assert store.profile is None
    assert store.entries == []
    assert store.weights == []
    assert state.weight_entries == []
    assert all(not item.is_custom for item in state.food_items)
    assert len(state.food_items) == 3
    assert state.daily_log.total_calories == 0


def test_reset_uses_seed_items_when_source_fails(store) -> None:
    tracker = TrackerService(
        store=store,
        catalog_service=FoodCatalogService(
            FakeFoodSourceClient(error=OSError("missing file"))
        ),
    )
    store.food_items = []

    state = asyncio.run(tracker.reset())

    assert state.catalog_state == CatalogState.FALLBACK
    assert "Samosa" in [item.name for item in state.food_items]


def test_subscribers_receive_state(tracker) -> None:
    seen: list[AppState] = []
    unsubscribe = tracker.subscribe(seen.append)

    tracker.load()
    unsubscribe()
    tracker.load()

    assert len(seen) == 1


def test_notified_states_are_not_mutated_by_later_commands(tracker) -> None:
    seen: list[AppState] = []
    tracker.subscribe(seen.append)

    loaded = tracker.load()
    tracker.set_profile(_profile_input())

    assert seen[0] is loaded
    assert seen[0] is not seen[1]
    assert seen[0].profile is None
    assert loaded.weight_entries == []
    assert seen[1].profile is not None
    assert tracker.state.profile == seen[1].profile


def test_loads_persisted_profile() -> None:
    first_store = InMemoryTrackerStore()
    first = TrackerService(
        store=first_store,
        catalog_service=FoodCatalogService(FakeFoodSourceClient()),
    )
    first.load()
    profile = first.set_profile(_profile_input())

    second = TrackerService(
        store=first_store,
        catalog_service=FoodCatalogService(FakeFoodSourceClient()),
    )

    assert second.load().profile == profile
