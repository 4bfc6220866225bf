"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from burntrack.adapters.food_source_client import FoodSourceClient
from burntrack.config import Settings
from burntrack.containers import AppContainer
from burntrack.domain.foods import FoodEntry, FoodItem
from burntrack.domain.profile import UserProfile, WeightEntry
from burntrack.services.catalog import FoodCatalogService
from burntrack.services.tracker import TrackerService, TrackerStore

CATALOG_CSV = """name,calories,servingSize,servingUnit,protein,carbs,fat,isCustom
Chapati,120,1,piece,3,20,2.7,false
Dal Makhani,230,100,g,9,20,12,false
Masala Dosa,387,1,piece,,,,false
"""


@dataclass
class InMemoryTrackerStore(TrackerStore):
    """In-memory tracker store for tests."""

    profile: UserProfile | None = None
    food_items: list[FoodItem] = field(default_factory=list)
    entries: list[FoodEntry] = field(default_factory=list)
    weights: list[WeightEntry] = field(default_factory=list)

    def get_profile(self) -> UserProfile | None:
        return self.profile

    def save_profile(self, profile: UserProfile) -> None:
        self.profile = profile

    def get_food_items(self) -> list[FoodItem]:
        return list(self.food_items)

    def save_food_items(self, items: list[FoodItem]) -> None:
        self.food_items = list(items)

    def add_food_entry(self, entry: FoodEntry) -> None:
        self.entries.append(entry)

    def update_food_entry(self, entry: FoodEntry) -> None:
        self.entries = [entry if e.id == entry.id else e for e in self.entries]

    def delete_food_entry(self, entry_id: str) -> None:
        self.entries = [e for e in self.entries if e.id != entry_id]

    def list_food_entries(self) -> list[FoodEntry]:
        return list(self.entries)

    def get_entries_by_date(self, day: str) -> list[FoodEntry]:
        return [e for e in self.entries if e.date == day]

    def get_weight_entries(self) -> list[WeightEntry]:
        return list(self.weights)

    def upsert_weight_entry(self, entry: WeightEntry) -> None:
        for index, existing in enumerate(self.weights):
            if existing.date == entry.date:
                self.weights[index] = entry
                return
        self.weights.append(entry)

    def clear_all(self) -> None:
        self.profile = None
        self.food_items = []
        self.entries = []
        self.weights = []


@dataclass
class FakeFoodSourceClient(FoodSourceClient):
    """Fake catalog source returning fixed text or raising."""

    text: str = CATALOG_CSV
    error: Exception | None = None
    calls: int = 0

    async def fetch_text(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text

    async def close(self) -> None:
        return None


def make_item(name: str, calories: float = 100, *, is_custom: bool = False) -> FoodItem:
    return FoodItem(
        id=f"id-{name.lower().replace(' ', '-')}",
        name=name,
        calories=calories,
        serving_size=1,
        serving_unit="piece",
        is_custom=is_custom,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_file=tmp_path / "data.json", timezone="UTC")


@pytest.fixture
def store() -> InMemoryTrackerStore:
    return InMemoryTrackerStore()


@pytest.fixture
def source_client() -> FakeFoodSourceClient:
    return FakeFoodSourceClient()


@pytest.fixture
def tracker(
    store: InMemoryTrackerStore, source_client: FakeFoodSourceClient
) -> TrackerService:
    return TrackerService(store=store, catalog_service=FoodCatalogService(source_client))


@pytest.fixture
def container(settings: Settings, tracker: TrackerService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        catalog_service=tracker.catalog_service,
        tracker_service=tracker,
        close_resources=close_resources,
    )
