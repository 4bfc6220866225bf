"""Application state owned by the tracker controller."""

from dataclasses import dataclass, field

from burntrack.domain.catalog import CatalogState
from burntrack.domain.foods import DailyLog, FoodItem
from burntrack.domain.profile import UserProfile, WeightEntry


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of everything the presentation layer renders."""

    selected_date: str
    profile: UserProfile | None = None
    food_items: list[FoodItem] = field(default_factory=list)
    weight_entries: list[WeightEntry] = field(default_factory=list)
    daily_log: DailyLog | None = None
    catalog_state: CatalogState = CatalogState.UNINITIALIZED

    @property
    def is_profile_complete(self) -> bool:
        """Return True once onboarding has produced a profile."""
        return self.profile is not None
