"""Domain models for food catalog loading."""

from dataclasses import dataclass
from enum import StrEnum

from burntrack.domain.foods import FoodItem


class CatalogState(StrEnum):
    """Lifecycle of the food catalog."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ParsedRow:
    """A catalog line that produced a food item."""

    line_number: int
    item: FoodItem


@dataclass(frozen=True)
class SkippedRow:
    """A catalog line that was rejected, with the reason."""

    line_number: int
    raw: str
    reason: str


CatalogRow = ParsedRow | SkippedRow
