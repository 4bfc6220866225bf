"""Food catalog loading, merging and search."""

import csv
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from burntrack.adapters.food_source_client import FoodSourceClient
from burntrack.domain.catalog import CatalogRow, CatalogState, ParsedRow, SkippedRow
from burntrack.domain.foods import FoodItem
from burntrack.services.identity import generate_id

MIN_FIELDS = 4
_CUSTOM_FLAG_INDEX = 7

_logger = logging.getLogger(__name__)


@dataclass
class FoodCatalogService:
    """Loads the baseline catalog and keeps custom items across reloads."""

    source_client: FoodSourceClient
    state: CatalogState = CatalogState.UNINITIALIZED
    skipped_rows: list[SkippedRow] = field(default_factory=list)

    async def initialize(self, existing: list[FoodItem]) -> list[FoodItem]:
        """Load the catalog and merge it with previously persisted items."""
        self.state = CatalogState.LOADING
        _logger.info("Loading food catalog (existing items=%s)", len(existing))
        try:
            text = await self.source_client.fetch_text()
            rows = parse_catalog_csv(text)
        except Exception:
            _logger.exception("Failed to load food catalog, using fallback")
            self.state = CatalogState.FALLBACK
            return list(existing) if existing else seed_food_items()

        self.skipped_rows = [row for row in rows if isinstance(row, SkippedRow)]
        catalog = build_catalog(rows)
        self.state = CatalogState.READY
        _logger.info(
            "Loaded food catalog: items=%s skipped=%s",
            len(catalog),
            len(self.skipped_rows),
        )
        return merge_catalog(catalog, existing)

    async def reset(self) -> list[FoodItem]:
        """Reload the catalog discarding custom items as well."""
        return await self.initialize([])


def parse_catalog_csv(text: str) -> list[CatalogRow]:
    """Parse catalog CSV text into parsed or skipped rows.

    The first line is a header and only column positions matter:
    name, calories, servingSize, servingUnit, protein, carbs, fat, isCustom.
    Blank lines are ignored entirely.
    """
    lines = text.splitlines()
    results: list[CatalogRow] = []
    for line_number, line in enumerate(lines[1:], start=1):
        if not line.strip():
            continue
        values = next(csv.reader([line]))
        results.append(_parse_row(line_number, line, values))
    return results


def build_catalog(rows: Iterable[CatalogRow]) -> list[FoodItem]:
    """Keep parsed rows in order and log the skipped ones."""
    items: list[FoodItem] = []
    for row in rows:
        match row:
            case ParsedRow(item=item):
                items.append(item)
            case SkippedRow(line_number=line_number, reason=reason, raw=raw):
                _logger.warning(
                    "Skipping catalog line %s (%s): %s", line_number, reason, raw
                )
    return items


def merge_catalog(catalog: list[FoodItem], existing: list[FoodItem]) -> list[FoodItem]:
    """Return catalog items followed by the custom items of existing."""
    custom_items = [item for item in existing if item.is_custom]
    return [*catalog, *custom_items]


def search_food_items(items: list[FoodItem], query: str | None) -> list[FoodItem]:
    """Case-insensitive substring search on item names."""
    if not query or not query.strip():
        return list(items)
    normalized = query.strip().lower()
    return [item for item in items if normalized in item.name.lower()]


def seed_food_items() -> list[FoodItem]:
    """Return the built-in items used when no catalog can be loaded."""
    return [
        FoodItem(
            id=generate_id(),
            name="Chapati",
            calories=120,
            serving_size=1,
            serving_unit="piece",
            protein=3,
            carbs=20,
            fat=2.7,
        ),
        FoodItem(
            id=generate_id(),
            name="Dal Makhani",
            calories=230,
            serving_size=100,
            serving_unit="g",
            protein=9,
            carbs=20,
            fat=12,
        ),
        FoodItem(
            id=generate_id(),
            name="Paneer Butter Masala",
            calories=350,
            serving_size=100,
            serving_unit="g",
            protein=15,
            carbs=10,
            fat=28,
        ),
        FoodItem(
            id=generate_id(),
            name="Chicken Biryani",
            calories=250,
            serving_size=100,
            serving_unit="g",
            protein=15,
            carbs=30,
            fat=8,
        ),
        FoodItem(
            id=generate_id(),
            name="Samosa",
            calories=260,
            serving_size=1,
            serving_unit="piece",
            protein=4,
            carbs=30,
            fat=14,
        ),
    ]


def _parse_row(line_number: int, raw: str, values: list[str]) -> CatalogRow:
    if len(values) < MIN_FIELDS:
        return SkippedRow(line_number, raw, f"expected at least {MIN_FIELDS} fields")
    calories = _optional_float(values[1])
    serving_size = _optional_float(values[2])
    if calories is None:
        return SkippedRow(line_number, raw, "calories is not a number")
    if serving_size is None:
        return SkippedRow(line_number, raw, "serving size is not a number")
    item = FoodItem(
        id=generate_id(),
        name=values[0].strip(),
        calories=calories,
        serving_size=serving_size,
        serving_unit=values[3].strip(),
        protein=_optional_float(_field(values, 4)),
        carbs=_optional_float(_field(values, 5)),
        fat=_optional_float(_field(values, 6)),
        is_custom=_field(values, _CUSTOM_FLAG_INDEX).strip() == "true",
    )
    return ParsedRow(line_number, item)


def _field(values: list[str], index: int) -> str:
    return values[index] if index < len(values) else ""


def _optional_float(value: str) -> float | None:
    cleaned = value.strip()
    if not cleaned:
        return None
    try:
        parsed = float(cleaned)
    except ValueError:
        return None
    if math.isnan(parsed):
        return None
    return parsed
