"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from burntrack.adapters.food_source_client import (
    FileFoodSourceClient,
    HttpxFoodSourceClient,
    bundled_catalog_path,
)
from burntrack.adapters.json_store import JsonFileTrackerStore
from burntrack.config import Settings
from burntrack.services.catalog import FoodCatalogService
from burntrack.services.tracker import TrackerService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: FoodCatalogService
    tracker_service: TrackerService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    if resolved_settings.food_catalog_url:
        source_client = HttpxFoodSourceClient.create(
            resolved_settings.food_catalog_url,
            timeout_seconds=resolved_settings.request_timeout_seconds,
        )
    else:
        source_client = FileFoodSourceClient(
            resolved_settings.food_catalog_path or bundled_catalog_path()
        )
    catalog_service = FoodCatalogService(source_client)
    tracker_service = TrackerService(
        store=JsonFileTrackerStore(resolved_settings.data_file),
        catalog_service=catalog_service,
        timezone=resolved_settings.timezone,
        default_goal_calories=resolved_settings.default_goal_calories,
    )

    async def close_resources() -> None:
        await source_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        tracker_service=tracker_service,
        close_resources=close_resources,
    )
