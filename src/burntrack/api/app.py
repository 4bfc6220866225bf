"""FastAPI application factory."""

import asyncio
import contextlib
import datetime as dt
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace

from fastapi import FastAPI, HTTPException, Request, status

from burntrack.api.models import (
    FoodEntryPayload,
    FoodEntryUpdatePayload,
    FoodItemPayload,
    ProfilePayload,
    SelectDatePayload,
    WeightPayload,
    daily_log_response,
    food_item_response,
    profile_response,
)
from burntrack.app_logging import configure_logging
from burntrack.containers import AppContainer
from burntrack.domain.foods import DailyLog
from burntrack.services.energy import calculate_bmi
from burntrack.services.identity import is_future_date, today
from burntrack.services.tracker import TrackerService


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        tracker: TrackerService = app.state.container.tracker_service
        tracker.load()
        catalog_task = asyncio.create_task(tracker.initialize_catalog())
        yield
        if not catalog_task.done():
            logger.info("Cancelling in-flight catalog load")
            catalog_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await catalog_task
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the current profile."""
        tracker = _tracker(request)
        if tracker.state.profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return profile_response(tracker.state.profile)

    @app.put("/profile")
    async def put_profile(
        payload: ProfilePayload, request: Request
    ) -> dict[str, object]:
        """Create or update the profile; the calorie goal is derived."""
        profile = _tracker(request).set_profile(payload.to_input())
        return profile_response(profile)

    @app.get("/profile/bmi")
    async def get_bmi(request: Request) -> dict[str, object]:
        """Return BMI for the current profile."""
        profile = _tracker(request).state.profile
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        result = calculate_bmi(profile.weight, profile.height)
        return {"bmi": result.bmi, "category": result.category}

    @app.get("/catalog")
    async def catalog_status(request: Request) -> dict[str, object]:
        """Return the catalog load state."""
        container: AppContainer = request.app.state.container
        return {
            "state": container.catalog_service.state,
            "items": len(container.tracker_service.state.food_items),
            "skipped_rows": len(container.catalog_service.skipped_rows),
        }

    @app.get("/foods")
    async def search_foods(
        request: Request, query: str | None = None
    ) -> dict[str, object]:
        """Search food items by name."""
        items = _tracker(request).search_foods(query)
        return {"items": [food_item_response(item) for item in items]}

    @app.post("/foods", status_code=status.HTTP_201_CREATED)
    async def create_food(
        payload: FoodItemPayload, request: Request
    ) -> dict[str, object]:
        """Create a custom food item."""
        item = await _tracker(request).add_food_item(**payload.model_dump())
        return food_item_response(item)

    @app.put("/foods/{food_item_id}")
    async def update_food(
        food_item_id: str, payload: FoodItemPayload, request: Request
    ) -> dict[str, object]:
        """Replace a food item's details."""
        tracker = _tracker(request)
        current = tracker.get_food_item(food_item_id)
        if current is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        updated = await tracker.update_food_item(
            replace(current, **payload.model_dump())
        )
        if updated is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return food_item_response(updated)

    @app.delete("/foods/{food_item_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_food(food_item_id: str, request: Request) -> None:
        """Delete a food item."""
        if not await _tracker(request).delete_food_item(food_item_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.get("/daily-log")
    async def get_daily_log(
        request: Request, date: dt.date | None = None
    ) -> dict[str, object]:
        """Return the daily log for a day, default the selected one."""
        day = date.isoformat() if date else None
        return daily_log_response(_tracker(request).daily_log(day))

    @app.put("/daily-log/date")
    async def select_date(
        payload: SelectDatePayload, request: Request
    ) -> dict[str, object]:
        """Change the selected day."""
        log = _tracker(request).select_date(payload.date.isoformat())
        if log is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot select a future date.",
            )
        return daily_log_response(log)

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def add_entry(
        payload: FoodEntryPayload, request: Request
    ) -> dict[str, object]:
        """Log servings of a food item."""
        tracker = _tracker(request)
        if payload.date and is_future_date(payload.date, today(tracker.timezone)):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot log food on a future date.",
            )
        log = tracker.add_food_entry(
            payload.food_item_id, payload.servings, payload.meal_type, payload.date
        )
        return _log_or_404(log)

    @app.patch("/entries/{entry_id}")
    async def update_entry(
        entry_id: str, payload: FoodEntryUpdatePayload, request: Request
    ) -> dict[str, object]:
        """Edit a logged entry."""
        tracker = _tracker(request)
        if payload.date and is_future_date(payload.date, today(tracker.timezone)):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot move an entry to a future date.",
            )
        log = tracker.update_food_entry(
            entry_id,
            servings=payload.servings,
            meal_type=payload.meal_type,
            day=payload.date,
        )
        return _log_or_404(log)

    @app.delete("/entries/{entry_id}")
    async def delete_entry(entry_id: str, request: Request) -> dict[str, object]:
        """Delete a logged entry."""
        return _log_or_404(_tracker(request).delete_food_entry(entry_id))

    @app.get("/weights")
    async def list_weights(request: Request) -> dict[str, object]:
        """Return the weight history sorted by date."""
        entries = _tracker(request).weight_history()
        return {"entries": [{"date": e.date, "weight": e.weight} for e in entries]}

    @app.post("/weights", status_code=status.HTTP_201_CREATED)
    async def add_weight(payload: WeightPayload, request: Request) -> dict[str, object]:
        """Record a weight measurement, one per day."""
        tracker = _tracker(request)
        entries = tracker.add_weight_entry(
            payload.date or today(tracker.timezone), payload.weight_kg()
        )
        if entries is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot record weight for a future date.",
            )
        return {"entries": [{"date": e.date, "weight": e.weight} for e in entries]}

    @app.post("/reset")
    async def reset(request: Request) -> dict[str, object]:
        """Delete all data and reload the catalog."""
        state = await _tracker(request).reset()
        logger.info("Reset completed with %s catalog items", len(state.food_items))
        return {"status": "ok", "food_items": len(state.food_items)}

    return app


def _tracker(request: Request) -> TrackerService:
    container: AppContainer = request.app.state.container
    return container.tracker_service


def _log_or_404(log: DailyLog | None) -> dict[str, object]:
    if log is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return daily_log_response(log)
