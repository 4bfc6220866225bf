"""Pydantic request and response models for the HTTP API."""

import datetime as dt
from dataclasses import asdict
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from burntrack.domain.foods import DailyLog, FoodEntry, FoodItem, MealType
from burntrack.domain.profile import (
    ActivityLevel,
    Gender,
    ProfileInput,
    UserProfile,
    WeightGoal,
)
from burntrack.services.daily_log import (
    entry_calories,
    group_by_meal,
    progress_percentage,
)
from burntrack.services.energy import calculate_bmi
from burntrack.services.units import cm_to_feet, feet_to_cm, kg_to_lbs, lbs_to_kg


class ProfilePayload(BaseModel):
    """Profile form input, in metric or imperial units."""

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0)
    gender: Gender
    height_unit: Literal["cm", "ft"] = "cm"
    height_cm: float | None = Field(None, gt=0)
    height_feet: int | None = Field(None, ge=0)
    height_inches: float | None = Field(None, ge=0, lt=12)
    weight_unit: Literal["kg", "lbs"] = "kg"
    weight: float = Field(..., gt=0)
    activity_level: ActivityLevel
    weight_goal: WeightGoal

    @model_validator(mode="after")
    def _check_measurements(self) -> "ProfilePayload":
        if self.height_unit == "cm" and self.height_cm is None:
            raise ValueError("height_cm is required when height_unit is cm")
        if self.height_unit == "ft" and self.height_feet is None:
            raise ValueError("height_feet is required when height_unit is ft")
        if self.height_cm_value() <= 0:
            raise ValueError("height must be greater than zero")
        if self.weight_kg() <= 0:
            raise ValueError("weight must be greater than zero")
        return self

    def height_cm_value(self) -> float:
        """Return the height in centimeters."""
        if self.height_unit == "ft":
            return float(feet_to_cm(self.height_feet or 0, self.height_inches or 0))
        return float(self.height_cm or 0)

    def weight_kg(self) -> float:
        """Return the weight in kilograms."""
        return lbs_to_kg(self.weight) if self.weight_unit == "lbs" else self.weight

    def to_input(self) -> ProfileInput:
        """Convert to metric domain input."""
        return ProfileInput(
            name=self.name,
            age=self.age,
            gender=self.gender,
            height=self.height_cm_value(),
            weight=self.weight_kg(),
            activity_level=self.activity_level,
            weight_goal=self.weight_goal,
        )


class FoodItemPayload(BaseModel):
    """Custom food item input."""

    name: str = Field(..., min_length=1)
    calories: float = Field(..., ge=0)
    serving_size: float = Field(..., gt=0)
    serving_unit: str = ""
    protein: float | None = Field(None, ge=0)
    carbs: float | None = Field(None, ge=0)
    fat: float | None = Field(None, ge=0)


class FoodEntryPayload(BaseModel):
    """Input for logging a food item."""

    food_item_id: str
    servings: float = Field(..., gt=0)
    meal_type: MealType
    date: dt.date | None = None


class FoodEntryUpdatePayload(BaseModel):
    """Partial update for a logged food entry."""

    servings: float | None = Field(None, gt=0)
    meal_type: MealType | None = None
    date: dt.date | None = None


class SelectDatePayload(BaseModel):
    """Selected calendar day."""

    date: dt.date


class WeightPayload(BaseModel):
    """Weight measurement input."""

    date: dt.date | None = None
    weight: float = Field(..., gt=0)
    unit: Literal["kg", "lbs"] = "kg"

    @model_validator(mode="after")
    def _check_weight(self) -> "WeightPayload":
        if self.weight_kg() <= 0:
            raise ValueError("weight must be greater than zero")
        return self

    def weight_kg(self) -> float:
        """Return the weight in kilograms."""
        return lbs_to_kg(self.weight) if self.unit == "lbs" else self.weight


def profile_response(profile: UserProfile) -> dict[str, object]:
    """Serialize a profile with imperial equivalents and BMI."""
    height_imperial = cm_to_feet(profile.height)
    bmi = calculate_bmi(profile.weight, profile.height)
    return {
        **asdict(profile),
        "weight_lbs": kg_to_lbs(profile.weight),
        "height_feet": height_imperial.feet,
        "height_inches": height_imperial.inches,
        "bmi": bmi.bmi,
        "bmi_category": bmi.category,
    }


def food_item_response(item: FoodItem) -> dict[str, object]:
    """Serialize a food item."""
    return asdict(item)


def entry_response(entry: FoodEntry) -> dict[str, object]:
    """Serialize a food entry with its calorie contribution."""
    return {
        **asdict(entry),
        "calories": entry_calories(entry),
    }


def daily_log_response(log: DailyLog) -> dict[str, object]:
    """Serialize a daily log with meal groups and progress."""
    groups = group_by_meal(log.entries)
    return {
        "date": log.date,
        "entries": [entry_response(entry) for entry in log.entries],
        "total_calories": log.total_calories,
        "goal_calories": log.goal_calories,
        "remaining_calories": log.remaining_calories,
        "progress_percent": progress_percentage(log),
        "total_protein": log.total_protein,
        "total_carbs": log.total_carbs,
        "total_fat": log.total_fat,
        "meals": {
            meal_type.value: {
                "calories": log.meal_calories.get(meal_type, 0.0),
                "entry_ids": [entry.id for entry in entries],
            }
            for meal_type, entries in groups.items()
        },
    }
