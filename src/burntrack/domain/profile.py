"""Domain models for the user profile."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Gender options used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class WeightGoal(StrEnum):
    """Direction the user wants their weight to move."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class BMICategory(StrEnum):
    """Coarse BMI categories."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


@dataclass(frozen=True)
class BMIResult:
    """BMI value rounded to one decimal with its category."""

    bmi: float
    category: BMICategory


@dataclass(frozen=True)
class ProfileInput:
    """Profile attributes supplied by the user on onboarding or edit."""

    name: str
    age: int
    gender: Gender
    height: float
    weight: float
    activity_level: ActivityLevel
    weight_goal: WeightGoal


@dataclass(frozen=True)
class UserProfile:
    """Stored user profile; goal_calories is always derived."""

    id: str
    name: str
    age: int
    gender: Gender
    height: float
    weight: float
    activity_level: ActivityLevel
    weight_goal: WeightGoal
    goal_calories: int
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class WeightEntry:
    """Weight measurement for a calendar day."""

    date: str
    weight: float
