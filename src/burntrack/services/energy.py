"""Energy calculations: BMI, BMR and the daily calorie goal."""

from dataclasses import replace

from burntrack.domain.profile import (
    ActivityLevel,
    BMICategory,
    BMIResult,
    Gender,
    UserProfile,
    WeightGoal,
)
from burntrack.services.units import round_half_up

UNDERWEIGHT_BELOW = 18.5
NORMAL_BELOW = 25.0
OVERWEIGHT_BELOW = 30.0

# Midpoint of the male (+5) and female (-161) offsets.
OTHER_GENDER_OFFSET = -78

_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
_DEFAULT_ACTIVITY_MULTIPLIER = 1.2

_GOAL_ADJUSTMENTS = {
    WeightGoal.LOSE: -500,
    WeightGoal.GAIN: 500,
    WeightGoal.MAINTAIN: 0,
}


def calculate_bmi(weight: float, height: float) -> BMIResult:
    """Return BMI for a weight in kg and height in cm."""
    height_m = height / 100
    bmi = weight / (height_m * height_m)
    if bmi < UNDERWEIGHT_BELOW:
        category = BMICategory.UNDERWEIGHT
    elif bmi < NORMAL_BELOW:
        category = BMICategory.NORMAL
    elif bmi < OVERWEIGHT_BELOW:
        category = BMICategory.OVERWEIGHT
    else:
        category = BMICategory.OBESE
    return BMIResult(bmi=round_half_up(bmi, 1), category=category)


def calculate_bmr(weight: float, height: float, age: int, gender: str) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation."""
    base = 10 * weight + 6.25 * height - 5 * age
    if gender == Gender.MALE:
        return base + 5
    if gender == Gender.FEMALE:
        return base - 161
    return base + OTHER_GENDER_OFFSET


def activity_multiplier(activity_level: str) -> float:
    """Return the TDEE multiplier for an activity level."""
    return _ACTIVITY_MULTIPLIERS.get(activity_level, _DEFAULT_ACTIVITY_MULTIPLIER)


def weight_goal_adjustment(weight_goal: str) -> int:
    """Return the daily calorie surplus or deficit for a goal."""
    return _GOAL_ADJUSTMENTS.get(weight_goal, 0)


def daily_calorie_needs(profile: UserProfile) -> int:
    """Compute the daily calorie goal for a profile."""
    bmr = calculate_bmr(profile.weight, profile.height, profile.age, profile.gender)
    maintenance = bmr * activity_multiplier(profile.activity_level)
    return int(round_half_up(maintenance + weight_goal_adjustment(profile.weight_goal)))


def with_goal_calories(profile: UserProfile) -> UserProfile:
    """Return the profile with goal_calories recomputed from its attributes."""
    return replace(profile, goal_calories=daily_calorie_needs(profile))
