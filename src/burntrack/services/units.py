"""Unit conversions for height and weight."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12
LBS_PER_KG = 2.20462


class HeightImperial(NamedTuple):
    """Height split into whole feet and rounded inches."""

    feet: int
    inches: int


def round_half_up(value: float, digits: int = 0) -> float:
    """Round the exact binary value of a float, halves away from zero.

    Negative halves round down (-2.5 -> -3), not toward +inf. Callers only
    round non-negative values except for degenerate calorie profiles.
    """
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def cm_to_feet(cm: float) -> HeightImperial:
    """Convert centimeters to feet and inches."""
    total_inches = cm / CM_PER_INCH
    feet = math.floor(total_inches / INCHES_PER_FOOT)
    inches = int(round_half_up(math.fmod(total_inches, INCHES_PER_FOOT)))
    return HeightImperial(feet=feet, inches=inches)


def feet_to_cm(feet: float, inches: float) -> int:
    """Convert feet and inches to whole centimeters."""
    total_inches = feet * INCHES_PER_FOOT + inches
    return int(round_half_up(total_inches * CM_PER_INCH))


def kg_to_lbs(kg: float) -> float:
    """Convert kilograms to pounds, one decimal."""
    return round_half_up(kg * LBS_PER_KG, 1)


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms, one decimal."""
    return round_half_up(lbs / LBS_PER_KG, 1)
