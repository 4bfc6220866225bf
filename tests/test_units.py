"""Tests for unit conversions."""

import pytest

from burntrack.services.units import (
    cm_to_feet,
    feet_to_cm,
    kg_to_lbs,
    lbs_to_kg,
    round_half_up,
)


def test_round_half_up_rounds_halves_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.25, 1) == 0.3
    assert round_half_up(2691.1875) == 2691


def test_round_half_up_rounds_negative_halves_away_from_zero() -> None:
    assert round_half_up(-2.5) == -3
    assert round_half_up(-2.4) == -2


def test_cm_to_feet_splits_feet_and_inches() -> None:
    height = cm_to_feet(175)

    assert height.feet == 5
    assert height.inches == 9


def test_feet_to_cm_rounds_to_whole_cm() -> None:
    assert feet_to_cm(5, 9) == 175
    assert feet_to_cm(6, 0) == 183


def test_cm_to_feet_does_not_fail_on_zero() -> None:
    assert cm_to_feet(0) == (0, 0)


@pytest.mark.parametrize("cm", [120, 150.5, 163, 175, 188, 201])
def test_height_round_trip_within_one_cm(cm: float) -> None:
    height = cm_to_feet(cm)

    assert abs(feet_to_cm(height.feet, height.inches) - cm) <= 1


def test_weight_conversions_round_to_one_decimal() -> None:
    assert kg_to_lbs(70) == 154.3
    assert lbs_to_kg(154.3) == 70.0
    assert lbs_to_kg(200) == 90.7


@pytest.mark.parametrize("kg", [45.5, 62.3, 70, 88.8, 120.1])
def test_weight_round_trip_within_tenth(kg: float) -> None:
    assert abs(lbs_to_kg(kg_to_lbs(kg)) - kg) <= 0.1
