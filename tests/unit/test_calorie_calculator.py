"""
Unit tests for backend/core/calorie_calculator.py

Part of AMA-620: Session summary
"""

import pytest

from backend.core.calorie_calculator import (
    DEFAULT_INTENSITY,
    calculate_calories_burned,
    determine_intensity,
)


@pytest.mark.unit
class TestCalculateCaloriesBurned:
    """MET-based estimate."""

    def test_moderate_hour(self):
        # 5.0 MET * 3.5 * 80 / 200 = 7 kcal/min
        assert calculate_calories_burned(60, 80, "moderate") == 420

    def test_vigorous_burns_more(self):
        assert calculate_calories_burned(45, 80, "vigorous") > calculate_calories_burned(
            45, 80, "light"
        )

    def test_unknown_intensity_uses_default(self):
        assert calculate_calories_burned(30, 70, "extreme") == calculate_calories_burned(
            30, 70, DEFAULT_INTENSITY
        )

    def test_zero_minutes(self):
        assert calculate_calories_burned(0, 80, "circuit") == 0


@pytest.mark.unit
class TestDetermineIntensity:
    """Workout names map onto intensity levels."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("HIIT Finisher", "circuit"),
            ("Strength Block A", "vigorous"),
            ("Beginner Full Body", "light"),
            ("Upper Push", "moderate"),
            (None, "moderate"),
        ],
    )
    def test_mapping(self, name, expected):
        assert determine_intensity(name) == expected
