"""
Calorie estimation from MET values.

Part of AMA-620: Session summary

Formula: calories = minutes * (MET * 3.5 * body weight kg / 200)
"""

from typing import Optional

MET_VALUES = {
    "light": 3.5,  # Easy pace, lighter weights
    "moderate": 5.0,  # Typical gym workout
    "vigorous": 6.0,  # Heavy lifting, minimal rest
    "circuit": 8.0,  # Fast-paced circuit training
}

DEFAULT_INTENSITY = "moderate"


def calculate_calories_burned(
    duration_minutes: float,
    weight_kg: float,
    intensity_level: str = DEFAULT_INTENSITY,
) -> int:
    """
    Estimate calories burned during a workout.

    Args:
        duration_minutes: Total workout duration in minutes
        weight_kg: Body weight in kilograms
        intensity_level: "light", "moderate", "vigorous" or "circuit"

    Returns:
        Estimated calories, rounded to the nearest integer
    """
    met = MET_VALUES.get(intensity_level, MET_VALUES[DEFAULT_INTENSITY])
    calories_per_minute = (met * 3.5 * weight_kg) / 200
    return int(round(calories_per_minute * duration_minutes))


def determine_intensity(program_type: Optional[str]) -> str:
    """Map a program type / workout name onto a MET intensity level."""
    if not program_type or not isinstance(program_type, str):
        return DEFAULT_INTENSITY

    kind = program_type.lower()
    if any(word in kind for word in ("circuit", "hiit", "metcon")):
        return "circuit"
    if any(word in kind for word in ("strength", "power", "olympic", "advanced", "intense")):
        return "vigorous"
    if any(word in kind for word in ("beginner", "recovery", "mobility", "flexibility", "rehab")):
        return "light"
    return DEFAULT_INTENSITY
