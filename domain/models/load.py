"""
Load value object and weight-unit conversion.

Part of AMA-612: Adaptive scheduling domain model

All progression arithmetic runs in pounds. Values entered or displayed in
kilograms are converted here, at the I/O boundary, and nowhere else.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


# Conversion constants
LB_TO_KG = 0.45359237
KG_TO_LB = 2.20462262

CANONICAL_UNIT = "lb"


class UnitPreference(str, Enum):
    """Display unit preference stored on the user profile."""

    IMPERIAL = "imperial"
    METRIC = "metric"

    @property
    def weight_unit(self) -> str:
        """Weight unit shown to the user for this preference."""
        return "kg" if self == UnitPreference.METRIC else "lb"


def to_canonical(value: float, unit: str) -> float:
    """Convert a weight in ``unit`` ("lb" or "kg") to pounds."""
    if unit == "kg":
        return round(value * KG_TO_LB, 2)
    return float(value)


def from_canonical(value_lb: float, unit: str) -> float:
    """Convert a weight in pounds to ``unit`` ("lb" or "kg")."""
    if unit == "kg":
        return round(value_lb * LB_TO_KG, 2)
    return float(value_lb)


def pounds_to_kg(pounds: float) -> float:
    """Convert pounds to kilograms (used for body weight in calorie math)."""
    return pounds * LB_TO_KG


class Load(BaseModel):
    """
    Value object for a weight entered or displayed in the user's unit.

    Examples:
        >>> Load(value=100, unit="kg").to_canonical()
        220.46

        >>> Load.from_canonical(135, "lb").value
        135.0
    """

    value: float = Field(..., ge=0, description="Weight value in `unit`")
    unit: Literal["lb", "kg"] = Field(default="lb", description="Unit of measurement")

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: float) -> float:
        """Reject values no one can lift."""
        if v > 2000:
            raise ValueError("Load value exceeds reasonable maximum (2000)")
        return round(v, 2)

    def to_canonical(self) -> float:
        """Return the load in pounds."""
        return to_canonical(self.value, self.unit)

    @classmethod
    def from_canonical(cls, value_lb: float, unit: str) -> "Load":
        """Build a display load from a canonical pound value."""
        return cls(value=from_canonical(value_lb, unit), unit=unit)

    def __str__(self) -> str:
        return f"{self.value} {self.unit}"

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"value": 135, "unit": "lb"},
                {"value": 60, "unit": "kg"},
            ]
        },
    }
