"""
User profile fields the scheduling engine reads and writes.

Part of AMA-612: Adaptive scheduling domain model
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.models.load import UnitPreference


class UserProfile(BaseModel):
    """
    Training profile for a single user.

    Settings changes update `days_per_week` / `selected_days`; the cycle
    tracker owns `cycle_number`, `total_workouts_completed`,
    `cycle_anchor_date` and `last_prompted_cycle`.
    """

    user_id: str
    weight: Optional[float] = Field(
        default=None, gt=0, description="Body weight in the user's display unit"
    )
    unit_preference: UnitPreference = UnitPreference.IMPERIAL
    equipment: List[str] = Field(default_factory=list)
    days_per_week: int = Field(default=3, ge=1, le=7)
    selected_days: List[int] = Field(
        default_factory=list, description="Weekdays 1=Monday ... 7=Sunday"
    )
    cycle_number: int = Field(default=1, ge=1)
    total_workouts_completed: int = Field(default=0, ge=0)
    active_program_id: Optional[str] = None
    cycle_anchor_date: Optional[date] = None
    last_prompted_cycle: Optional[int] = None

    @field_validator("selected_days")
    @classmethod
    def validate_selected_days(cls, v: List[int]) -> List[int]:
        for day in v:
            if day < 1 or day > 7:
                raise ValueError(f"Invalid weekday {day}; expected 1 (Mon) to 7 (Sun)")
        return v

    @property
    def weight_unit(self) -> str:
        return self.unit_preference.weight_unit
