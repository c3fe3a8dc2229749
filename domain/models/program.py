"""
Program templates: workouts and their exercise slots.

Part of AMA-612: Adaptive scheduling domain model

A ProgramWorkout is created once per generated program and never changes.
Its ProgramExercise slots carry the current training targets; those are the
only fields the progression engine moves.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


# Equipment that does not take an external load
WEIGHTLESS_EQUIPMENT = {"bodyweight", "body weight", "none", "no equipment", "mat"}


class ExerciseKind(str, Enum):
    """How a slot is performed and logged."""

    WEIGHTED = "weighted"  # reps + weight
    BODYWEIGHT = "bodyweight"  # reps only
    DURATION = "duration"  # hold for N seconds
    INTERVAL = "interval"  # timer-driven work/rest rounds (HIIT)


class ProgramExercise(BaseModel):
    """
    A single exercise slot within a ProgramWorkout.

    Examples:
        >>> ProgramExercise(
        ...     id="slot-1",
        ...     exercise_id="barbell-bench-press",
        ...     exercise_name="Bench Press",
        ...     target_sets=3,
        ...     reps_min=8,
        ...     reps_max=10,
        ...     recommended_weight=135,
        ...     equipment=["barbell"],
        ... ).kind
        <ExerciseKind.WEIGHTED: 'weighted'>
    """

    id: str
    exercise_id: str
    exercise_name: str
    target_sets: int = Field(default=3, ge=1)

    # Prescription
    reps_min: Optional[int] = Field(default=None, ge=1)
    reps_max: Optional[int] = Field(default=None, ge=1)
    duration_seconds: Optional[int] = Field(default=None, ge=1)
    recommended_weight: Optional[float] = Field(
        default=None, ge=0, description="Recommended load in pounds"
    )
    target_rir: Optional[int] = Field(default=None, ge=0)
    target_rpe: Optional[float] = Field(default=None, ge=1, le=10)
    equipment: List[str] = Field(default_factory=list)

    # Superset pairing
    superset_group: Optional[str] = None
    superset_order: Optional[int] = Field(default=None, ge=1, le=2)

    # Interval (HIIT) block
    work_seconds: Optional[int] = Field(default=None, ge=1)
    rest_seconds: Optional[int] = Field(default=None, ge=0)

    # Number of progression events folded into the targets above
    version: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_prescription(self) -> "ProgramExercise":
        """Rep ranges must be ordered and superset fields come together."""
        if (
            self.reps_min is not None
            and self.reps_max is not None
            and self.reps_min > self.reps_max
        ):
            raise ValueError(
                f"reps_min ({self.reps_min}) cannot exceed reps_max ({self.reps_max})"
            )
        if (self.superset_group is None) != (self.superset_order is None):
            raise ValueError("superset_group and superset_order must be set together")
        return self

    @property
    def kind(self) -> ExerciseKind:
        """Derive the exercise kind from its prescription and equipment."""
        if self.work_seconds is not None:
            return ExerciseKind.INTERVAL
        if self.duration_seconds is not None and self.reps_min is None:
            return ExerciseKind.DURATION
        if self.requires_weight:
            return ExerciseKind.WEIGHTED
        return ExerciseKind.BODYWEIGHT

    @property
    def requires_weight(self) -> bool:
        """True if any listed equipment takes a load."""
        return any(
            item.strip().lower() not in WEIGHTLESS_EQUIPMENT for item in self.equipment
        )

    @property
    def is_interval(self) -> bool:
        return self.work_seconds is not None

    @property
    def in_superset(self) -> bool:
        return self.superset_group is not None


class ProgramWorkout(BaseModel):
    """
    An immutable workout template within a generated program.

    `day_of_week` follows the program convention 1=Monday ... 7=Sunday.
    """

    id: str
    day_of_week: int = Field(ge=1, le=7, description="1=Monday, 7=Sunday")
    name: str = Field(min_length=1)
    movement_patterns: List[str] = Field(default_factory=list)
    exercises: List[ProgramExercise] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_supersets(self) -> "ProgramWorkout":
        """Each superset group has exactly two members ordered 1 and 2."""
        groups: Dict[str, List[int]] = {}
        for exercise in self.exercises:
            if exercise.superset_group is not None:
                groups.setdefault(exercise.superset_group, []).append(
                    exercise.superset_order
                )
        for group, orders in groups.items():
            if sorted(orders) != [1, 2]:
                raise ValueError(
                    f"Superset '{group}' must have exactly two members "
                    f"with superset_order 1 and 2, got {sorted(orders)}"
                )
        return self

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)

    model_config = {"frozen": True}
