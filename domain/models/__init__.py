"""
Domain models for the adaptive scheduling engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- ProgramWorkout / ProgramExercise: the immutable program template and its slots
- WorkoutSession: a dated workout or rest day
- UserProfile: schedule preferences and cycle counters
- SetLogEntry / ProgressionEvent: in-session logs and durable target changes
- Load: weight value object with pound/kilogram conversion

Part of AMA-612: Adaptive scheduling domain model

Usage:
    >>> from domain.models import ProgramWorkout, ProgramExercise

    >>> workout = ProgramWorkout(
    ...     id="w-1",
    ...     day_of_week=1,
    ...     name="Upper Push",
    ...     exercises=[
    ...         ProgramExercise(
    ...             id="slot-1",
    ...             exercise_id="barbell-bench-press",
    ...             exercise_name="Bench Press",
    ...             reps_min=8,
    ...             reps_max=10,
    ...         )
    ...     ],
    ... )
"""

from domain.models.load import (
    CANONICAL_UNIT,
    KG_TO_LB,
    LB_TO_KG,
    Load,
    UnitPreference,
    from_canonical,
    pounds_to_kg,
    to_canonical,
)
from domain.models.profile import UserProfile
from domain.models.program import ExerciseKind, ProgramExercise, ProgramWorkout
from domain.models.progression import ProgressionEvent, SetLogEntry
from domain.models.session import (
    TERMINAL_STATUSES,
    SessionStatus,
    SessionType,
    WorkoutSession,
)

__all__ = [
    # Main entities
    "ProgramWorkout",
    "ProgramExercise",
    "WorkoutSession",
    "UserProfile",
    "SetLogEntry",
    "ProgressionEvent",
    "Load",
    # Enums
    "ExerciseKind",
    "SessionStatus",
    "SessionType",
    "UnitPreference",
    # Units
    "CANONICAL_UNIT",
    "LB_TO_KG",
    "KG_TO_LB",
    "to_canonical",
    "from_canonical",
    "pounds_to_kg",
    "TERMINAL_STATUSES",
]
