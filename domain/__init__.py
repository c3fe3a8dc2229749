"""
Domain layer for the adaptive scheduling engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

Part of AMA-612: Adaptive scheduling domain model
"""

from domain.models import (
    ExerciseKind,
    Load,
    ProgramExercise,
    ProgramWorkout,
    SessionStatus,
    SessionType,
    UserProfile,
    WorkoutSession,
)

__all__ = [
    "ExerciseKind",
    "Load",
    "ProgramExercise",
    "ProgramWorkout",
    "SessionStatus",
    "SessionType",
    "UserProfile",
    "WorkoutSession",
]
