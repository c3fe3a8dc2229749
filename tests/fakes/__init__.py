"""
Fake Repository Implementations for Testing.

Part of AMA-613: Persist scheduled sessions

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Failure toggles for best-effort and blocked-start paths
- Builders for program templates and session rows

Usage:
    from tests.fakes import FakeSessionRepository, build_workout, session_row

    repo = FakeSessionRepository()
    repo.seed([session_row("p1", date(2025, 3, 3))])
"""
from datetime import date
from typing import Any, Dict, List, Optional

from domain.models import ProgramExercise, ProgramWorkout
from shared.local_dates import format_local_date

from tests.fakes.session_repository import FakeSessionRepository
from tests.fakes.program_exercise_repository import FakeProgramExerciseRepository
from tests.fakes.profile_repository import FakeUserProfileRepository
from tests.fakes.program_generator import FakeProgramGenerator


# =============================================================================
# Builders
# =============================================================================


def build_exercise(slot_id: str, **overrides: Any) -> ProgramExercise:
    """
    Build a weighted 3x8-10 barbell slot at 100 lb, with overrides.

    Pass equipment=["bodyweight"] for a bodyweight slot, duration_seconds
    (and reps_min=None) for a hold, work_seconds for an interval block.
    """
    fields: Dict[str, Any] = {
        "id": slot_id,
        "exercise_id": f"{slot_id}-exercise",
        "exercise_name": slot_id.replace("-", " ").title(),
        "target_sets": 3,
        "reps_min": 8,
        "reps_max": 10,
        "recommended_weight": 100.0,
        "equipment": ["barbell"],
    }
    fields.update(overrides)
    return ProgramExercise(**fields)


def build_workout(
    workout_id: str = "workout-a",
    *,
    day_of_week: int = 1,
    name: Optional[str] = None,
    exercises: Optional[List[ProgramExercise]] = None,
) -> ProgramWorkout:
    return ProgramWorkout(
        id=workout_id,
        day_of_week=day_of_week,
        name=name or workout_id.replace("-", " ").title(),
        movement_patterns=["push"],
        exercises=exercises if exercises is not None else [build_exercise(f"{workout_id}-1")],
    )


def session_row(
    program_id: str,
    scheduled: date,
    *,
    session_type: str = "workout",
    status: Optional[str] = None,
    completed: bool = False,
    session_id: Optional[str] = None,
    user_id: Optional[str] = "user-1",
    **extra: Any,
) -> Dict[str, Any]:
    """Build a workout_sessions row owned by user-1; completed rows get a session_date."""
    row: Dict[str, Any] = {
        "user_id": user_id,
        "program_id": program_id,
        "program_workout_id": "workout-a" if session_type == "workout" else None,
        "session_type": session_type,
        "scheduled_date": format_local_date(scheduled),
        "status": status,
        "completed": 1 if completed else 0,
        "session_date": f"{format_local_date(scheduled)}T18:00:00+00:00" if completed else None,
        "workout_name": "Workout" if session_type == "workout" else "Rest Day",
    }
    if session_id:
        row["id"] = session_id
    row.update(extra)
    return row


def profile_row(user_id: str = "user-1", **overrides: Any) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "user_id": user_id,
        "weight": 180.0,
        "unit_preference": "imperial",
        "equipment": ["barbell", "dumbbell"],
        "days_per_week": 3,
        "selected_days": [1, 3, 5],
        "cycle_number": 1,
        "total_workouts_completed": 0,
        "active_program_id": None,
        "cycle_anchor_date": None,
        "last_prompted_cycle": None,
    }
    row.update(overrides)
    return row


__all__ = [
    # Fakes
    "FakeSessionRepository",
    "FakeProgramExerciseRepository",
    "FakeUserProfileRepository",
    "FakeProgramGenerator",
    # Builders
    "build_exercise",
    "build_workout",
    "session_row",
    "profile_row",
]
