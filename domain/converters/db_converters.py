"""
Converters: Database row format <-> domain models.

Part of AMA-613: Persist scheduled sessions

Repositories exchange plain dictionaries; these functions are the single
place where rows become domain objects and back.

Database schema (workout_sessions table):
- id: UUID
- program_id: UUID
- program_workout_id: UUID, null for rest days and cardio
- session_type: "workout" | "rest"
- scheduled_date: DATE (local calendar day, YYYY-MM-DD)
- session_date: TIMESTAMPTZ, completion time
- status: null | in_progress | complete | skipped | archived
- completed: INT (0/1)
- workout_name, movement_patterns, duration_minutes, calories, notes
"""

from datetime import date, datetime
from typing import Any, Dict, Optional

from domain.models import (
    ProgramExercise,
    SessionStatus,
    SessionType,
    UnitPreference,
    UserProfile,
    WorkoutSession,
)
from shared.local_dates import format_local_date, parse_local_date


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def _parse_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Timestamps are cut to their calendar day, never shifted to UTC
    return parse_local_date(str(value)[:10])


# =============================================================================
# Sessions
# =============================================================================


def db_row_to_session(row: Dict[str, Any]) -> WorkoutSession:
    """Convert a workout_sessions row into a WorkoutSession."""
    status = row.get("status")
    return WorkoutSession(
        id=row.get("id"),
        user_id=row.get("user_id"),
        program_id=row.get("program_id"),
        program_workout_id=row.get("program_workout_id"),
        session_type=SessionType(row.get("session_type") or SessionType.WORKOUT.value),
        scheduled_date=_parse_date(row["scheduled_date"]),
        session_date=_parse_datetime(row.get("session_date")),
        status=SessionStatus(status) if status else None,
        completed=bool(row.get("completed")),
        workout_name=row.get("workout_name"),
        movement_patterns=list(row.get("movement_patterns") or []),
        duration_minutes=row.get("duration_minutes"),
        calories=row.get("calories"),
        notes=row.get("notes"),
    )


def session_to_db_row(session: WorkoutSession) -> Dict[str, Any]:
    """Convert a WorkoutSession into a workout_sessions row (without id if new)."""
    row: Dict[str, Any] = {
        "user_id": session.user_id,
        "program_id": session.program_id,
        "program_workout_id": session.program_workout_id,
        "session_type": session.session_type.value,
        "scheduled_date": format_local_date(session.scheduled_date),
        "session_date": session.session_date.isoformat() if session.session_date else None,
        "status": session.status.value if session.status else None,
        "completed": 1 if session.completed else 0,
        "workout_name": session.workout_name,
        "movement_patterns": list(session.movement_patterns),
        "duration_minutes": session.duration_minutes,
        "calories": session.calories,
        "notes": session.notes,
    }
    if session.id:
        row["id"] = session.id
    return row


# =============================================================================
# Exercise slots
# =============================================================================


def db_row_to_exercise(row: Dict[str, Any]) -> ProgramExercise:
    """Convert a program_exercises row into a ProgramExercise."""
    return ProgramExercise.model_validate(
        {**row, "equipment": list(row.get("equipment") or [])}
    )


def exercise_targets_to_db_row(exercise: ProgramExercise) -> Dict[str, Any]:
    """Only the fields the progression engine is allowed to change."""
    return {
        "recommended_weight": exercise.recommended_weight,
        "reps_min": exercise.reps_min,
        "reps_max": exercise.reps_max,
        "version": exercise.version,
    }


# =============================================================================
# Profiles
# =============================================================================


def db_row_to_profile(row: Dict[str, Any]) -> UserProfile:
    """Convert a profiles row into a UserProfile."""
    return UserProfile(
        user_id=row["user_id"],
        weight=row.get("weight"),
        unit_preference=UnitPreference(row.get("unit_preference") or "imperial"),
        equipment=list(row.get("equipment") or []),
        days_per_week=row.get("days_per_week") or 3,
        selected_days=list(row.get("selected_days") or []),
        cycle_number=row.get("cycle_number") or 1,
        total_workouts_completed=row.get("total_workouts_completed") or 0,
        active_program_id=row.get("active_program_id"),
        cycle_anchor_date=_parse_date(row.get("cycle_anchor_date")),
        last_prompted_cycle=row.get("last_prompted_cycle"),
    )


def profile_cycle_fields_to_db_row(profile: UserProfile) -> Dict[str, Any]:
    """Fields owned by the cycle tracker."""
    return {
        "cycle_number": profile.cycle_number,
        "total_workouts_completed": profile.total_workouts_completed,
        "active_program_id": profile.active_program_id,
        "cycle_anchor_date": (
            format_local_date(profile.cycle_anchor_date)
            if profile.cycle_anchor_date
            else None
        ),
        "last_prompted_cycle": profile.last_prompted_cycle,
    }
