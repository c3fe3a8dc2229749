"""
WorkoutSession entity: one concrete, dated occurrence of a workout or rest day.

Part of AMA-612: Adaptive scheduling domain model
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class SessionType(str, Enum):
    """Kind of calendar day."""

    WORKOUT = "workout"
    REST = "rest"


class SessionStatus(str, Enum):
    """
    Lifecycle of a session.

    A freshly materialized session has no status (pending).
    """

    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    SKIPPED = "skipped"
    ARCHIVED = "archived"


# Statuses that end a session's lifecycle before archival
TERMINAL_STATUSES = {SessionStatus.COMPLETE, SessionStatus.SKIPPED}


class WorkoutSession(BaseModel):
    """
    A scheduled calendar day within a program.

    Invariant: `completed=True` implies `status == complete` and a
    non-null `session_date`. Archival keeps the flag, since an archived
    session is a complete (or skipped) one whose day has passed.
    """

    id: Optional[str] = None
    user_id: Optional[str] = None
    program_id: Optional[str] = None
    program_workout_id: Optional[str] = Field(
        default=None, description="Null for rest days and ad-hoc cardio"
    )
    session_type: SessionType = SessionType.WORKOUT
    scheduled_date: date
    session_date: Optional[datetime] = Field(
        default=None, description="When the session was actually completed"
    )
    status: Optional[SessionStatus] = None
    completed: bool = False
    workout_name: Optional[str] = None
    movement_patterns: List[str] = Field(default_factory=list)
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    calories: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_completion(self) -> "WorkoutSession":
        """A completed session must be marked complete and dated."""
        if self.completed:
            if self.status not in (SessionStatus.COMPLETE, SessionStatus.ARCHIVED):
                raise ValueError("completed session must have status 'complete'")
            if self.session_date is None:
                raise ValueError("completed session must have a session_date")
        return self

    @property
    def is_rest(self) -> bool:
        return self.session_type == SessionType.REST

    @property
    def is_archived(self) -> bool:
        return self.status == SessionStatus.ARCHIVED

    @property
    def is_terminal(self) -> bool:
        """Complete or skipped (archival is tracked separately)."""
        return self.status in TERMINAL_STATUSES

    @property
    def is_pending(self) -> bool:
        """Not yet resolved: no status, or started but not finished."""
        return self.status is None or self.status == SessionStatus.IN_PROGRESS
