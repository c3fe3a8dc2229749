"""
Application-layer exceptions.

Part of AMA-615: Schedule engine error taxonomy

These exceptions are used across the core services, use cases,
infrastructure and API layers.
"""

from datetime import date
from typing import List, Optional


class ScheduleEngineError(Exception):
    """Base class for scheduling and session errors."""

    pass


class ConfigurationError(ScheduleEngineError):
    """Invalid scheduling input.

    Raised before anything is written, so a failed scheduling call
    never leaves a partially materialized calendar.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or [message]


class SessionInitializationError(ScheduleEngineError):
    """The backing session record could not be created.

    The sequencer stays blocked until a retry succeeds.
    """

    def __init__(self, message: str, program_workout_id: Optional[str] = None):
        super().__init__(message)
        self.program_workout_id = program_workout_id


class ProgressionWriteError(ScheduleEngineError):
    """A progression update could not be persisted.

    Best-effort: logged, never blocks the user.
    """

    def __init__(self, exercise_slot_id: str, cause: Optional[Exception] = None):
        super().__init__(f"Failed to persist progression for slot {exercise_slot_id}: {cause}")
        self.exercise_slot_id = exercise_slot_id
        self.cause = cause


class ReconciliationConflict(ScheduleEngineError):
    """A session reached a terminal status while reconciliation was running."""

    def __init__(self, session_id: str, status: Optional[str] = None):
        super().__init__(f"Session {session_id} changed to '{status}' during reconciliation")
        self.session_id = session_id
        self.status = status


class SessionNotFoundError(ScheduleEngineError):
    """Referenced session, profile or exercise slot does not exist."""

    pass


class InvalidSetError(ScheduleEngineError):
    """A logged set is missing fields required by the exercise kind."""

    pass


class InvalidTransitionError(ScheduleEngineError):
    """Operation not allowed in the sequencer's (or session's) current state."""

    def __init__(self, message: str, state: Optional[str] = None):
        super().__init__(message)
        self.state = state


class RescheduleError(ScheduleEngineError):
    """A manual reschedule target is not allowed."""

    def __init__(self, message: str, target_date: Optional[date] = None):
        super().__init__(message)
        self.target_date = target_date
