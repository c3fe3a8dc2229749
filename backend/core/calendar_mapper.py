"""
Calendar Mapper for Program Scheduling.

Part of AMA-618: Materialize program calendar

Turns an ordered list of ProgramWorkouts into dated WorkoutSession drafts:
- One session per calendar day of each 7-day window
- Workout sessions on the selected weekdays (or explicit dates)
- Rest sessions on every other day
- Workouts repeat cyclically when there are fewer than days_per_week
"""

import logging
from datetime import date, timedelta
from typing import List, Optional, Sequence

from application.exceptions import ConfigurationError
from domain.models import ProgramWorkout, SessionType, WorkoutSession
from shared.local_dates import CYCLE_LENGTH_DAYS, Clock, cycle_dates

logger = logging.getLogger(__name__)


def iso_weekday(day: date) -> int:
    """Weekday in the program convention: 1=Monday ... 7=Sunday."""
    return day.isoweekday()


class CalendarMapper:
    """
    Maps program workouts onto calendar days.

    The mapper is pure: it builds drafts and never persists them, so a
    ConfigurationError can never leave a partial calendar behind.
    """

    def __init__(self, clock: Clock):
        """
        Initialize the mapper.

        Args:
            clock: Source of the user's local "today" (default start date)
        """
        self._clock = clock

    def validate(
        self,
        workouts: Sequence[ProgramWorkout],
        days_per_week: int,
        selected_days: Optional[Sequence[int]] = None,
        explicit_dates: Optional[Sequence[date]] = None,
    ) -> None:
        """
        Validate scheduling input.

        Raises:
            ConfigurationError: With every problem found
        """
        errors: List[str] = []

        if days_per_week <= 0:
            errors.append("days_per_week must be at least 1")
        elif days_per_week > CYCLE_LENGTH_DAYS:
            errors.append(f"days_per_week cannot exceed {CYCLE_LENGTH_DAYS}")

        if not workouts:
            errors.append("Program has no workouts to schedule")

        if explicit_dates:
            chosen = list(explicit_dates)
            label = "explicit dates"
        else:
            chosen = list(selected_days or [])
            label = "selected days"
            invalid = [d for d in chosen if d < 1 or d > 7]
            if invalid:
                errors.append(f"Invalid weekdays {invalid}; expected 1 (Mon) to 7 (Sun)")

        if len(set(chosen)) != len(chosen):
            errors.append(f"Duplicate {label}: {chosen}")

        if days_per_week > 0 and len(chosen) != days_per_week:
            errors.append(
                f"{len(chosen)} {label} provided but days_per_week is {days_per_week}"
            )

        if errors:
            raise ConfigurationError("Invalid schedule configuration", errors=errors)

    def materialize(
        self,
        program_id: Optional[str],
        workouts: Sequence[ProgramWorkout],
        days_per_week: int,
        selected_days: Optional[Sequence[int]] = None,
        *,
        explicit_dates: Optional[Sequence[date]] = None,
        start_date: Optional[date] = None,
        weeks: int = 1,
        workout_offset: int = 0,
    ) -> List[WorkoutSession]:
        """
        Build session drafts for `weeks` consecutive 7-day windows.

        Args:
            program_id: Program the sessions belong to
            workouts: Program workouts in the order they should be performed
            days_per_week: Number of workout days per window
            selected_days: Weekdays (1=Mon ... 7=Sun) to train on
            explicit_dates: Specific days in the first window, instead of weekdays
            start_date: First day of the first window (defaults to local today)
            weeks: Number of windows to build
            workout_offset: Index of the workout to start the rotation from

        Returns:
            Ordered list of pending WorkoutSession drafts

        Raises:
            ConfigurationError: If the input is invalid
        """
        self.validate(workouts, days_per_week, selected_days, explicit_dates)
        if weeks < 1:
            raise ConfigurationError("weeks must be at least 1")

        if start_date is None:
            start_date = min(explicit_dates) if explicit_dates else self._clock.today()

        first_window = cycle_dates(start_date)
        if explicit_dates:
            outside = [d for d in explicit_dates if d not in first_window]
            if outside:
                raise ConfigurationError(
                    "Explicit dates must fall within the first 7-day window",
                    errors=[f"{d.isoformat()} is outside the window" for d in outside],
                )
            # Explicit days repeat at the same offset in later windows
            workout_offsets = {(d - start_date).days for d in explicit_dates}
        else:
            weekdays = set(selected_days or [])

        sessions: List[WorkoutSession] = []
        workout_index = workout_offset
        for offset in range(CYCLE_LENGTH_DAYS * weeks):
            day = start_date + timedelta(days=offset)
            if explicit_dates:
                is_workout_day = offset % CYCLE_LENGTH_DAYS in workout_offsets
            else:
                is_workout_day = iso_weekday(day) in weekdays

            if is_workout_day:
                workout = workouts[workout_index % len(workouts)]
                workout_index += 1
                sessions.append(
                    WorkoutSession(
                        program_id=program_id,
                        program_workout_id=workout.id,
                        session_type=SessionType.WORKOUT,
                        scheduled_date=day,
                        workout_name=workout.name,
                        movement_patterns=list(workout.movement_patterns),
                    )
                )
            else:
                sessions.append(
                    WorkoutSession(
                        program_id=program_id,
                        session_type=SessionType.REST,
                        scheduled_date=day,
                        workout_name="Rest Day",
                    )
                )

        logger.info(
            "Materialized %d sessions (%d workouts) for program %s from %s",
            len(sessions),
            workout_index - workout_offset,
            program_id,
            start_date.isoformat(),
        )
        return sessions
