"""
ActivateProgram Use Case.

Part of AMA-613: Persist scheduled sessions

Turns a program's ordered workouts into dated sessions and makes the
program the user's active one:
1. Resolve the weekday pattern (request, else profile)
2. Validate and materialize drafts (nothing is written on failure)
3. Persist the drafts in one batch, skipping days the program already holds
4. Anchor the cycle on the new program (closing any open cycle); activating
   the already-active program again keeps its cycle
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from application.exceptions import ConfigurationError, SessionNotFoundError
from application.ports import SessionRepository, UserProfileRepository
from backend.core.calendar_mapper import CalendarMapper, iso_weekday
from backend.core.cycle_tracker import CycleTracker
from domain.converters import db_row_to_profile, db_row_to_session, session_to_db_row
from domain.models import ProgramWorkout, WorkoutSession
from shared.local_dates import Clock

logger = logging.getLogger(__name__)


@dataclass
class ActivateProgramResult:
    """Result of the ActivateProgram use case execution."""

    success: bool
    program_id: Optional[str] = None
    sessions: List[WorkoutSession] = field(default_factory=list)
    anchor_date: Optional[date] = None
    cycle_number: Optional[int] = None
    total_workouts_completed: Optional[int] = None
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)


class ActivateProgramUseCase:
    """
    Use case for scheduling and activating a program.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = ActivateProgramUseCase(
        ...     session_repo=session_repo,
        ...     profile_repo=profile_repo,
        ...     calendar_mapper=mapper,
        ...     cycle_tracker=tracker,
        ...     clock=clock,
        ... )
        >>> result = use_case.execute("user-1", "program-1", workouts, selected_days=[1, 3, 5])
        >>> if result.success:
        ...     print(f"Scheduled {len(result.sessions)} days")
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        profile_repo: UserProfileRepository,
        calendar_mapper: CalendarMapper,
        cycle_tracker: CycleTracker,
        clock: Clock,
    ) -> None:
        self._session_repo = session_repo
        self._profile_repo = profile_repo
        self._calendar_mapper = calendar_mapper
        self._cycle_tracker = cycle_tracker
        self._clock = clock

    def execute(
        self,
        user_id: str,
        program_id: str,
        workouts: Sequence[ProgramWorkout],
        *,
        days_per_week: Optional[int] = None,
        selected_days: Optional[Sequence[int]] = None,
        explicit_dates: Optional[Sequence[date]] = None,
        start_date: Optional[date] = None,
        weeks: int = 1,
    ) -> ActivateProgramResult:
        """
        Schedule `workouts` and activate the program.

        Args:
            user_id: User ID
            program_id: Program UUID
            workouts: Ordered program workouts
            days_per_week: Workout days per week (defaults to profile)
            selected_days: Weekdays 1-7 (defaults to profile)
            explicit_dates: Specific days in the first week instead of weekdays
            start_date: First scheduled day (defaults to local today)
            weeks: Number of 7-day windows to materialize

        Returns:
            ActivateProgramResult
        """
        row = self._profile_repo.get(user_id)
        if row is None:
            return ActivateProgramResult(
                success=False, error=f"Profile for user {user_id} not found"
            )
        profile = db_row_to_profile(row)

        if explicit_dates:
            days = days_per_week or len(explicit_dates)
            weekdays = None
        else:
            days = days_per_week if days_per_week is not None else profile.days_per_week
            weekdays = list(selected_days) if selected_days is not None else profile.selected_days

        anchor = start_date or (min(explicit_dates) if explicit_dates else self._clock.today())

        try:
            drafts = self._calendar_mapper.materialize(
                program_id,
                workouts,
                days,
                weekdays,
                explicit_dates=explicit_dates,
                start_date=anchor,
                weeks=weeks,
            )
        except ConfigurationError as e:
            logger.info("Activation of program %s rejected: %s", program_id, e.errors)
            return ActivateProgramResult(
                success=False,
                program_id=program_id,
                error=e.message,
                validation_errors=e.errors,
            )

        existing = [db_row_to_session(r) for r in self._session_repo.list_by_program(program_id)]
        taken = {s.scheduled_date for s in existing}
        fresh = [d for d in drafts if d.scheduled_date not in taken]
        created = (
            self._session_repo.create_many(
                [{**session_to_db_row(d), "user_id": user_id} for d in fresh]
            )
            if fresh
            else []
        )

        if weekdays is None:
            weekdays = sorted({iso_weekday(d) for d in explicit_dates})
        self._profile_repo.update(user_id, {"days_per_week": days, "selected_days": weekdays})

        if profile.active_program_id == program_id and profile.cycle_anchor_date is not None:
            # Already active: keep the open cycle and its counters
            anchor = profile.cycle_anchor_date
            cycle_number = profile.cycle_number
            total_completed = profile.total_workouts_completed
        else:
            try:
                advance = self._cycle_tracker.start_new_program(user_id, program_id, anchor)
            except SessionNotFoundError as e:
                return ActivateProgramResult(success=False, program_id=program_id, error=str(e))
            cycle_number = advance.cycle_number
            total_completed = advance.total_workouts_completed

        window = {d.scheduled_date for d in drafts}
        sessions = [db_row_to_session(r) for r in created] + [
            s for s in existing if s.scheduled_date in window
        ]
        logger.info(
            "Activated program %s for user %s: %d sessions created from %s (%d already scheduled)",
            program_id,
            user_id,
            len(created),
            anchor.isoformat(),
            len(drafts) - len(fresh),
        )
        return ActivateProgramResult(
            success=True,
            program_id=program_id,
            sessions=sorted(sessions, key=lambda s: s.scheduled_date),
            anchor_date=anchor,
            cycle_number=cycle_number,
            total_workouts_completed=total_completed,
        )
