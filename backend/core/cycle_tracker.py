"""
Cycle Tracker for seven-day training cycles.

Part of AMA-616: Seven-day cycle tracking

A cycle is the 7 consecutive calendar days starting at the profile's anchor
date. Once every session in that window is resolved the user is prompted
(once) to repeat the same weekdays or generate a new program.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Sequence

from application.exceptions import (
    ConfigurationError,
    InvalidTransitionError,
    SessionNotFoundError,
)
from application.ports import SessionRepository, UserProfileRepository
from backend.core.calendar_mapper import CalendarMapper
from domain.converters import (
    db_row_to_profile,
    db_row_to_session,
    profile_cycle_fields_to_db_row,
    session_to_db_row,
)
from domain.models import (
    ProgramWorkout,
    SessionStatus,
    SessionType,
    UserProfile,
    WorkoutSession,
)
from shared.local_dates import (
    CYCLE_LENGTH_DAYS,
    Clock,
    cycle_dates,
    format_local_date,
    resolve_today,
)

logger = logging.getLogger(__name__)

RESOLVED_STATUSES = {SessionStatus.COMPLETE, SessionStatus.SKIPPED, SessionStatus.ARCHIVED}


@dataclass
class CycleStatus:
    """Cycle completion state returned after each session completion."""
    should_prompt: bool
    cycle_number: int
    total_workouts_completed: int
    current_cycle_dates: List[date] = field(default_factory=list)
    cycle_complete: bool = False


@dataclass
class CycleAdvance:
    """Result of closing a cycle and starting the next one."""
    cycle_number: int
    total_workouts_completed: int
    anchor_date: date
    sessions: List[WorkoutSession] = field(default_factory=list)
    closed_cycle_workouts: int = 0


def is_resolved(session: WorkoutSession, today: date) -> bool:
    """Complete, skipped, archived, or a rest day that has arrived."""
    if session.status in RESOLVED_STATUSES:
        return True
    return session.session_type == SessionType.REST and session.scheduled_date <= today


def count_completed_workouts(sessions: Sequence[WorkoutSession]) -> int:
    """Completed non-rest sessions."""
    return sum(
        1 for s in sessions if s.session_type == SessionType.WORKOUT and s.completed
    )


def next_workout_offset(
    sessions: Sequence[WorkoutSession],
    workouts: Sequence[ProgramWorkout],
) -> int:
    """
    Rotation index following the last scheduled workout in `sessions`.

    Falls back to 0 when the window holds no workout from `workouts`.
    """
    order = {w.id: i for i, w in enumerate(workouts)}
    scheduled = [
        s for s in sorted(sessions, key=lambda s: s.scheduled_date)
        if s.session_type == SessionType.WORKOUT and s.program_workout_id in order
    ]
    if not scheduled or not workouts:
        return 0
    return (order[scheduled[-1].program_workout_id] + 1) % len(workouts)


class CycleTracker:
    """
    Tracks seven-day cycles and the cycle counters on the user profile.

    `cycle_number` only ever increases, except through reset_account().
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        profile_repo: UserProfileRepository,
        calendar_mapper: CalendarMapper,
        clock: Clock,
    ):
        self._session_repo = session_repo
        self._profile_repo = profile_repo
        self._calendar_mapper = calendar_mapper
        self._clock = clock

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def evaluate(self, user_id: str, current_date: Optional[date] = None) -> CycleStatus:
        """
        Check whether the current cycle is fully resolved.

        `should_prompt` is true the first time a resolved cycle is seen; the
        profile records the prompted cycle so later polls return false until
        the user repeats or regenerates.

        Args:
            user_id: User ID
            current_date: The caller's local calendar day (defaults to clock)
        """
        today = resolve_today(self._clock, current_date)
        profile = self._get_profile(user_id)

        if not profile.active_program_id or profile.cycle_anchor_date is None:
            return CycleStatus(
                should_prompt=False,
                cycle_number=profile.cycle_number,
                total_workouts_completed=profile.total_workouts_completed,
            )

        window = cycle_dates(profile.cycle_anchor_date)
        sessions = self._window_sessions(profile.active_program_id, profile.cycle_anchor_date)
        complete = bool(sessions) and all(is_resolved(s, today) for s in sessions)

        should_prompt = complete and profile.last_prompted_cycle != profile.cycle_number
        if should_prompt:
            profile.last_prompted_cycle = profile.cycle_number
            self._save_profile(profile)
            logger.info("Cycle %d complete for user %s", profile.cycle_number, user_id)

        return CycleStatus(
            should_prompt=should_prompt,
            cycle_number=profile.cycle_number,
            total_workouts_completed=profile.total_workouts_completed,
            current_cycle_dates=window,
            cycle_complete=complete,
        )

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def repeat_same_days(
        self,
        user_id: str,
        workouts: Sequence[ProgramWorkout],
        current_date: Optional[date] = None,
    ) -> CycleAdvance:
        """
        Schedule the next cycle with the same weekday pattern.

        The new window starts 7 days after the previous cycle's anchor and
        continues the workout rotation where the closed cycle stopped. Days
        in that window that already hold a session keep it.

        Raises:
            ConfigurationError: If there is no active cycle or the weekday
                                pattern is invalid (nothing is written)
            InvalidTransitionError: If the current cycle is not resolved yet
        """
        today = resolve_today(self._clock, current_date)
        profile = self._get_profile(user_id)
        if not profile.active_program_id or profile.cycle_anchor_date is None:
            raise ConfigurationError("No active cycle to repeat")

        closed_window = self._window_sessions(profile.active_program_id, profile.cycle_anchor_date)
        new_anchor = profile.cycle_anchor_date + timedelta(days=CYCLE_LENGTH_DAYS)
        drafts = self._calendar_mapper.materialize(
            profile.active_program_id,
            workouts,
            profile.days_per_week,
            profile.selected_days,
            start_date=new_anchor,
            workout_offset=next_workout_offset(closed_window, workouts),
        )

        if not closed_window or not all(is_resolved(s, today) for s in closed_window):
            raise InvalidTransitionError(
                f"Cycle {profile.cycle_number} is not finished yet", "cycle_open"
            )

        closed_workouts = count_completed_workouts(closed_window)
        taken = {
            s.scheduled_date
            for s in self._window_sessions(profile.active_program_id, new_anchor)
            if not s.is_archived
        }
        drafts = [d for d in drafts if d.scheduled_date not in taken]
        created_rows = (
            self._session_repo.create_many(
                [{**session_to_db_row(d), "user_id": user_id} for d in drafts]
            )
            if drafts
            else []
        )

        profile.cycle_number += 1
        profile.total_workouts_completed += closed_workouts
        profile.cycle_anchor_date = new_anchor
        self._save_profile(profile)

        logger.info(
            "User %s repeated cycle: now cycle %d starting %s (%d sessions created)",
            user_id,
            profile.cycle_number,
            new_anchor.isoformat(),
            len(created_rows),
        )
        return CycleAdvance(
            cycle_number=profile.cycle_number,
            total_workouts_completed=profile.total_workouts_completed,
            anchor_date=new_anchor,
            sessions=[db_row_to_session(r) for r in created_rows],
            closed_cycle_workouts=closed_workouts,
        )

    def start_new_program(
        self,
        user_id: str,
        program_id: str,
        anchor_date: Optional[date] = None,
    ) -> CycleAdvance:
        """
        Close the current cycle once a newly generated program is active.

        Program generation itself happens elsewhere; this only moves the
        counters and re-anchors the cycle on the new program.
        """
        anchor = anchor_date or self._clock.today()
        profile = self._get_profile(user_id)

        closed_workouts = 0
        if profile.active_program_id and profile.cycle_anchor_date is not None:
            closed_workouts = count_completed_workouts(
                self._window_sessions(profile.active_program_id, profile.cycle_anchor_date)
            )
            profile.cycle_number += 1
            profile.total_workouts_completed += closed_workouts

        profile.active_program_id = program_id
        profile.cycle_anchor_date = anchor
        profile.last_prompted_cycle = None
        self._save_profile(profile)

        logger.info(
            "User %s started program %s at cycle %d",
            user_id,
            program_id,
            profile.cycle_number,
        )
        return CycleAdvance(
            cycle_number=profile.cycle_number,
            total_workouts_completed=profile.total_workouts_completed,
            anchor_date=anchor,
            closed_cycle_workouts=closed_workouts,
        )

    def reset_account(self, user_id: str) -> UserProfile:
        """Explicit account reset: the only way cycle counters go back."""
        profile = self._get_profile(user_id)
        profile.cycle_number = 1
        profile.total_workouts_completed = 0
        profile.last_prompted_cycle = None
        self._save_profile(profile)
        logger.info("Cycle counters reset for user %s", user_id)
        return profile

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_profile(self, user_id: str) -> UserProfile:
        row = self._profile_repo.get(user_id)
        if row is None:
            raise SessionNotFoundError(f"Profile for user {user_id} not found")
        return db_row_to_profile(row)

    def _save_profile(self, profile: UserProfile) -> None:
        self._profile_repo.update(profile.user_id, profile_cycle_fields_to_db_row(profile))

    def _window_sessions(self, program_id: str, anchor: date) -> List[WorkoutSession]:
        window = cycle_dates(anchor)
        rows = self._session_repo.list_in_range(
            program_id, format_local_date(window[0]), format_local_date(window[-1])
        )
        return [db_row_to_session(r) for r in rows]
