"""
Missed Workout Reconciler.

Part of AMA-619: Missed workout reconciliation

Runs on every app load and resolves workout sessions whose day has passed
without being completed:
- Auto-reschedule ("life happens", default): shift the remaining schedule
  forward so the oldest missed workout lands on today
- Skip-missed (explicit user action): mark missed sessions skipped and keep
  the calendar as is
- Archival: past sessions with a terminal status are archived; past rest
  days are recorded as rest-completed first

Every pass is re-derived from the current session state and never applied
as a stored delta, so running it again without new misses changes nothing.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Sequence, Set, Tuple

from application.exceptions import (
    ReconciliationConflict,
    RescheduleError,
    SessionNotFoundError,
)
from application.ports import SessionRepository
from backend.core.session_guard import ActiveSessionRegistry
from domain.converters import db_row_to_session
from domain.models import SessionStatus, SessionType, WorkoutSession
from shared.local_dates import Clock, format_local_date, resolve_today

logger = logging.getLogger(__name__)


# =============================================================================
# Results
# =============================================================================


@dataclass
class MissedWorkouts:
    """Missed workout sessions relative to a local calendar day."""
    count: int
    sessions: List[WorkoutSession] = field(default_factory=list)
    date_range: str = ""
    earliest: Optional[date] = None


@dataclass
class SessionMove:
    """One re-dated session."""
    session_id: str
    from_date: date
    to_date: date


@dataclass
class ReconciliationResult:
    """Outcome of a reconciliation or archival pass."""
    policy: str
    changed: int = 0
    moves: List[SessionMove] = field(default_factory=list)
    conflicts: List[str] = field(default_factory=list)
    gap_days: int = 0
    deferred: bool = False


@dataclass
class LoadResult:
    """Outcome of the on-load pass (reschedule, then archive)."""
    reschedule: ReconciliationResult
    archive: ReconciliationResult


def format_date_range(dates: Sequence[date]) -> str:
    """Human-readable range for the missed-workout banner ("Mar 02 - Mar 04")."""
    if not dates:
        return ""
    first, last = min(dates), max(dates)
    if first == last:
        return first.strftime("%b %d")
    return f"{first.strftime('%b %d')} - {last.strftime('%b %d')}"


# =============================================================================
# Pure planning
# =============================================================================


def find_missed(sessions: Sequence[WorkoutSession], current_date: date) -> MissedWorkouts:
    """
    Workout sessions scheduled before `current_date` that are still pending.

    Rest days are never missed.
    """
    missed = sorted(
        (
            s for s in sessions
            if s.session_type == SessionType.WORKOUT
            and s.is_pending
            and s.scheduled_date < current_date
        ),
        key=lambda s: s.scheduled_date,
    )
    dates = [s.scheduled_date for s in missed]
    return MissedWorkouts(
        count=len(missed),
        sessions=missed,
        date_range=format_date_range(dates),
        earliest=dates[0] if dates else None,
    )


def plan_reschedule(
    sessions: Sequence[WorkoutSession],
    current_date: date,
) -> Tuple[List[Tuple[WorkoutSession, date]], int]:
    """
    Plan the forward shift of the schedule tail.

    Every pending, non-archived session from the earliest missed workout
    onwards moves forward by the gap between that workout and today, keeping
    order and spacing. A target day already held by a complete or skipped
    session is passed over and the extra day carries to the rest of the tail.

    Returns:
        (list of (session, new_date) for sessions that move, gap in days)
    """
    active = [s for s in sessions if not s.is_archived]
    missed = find_missed(active, current_date)
    if missed.earliest is None:
        return [], 0

    gap = (current_date - missed.earliest).days
    tail = sorted(
        (s for s in active if s.is_pending and s.scheduled_date >= missed.earliest),
        key=lambda s: s.scheduled_date,
    )
    held: Set[date] = {
        s.scheduled_date for s in active
        if s.is_terminal and s.scheduled_date >= current_date
    }

    plan: List[Tuple[WorkoutSession, date]] = []
    extra = 0
    for session in tail:
        target = session.scheduled_date + timedelta(days=gap + extra)
        while target in held:
            target += timedelta(days=1)
            extra += 1
        plan.append((session, target))
    return plan, gap


# =============================================================================
# Reconciler
# =============================================================================


class MissedWorkoutReconciler:
    """
    Detects and resolves missed workouts for a program.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> reconciler = MissedWorkoutReconciler(session_repo, clock)
        >>> missed = reconciler.missed_count("program-1")
        >>> if missed.count:
        ...     reconciler.auto_reschedule("program-1")
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        clock: Clock,
        registry: Optional[ActiveSessionRegistry] = None,
    ):
        """
        Initialize the reconciler.

        Args:
            session_repo: Repository for scheduled sessions
            clock: Source of the user's local "today"
            registry: Sessions held by live sequencers; passes defer while
                      any session of the program is held
        """
        self._session_repo = session_repo
        self._clock = clock
        self._registry = registry

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def load_sessions(self, program_id: str) -> List[WorkoutSession]:
        rows = self._session_repo.list_by_program(program_id, include_archived=False)
        return sorted((db_row_to_session(r) for r in rows), key=lambda s: s.scheduled_date)

    def missed_count(
        self,
        program_id: str,
        current_date: Optional[date] = None,
    ) -> MissedWorkouts:
        """
        Count missed workouts for the banner / decision dialog.

        Args:
            program_id: Program UUID
            current_date: The caller's local calendar day (defaults to clock)
        """
        today = resolve_today(self._clock, current_date)
        return find_missed(self.load_sessions(program_id), today)

    # -------------------------------------------------------------------------
    # Policies
    # -------------------------------------------------------------------------

    def auto_reschedule(
        self,
        program_id: str,
        current_date: Optional[date] = None,
    ) -> ReconciliationResult:
        """
        Shift the remaining schedule so the oldest missed workout is today.

        Args:
            program_id: Program UUID
            current_date: The caller's local calendar day (defaults to clock)

        Returns:
            ReconciliationResult listing the moves
        """
        today = resolve_today(self._clock, current_date)
        sessions = self.load_sessions(program_id)
        result = ReconciliationResult(policy="auto_reschedule")

        if self._is_live(sessions):
            result.deferred = True
            logger.info("Reconciliation deferred for program %s: session in progress", program_id)
            return result

        plan, gap = plan_reschedule(sessions, today)
        if not plan:
            return result

        # Re-verify before writing; sessions finished since the scan stay put
        fresh = self._refresh(sessions)
        if any(fresh[s.id].status != s.status for s, _ in plan if s.id in fresh):
            sessions = [fresh.get(s.id, s) for s in sessions]
            plan, gap = plan_reschedule(sessions, today)

        result.gap_days = gap
        # Latest first, so each session moves onto a day its successor vacated
        for session, target in reversed(plan):
            if target == session.scheduled_date:
                continue
            if not self._still_pending(session, result):
                continue
            self._session_repo.update(
                session.id, {"scheduled_date": format_local_date(target)}
            )
            result.moves.append(SessionMove(session.id, session.scheduled_date, target))

        result.moves.reverse()
        result.changed = len(result.moves)
        logger.info(
            "Auto-rescheduled %d sessions of program %s forward by %d days",
            result.changed,
            program_id,
            gap,
        )
        return result

    def skip_missed(
        self,
        program_id: str,
        current_date: Optional[date] = None,
    ) -> ReconciliationResult:
        """
        Mark missed workouts skipped; future dates stay untouched.
        """
        today = resolve_today(self._clock, current_date)
        sessions = self.load_sessions(program_id)
        result = ReconciliationResult(policy="skip_missed")

        if self._is_live(sessions):
            result.deferred = True
            return result

        for session in find_missed(sessions, today).sessions:
            if not self._still_pending(session, result):
                continue
            self._session_repo.update(
                session.id, {"status": SessionStatus.SKIPPED.value, "completed": 0}
            )
            result.changed += 1

        logger.info("Skipped %d missed sessions of program %s", result.changed, program_id)
        return result

    def archive_past(
        self,
        program_id: str,
        current_date: Optional[date] = None,
    ) -> ReconciliationResult:
        """
        Archive past sessions with a terminal status.

        Past rest days that are still pending are recorded as rest-completed
        on their own day before being archived. Missed workouts are left for
        the reconciliation policies.
        """
        today = resolve_today(self._clock, current_date)
        sessions = self.load_sessions(program_id)
        result = ReconciliationResult(policy="archive")

        if self._is_live(sessions):
            result.deferred = True
            return result

        for session in sessions:
            if session.scheduled_date >= today:
                continue
            if session.is_terminal:
                self._session_repo.update(
                    session.id, {"status": SessionStatus.ARCHIVED.value}
                )
                result.changed += 1
            elif session.is_rest and session.is_pending:
                completed_at = datetime.combine(session.scheduled_date, time.min)
                self._session_repo.update(
                    session.id,
                    {
                        "status": SessionStatus.ARCHIVED.value,
                        "completed": 1,
                        "session_date": completed_at.isoformat(),
                    },
                )
                result.changed += 1

        if result.changed:
            logger.info("Archived %d past sessions of program %s", result.changed, program_id)
        return result

    def run_on_load(
        self,
        program_id: str,
        current_date: Optional[date] = None,
    ) -> LoadResult:
        """
        App-load pass: auto-reschedule missed workouts, then archive.

        Rescheduling runs first so past rest days inside the shifted tail
        move with it instead of being archived.
        """
        today = resolve_today(self._clock, current_date)
        reschedule = self.auto_reschedule(program_id, today)
        archive = self.archive_past(program_id, today)
        return LoadResult(reschedule=reschedule, archive=archive)

    # -------------------------------------------------------------------------
    # Manual reschedule
    # -------------------------------------------------------------------------

    def reschedule_session(
        self,
        session_id: str,
        new_date: date,
        current_date: Optional[date] = None,
    ) -> List[WorkoutSession]:
        """
        Move one upcoming workout to another day.

        A pending session already on the target day swaps into the vacated
        day, keeping one session per date.

        Returns:
            The sessions that changed, re-read after the update

        Raises:
            SessionNotFoundError: If the session does not exist
            RescheduleError: If the move is not allowed
        """
        today = resolve_today(self._clock, current_date)
        row = self._session_repo.get_by_id(session_id)
        if row is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        session = db_row_to_session(row)

        if not session.is_pending or session.is_rest:
            raise RescheduleError("Only upcoming workouts can be rescheduled", new_date)
        if session.scheduled_date < today or new_date < today:
            raise RescheduleError("Cannot reschedule into or out of the past", new_date)
        if new_date == session.scheduled_date:
            return [session]
        if self._registry is not None and self._registry.is_active(session_id):
            raise RescheduleError("Session is being logged", new_date)

        occupant = next(
            (
                s for s in self.load_sessions(session.program_id)
                if s.scheduled_date == new_date and s.id != session_id
            ),
            None,
        )
        if occupant is not None and not occupant.is_pending:
            raise RescheduleError(
                f"{format_local_date(new_date)} already has a {occupant.status.value} session",
                new_date,
            )

        changed = [session.id]
        self._session_repo.update(session.id, {"scheduled_date": format_local_date(new_date)})
        if occupant is not None:
            self._session_repo.update(
                occupant.id, {"scheduled_date": format_local_date(session.scheduled_date)}
            )
            changed.append(occupant.id)

        logger.info(
            "Rescheduled session %s from %s to %s",
            session_id,
            session.scheduled_date.isoformat(),
            new_date.isoformat(),
        )
        rows = [self._session_repo.get_by_id(sid) for sid in changed]
        return [db_row_to_session(r) for r in rows if r is not None]

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _is_live(self, sessions: Sequence[WorkoutSession]) -> bool:
        if self._registry is None:
            return False
        return self._registry.any_active(s.id for s in sessions if s.id)

    def _refresh(self, sessions: Sequence[WorkoutSession]) -> Dict[str, WorkoutSession]:
        fresh: Dict[str, WorkoutSession] = {}
        for session in sessions:
            row = self._session_repo.get_by_id(session.id)
            if row is not None:
                fresh[session.id] = db_row_to_session(row)
        return fresh

    def _still_pending(self, session: WorkoutSession, result: ReconciliationResult) -> bool:
        """Re-read a session right before writing to it."""
        row = self._session_repo.get_by_id(session.id)
        current = db_row_to_session(row) if row is not None else None
        if current is None or not current.is_pending:
            conflict = ReconciliationConflict(
                session.id, current.status.value if current and current.status else None
            )
            logger.warning("Skipping session during reconciliation: %s", conflict)
            result.conflicts.append(session.id)
            return False
        return True
