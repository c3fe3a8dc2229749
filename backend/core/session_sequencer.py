"""
Session Sequencer: the live workout state machine.

Part of AMA-620: Live session sequencing

Steps one workout through its exercises and sets:
- Straight sets with a rest timer between sets
- Supersets: A -> B back-to-back with no rest, rest after B, repeat
- Interval (HIIT) blocks driven by a work/rest timer instead of manual entry
- Reps-in-reserve (RIR) feedback during rest feeding the progression engine
- Pause and exercise-swap suspend the workout clock, never navigation
- Completion or early termination produce a WorkoutSummary

State is an explicit tag (SequencerState); every logged set goes through
a single transition function, _advance_after_set().
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from application.exceptions import (
    InvalidSetError,
    InvalidTransitionError,
    SessionInitializationError,
)
from application.ports import SessionRepository
from backend.core.calorie_calculator import calculate_calories_burned, determine_intensity
from backend.core.progression_engine import ProgressionEngine, weight_increase_for_rir
from backend.core.session_guard import ActiveSessionRegistry
from domain.models import (
    ExerciseKind,
    ProgramExercise,
    ProgramWorkout,
    SessionStatus,
    SessionType,
    SetLogEntry,
    from_canonical,
    to_canonical,
)
from shared.local_dates import Clock, SystemClock, format_local_date

logger = logging.getLogger(__name__)

DEFAULT_REST_SECONDS = 90


class SequencerState(str, Enum):
    """Tagged state of a live session."""

    BLOCKED = "blocked"  # backing session not created yet (or creation failed)
    AWAITING_INPUT = "awaiting_input"
    REST_TIMER = "rest_timer"
    INTERVAL_RUNNING = "interval_running"
    COMPLETE = "complete"
    ABANDONED = "abandoned"


_IDLE_STATES = (SequencerState.BLOCKED, SequencerState.COMPLETE, SequencerState.ABANDONED)

class EventType(str, Enum):
    """Events emitted for the UI (timers, banners, navigation)."""

    SESSION_STARTED = "session_started"
    SESSION_INIT_FAILED = "session_init_failed"
    SET_LOGGED = "set_logged"
    SUPERSET_ADVANCED = "superset_advanced"
    REST_STARTED = "rest_started"
    REST_FINISHED = "rest_finished"
    RIR_REPORTED = "rir_reported"
    EXERCISE_STARTED = "exercise_started"
    INTERVAL_STARTED = "interval_started"
    INTERVAL_PHASE = "interval_phase"
    INTERVAL_COMPLETED = "interval_completed"
    EXERCISE_SWAPPED = "exercise_swapped"
    PAUSED = "paused"
    RESUMED = "resumed"
    SESSION_COMPLETE = "session_complete"
    SESSION_ABANDONED = "session_abandoned"


@dataclass
class SequencerEvent:
    type: EventType
    exercise_index: int
    set_number: int
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RestTimer:
    duration_seconds: int
    remaining_seconds: int
    prompt_rir: bool = True


@dataclass
class RecommendationBanner:
    """Weight increase suggestion shown for the next set only."""
    rir: int
    weight_increase: float
    weight_unit: str


@dataclass
class IntervalTimer:
    """Fixed work/rest rounds for an interval block."""
    work_seconds: int
    rest_seconds: int
    rounds: int
    current_round: int = 1
    phase: str = "work"
    remaining_seconds: int = 0

    def __post_init__(self) -> None:
        if self.remaining_seconds <= 0:
            self.remaining_seconds = self.work_seconds

    @property
    def finished(self) -> bool:
        return self.phase == "done"

    def tick(self, seconds: int = 1) -> List[Tuple[int, str]]:
        """
        Advance the timer.

        Returns:
            (round, phase) for every phase entered during this tick
        """
        transitions: List[Tuple[int, str]] = []
        budget = seconds
        while budget > 0 and not self.finished:
            step = min(budget, self.remaining_seconds)
            self.remaining_seconds -= step
            budget -= step
            if self.remaining_seconds > 0:
                break
            if self.phase == "work":
                if self.current_round >= self.rounds:
                    self.phase = "done"
                elif self.rest_seconds > 0:
                    self.phase = "rest"
                    self.remaining_seconds = self.rest_seconds
                else:
                    self.current_round += 1
                    self.remaining_seconds = self.work_seconds
            else:
                self.current_round += 1
                self.phase = "work"
                self.remaining_seconds = self.work_seconds
            transitions.append((self.current_round, self.phase))
        return transitions


@dataclass
class WorkoutSummary:
    """Summary of a finished (or ended early) session."""
    duration_seconds: int
    duration_minutes: int
    exercise_count: int
    completed_exercises: int
    total_volume: float
    weight_unit: str
    sets_logged: int
    calories: Optional[int] = None
    incomplete: bool = False


CalorieFormula = Callable[[float, float, str], int]


class SessionSequencer:
    """
    State machine driving one workout end-to-end.

    Usage:
        >>> sequencer = SessionSequencer(workout, session_repo=repo, progression_engine=engine)
        >>> sequencer.start()
        >>> sequencer.log_set(10, 135)
        >>> sequencer.report_rir(3)
        >>> sequencer.skip_rest()
    """

    def __init__(
        self,
        workout: ProgramWorkout,
        *,
        session_repo: SessionRepository,
        progression_engine: ProgressionEngine,
        program_id: Optional[str] = None,
        user_id: Optional[str] = None,
        scheduled_session_id: Optional[str] = None,
        weight_unit: str = "lb",
        body_weight_kg: Optional[float] = None,
        calorie_formula: CalorieFormula = calculate_calories_burned,
        intensity_level: Optional[str] = None,
        default_rest_seconds: int = DEFAULT_REST_SECONDS,
        registry: Optional[ActiveSessionRegistry] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the sequencer.

        Args:
            workout: Program workout to perform
            session_repo: Repository used to create and finish the session
            progression_engine: Engine applying per-set progression
            program_id: Program the session belongs to
            user_id: Owner recorded on a newly created session
            scheduled_session_id: Existing scheduled session to start, instead
                                  of creating a new one
            weight_unit: Display unit ("lb" or "kg") for logged weights
            body_weight_kg: Body weight for calorie estimation
            calorie_formula: Calorie estimation collaborator
            intensity_level: MET intensity, derived from the workout name if None
            default_rest_seconds: Rest between sets when a slot sets none
            registry: Marks the session live so reconciliation leaves it alone
            clock: Source of the local calendar day for new sessions
        """
        self._workout = workout
        self._exercises: List[ProgramExercise] = list(workout.exercises)
        self._session_repo = session_repo
        self._progression = progression_engine
        self._program_id = program_id
        self._user_id = user_id
        self._scheduled_session_id = scheduled_session_id
        self._weight_unit = weight_unit
        self._body_weight_kg = body_weight_kg
        self._calorie_formula = calorie_formula
        self._intensity = intensity_level or determine_intensity(workout.name)
        self._default_rest = default_rest_seconds
        self._registry = registry
        self._clock = clock or SystemClock()

        self.session_id: Optional[str] = None
        self.error: Optional[SessionInitializationError] = None
        self.state = SequencerState.BLOCKED
        self.paused = False
        self.swap_in_progress = False
        self.elapsed_seconds = 0
        self.events: List[SequencerEvent] = []
        self.banner: Optional[RecommendationBanner] = None
        self.summary: Optional[WorkoutSummary] = None

        self._index = 0
        self._set = 1
        self._logs: Dict[int, List[SetLogEntry]] = {i: [] for i in range(len(self._exercises))}
        self._done: Set[int] = set()
        self._rest: Optional[RestTimer] = None
        self._interval: Optional[IntervalTimer] = None
        self._pending: Optional[Tuple[int, int]] = None
        self._last_rir: Optional[int] = None

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_set(self) -> int:
        return self._set

    @property
    def current_exercise(self) -> Optional[ProgramExercise]:
        if not self._exercises or self.state == SequencerState.COMPLETE:
            return None
        return self._exercises[self._index]

    @property
    def exercises(self) -> List[ProgramExercise]:
        return list(self._exercises)

    @property
    def rest_timer(self) -> Optional[RestTimer]:
        return self._rest

    @property
    def interval_timer(self) -> Optional[IntervalTimer]:
        return self._interval

    def logs_for(self, index: int) -> List[SetLogEntry]:
        return list(self._logs.get(index, []))

    def events_of(self, event_type: EventType) -> List[SequencerEvent]:
        return [e for e in self.events if e.type == event_type]

    # -------------------------------------------------------------------------
    # Session initialization
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """
        Create (or claim) the backing session record.

        On failure the sequencer stays BLOCKED with `error` set; call retry().

        Returns:
            True once a valid session id exists
        """
        if self.session_id is not None:
            return True

        try:
            self.session_id = self._init_session()
        except Exception as e:
            self.error = SessionInitializationError(
                f"Could not start workout '{self._workout.name}': {e}",
                program_workout_id=self._workout.id,
            )
            logger.warning(str(self.error))
            self._emit(EventType.SESSION_INIT_FAILED, error=str(e))
            return False

        self.error = None
        if self._registry is not None:
            self._registry.acquire(self.session_id)
        self._emit(EventType.SESSION_STARTED, session_id=self.session_id)
        logger.info("Started session %s for workout %s", self.session_id, self._workout.id)

        if not self._exercises:
            self._complete(incomplete=False)
        else:
            self._enter(self._first_pending_index(), 1)
        return True

    def retry(self) -> bool:
        """Re-attempt session creation with the same workout id."""
        if self.state != SequencerState.BLOCKED:
            raise InvalidTransitionError("Session already initialized", self.state.value)
        return self.start()

    def _init_session(self) -> str:
        if self._scheduled_session_id:
            row = self._session_repo.update(
                self._scheduled_session_id,
                {"status": SessionStatus.IN_PROGRESS.value},
            )
            if not row:
                raise LookupError(f"Scheduled session {self._scheduled_session_id} not found")
            return row["id"]

        row = self._session_repo.create(
            {
                "user_id": self._user_id,
                "program_id": self._program_id,
                "program_workout_id": self._workout.id,
                "session_type": SessionType.WORKOUT.value,
                "scheduled_date": format_local_date(self._clock.today()),
                "status": SessionStatus.IN_PROGRESS.value,
                "completed": 0,
                "workout_name": self._workout.name,
                "movement_patterns": list(self._workout.movement_patterns),
            }
        )
        if not row or not row.get("id"):
            raise LookupError("Session creation returned no id")
        return row["id"]

    # -------------------------------------------------------------------------
    # Set logging
    # -------------------------------------------------------------------------

    def log_set(
        self,
        actual_value: Optional[int],
        actual_weight: Optional[float] = None,
    ) -> SetLogEntry:
        """
        Log the current set.

        Args:
            actual_value: Reps performed, or seconds held for duration exercises
            actual_weight: Weight used, in the display unit

        Returns:
            The recorded SetLogEntry (weight in lb)

        Raises:
            SessionInitializationError: If the session could not be created
            InvalidTransitionError: If no set is awaiting input
            InvalidSetError: If required fields are missing
        """
        self._require_state(SequencerState.AWAITING_INPUT, action="log a set")
        exercise = self._exercises[self._index]
        entry = self._validate_set(exercise, actual_value, actual_weight)

        self._logs[self._index].append(entry)
        last_rir, self._last_rir = self._last_rir, None
        self.banner = None
        outcome = self._progression.apply(exercise, entry, last_rir)

        self._emit(
            EventType.SET_LOGGED,
            exercise_id=exercise.exercise_id,
            value=actual_value,
            weight=actual_weight,
            progression=outcome.decision.action,
        )
        self._advance_after_set()
        return entry

    def _validate_set(
        self,
        exercise: ProgramExercise,
        actual_value: Optional[int],
        actual_weight: Optional[float],
    ) -> SetLogEntry:
        kind = exercise.kind
        if actual_value is None:
            field_name = "duration" if kind == ExerciseKind.DURATION else "reps"
            raise InvalidSetError(f"{exercise.exercise_name}: {field_name} is required")
        if actual_value < 0:
            raise InvalidSetError(f"{exercise.exercise_name}: value cannot be negative")
        if actual_weight is not None and actual_weight < 0:
            raise InvalidSetError(f"{exercise.exercise_name}: weight cannot be negative")

        weight_lb = (
            to_canonical(actual_weight, self._weight_unit)
            if actual_weight is not None
            else None
        )

        if kind == ExerciseKind.DURATION:
            if actual_value == 0:
                raise InvalidSetError(f"{exercise.exercise_name}: duration is required")
            return SetLogEntry(
                exercise_slot_id=exercise.id,
                set_number=self._set,
                actual_duration_seconds=actual_value,
                actual_weight=weight_lb,
                rir=self._last_rir,
            )

        if kind == ExerciseKind.WEIGHTED and weight_lb is None:
            raise InvalidSetError(f"{exercise.exercise_name}: weight is required")

        return SetLogEntry(
            exercise_slot_id=exercise.id,
            set_number=self._set,
            actual_reps=actual_value,
            actual_weight=weight_lb,
            rir=self._last_rir,
        )

    def _advance_after_set(self) -> None:
        """Single transition point after a set (or interval block) completes."""
        index, set_number = self._index, self._set
        exercise = self._exercises[index]

        if exercise.in_superset:
            partner = self._partner_index(index)
            if exercise.superset_order == 1 and not exercise.is_interval:
                # A -> B immediately, same set number, no rest
                self._set_position(partner, set_number)
                self._emit(EventType.SUPERSET_ADVANCED, group=exercise.superset_group)
                return

            pair_sets = max(exercise.target_sets, self._exercises[partner].target_sets)
            if set_number < pair_sets:
                self._start_rest((partner, set_number + 1))
                return
            self._done.update({index, partner})
        else:
            if set_number < exercise.target_sets and not exercise.is_interval:
                self._start_rest((index, set_number + 1))
                return
            self._done.add(index)

        next_index = self._first_pending_index()
        if next_index is None:
            self._complete(incomplete=False)
        else:
            self._start_rest((next_index, 1))

    # -------------------------------------------------------------------------
    # Rest timer and RIR
    # -------------------------------------------------------------------------

    def _start_rest(self, next_position: Tuple[int, int]) -> None:
        exercise = self._exercises[self._index]
        if exercise.rest_seconds is not None and not exercise.is_interval:
            duration = exercise.rest_seconds
        else:
            duration = self._default_rest
        self._rest = RestTimer(
            duration_seconds=duration,
            remaining_seconds=duration,
            prompt_rir=not exercise.is_interval,
        )
        self._pending = next_position
        self.state = SequencerState.REST_TIMER
        self._emit(
            EventType.REST_STARTED,
            duration_seconds=duration,
            prompt_rir=self._rest.prompt_rir,
        )

    def report_rir(self, rir: int) -> Optional[RecommendationBanner]:
        """
        Record reps-in-reserve for the set just finished.

        The value feeds progression on the *next* logged set; the banner is
        shown for that set only.
        """
        self._require_state(SequencerState.REST_TIMER, action="report RIR")
        if rir < 0:
            raise InvalidSetError("RIR cannot be negative")

        self._last_rir = rir
        increase_lb = weight_increase_for_rir(rir)
        self.banner = (
            RecommendationBanner(
                rir=rir,
                weight_increase=from_canonical(increase_lb, self._weight_unit),
                weight_unit=self._weight_unit,
            )
            if increase_lb > 0
            else None
        )
        self._emit(EventType.RIR_REPORTED, rir=rir, weight_increase=increase_lb)
        return self.banner

    def skip_rest(self) -> None:
        """End the rest timer early."""
        self._require_state(SequencerState.REST_TIMER, action="skip rest")
        self._finish_rest(skipped=True)

    def _finish_rest(self, skipped: bool = False) -> None:
        next_index, next_set = self._pending
        self._rest = None
        self._pending = None
        self._emit(EventType.REST_FINISHED, skipped=skipped)
        self._enter(next_index, next_set)

    # -------------------------------------------------------------------------
    # Interval blocks
    # -------------------------------------------------------------------------

    def complete_interval_block(self) -> None:
        """
        Finish every round of the current interval block in one step.

        Called by the interval timer when the last work phase ends, or by the
        user finishing the block from the timer view.
        """
        self._require_state(SequencerState.INTERVAL_RUNNING, action="complete intervals")
        exercise = self._exercises[self._index]
        for round_number in range(1, exercise.target_sets + 1):
            self._logs[self._index].append(
                SetLogEntry(
                    exercise_slot_id=exercise.id,
                    set_number=round_number,
                    actual_duration_seconds=exercise.work_seconds,
                )
            )
        self._interval = None
        self._set = exercise.target_sets
        self._emit(EventType.INTERVAL_COMPLETED, rounds=exercise.target_sets)
        self._advance_after_set()

    # -------------------------------------------------------------------------
    # Clock
    # -------------------------------------------------------------------------

    def tick(self, seconds: int = 1) -> None:
        """
        Advance timers by `seconds` (driven by a one-second tick).

        Pause and swap-in-progress freeze the workout clock and the interval
        timer; the rest countdown keeps running.
        """
        if self.state in _IDLE_STATES:
            return

        clock_running = not self.paused and not self.swap_in_progress
        if clock_running:
            self.elapsed_seconds += seconds

        if self.state == SequencerState.REST_TIMER and self._rest is not None:
            self._rest.remaining_seconds = max(0, self._rest.remaining_seconds - seconds)
            if self._rest.remaining_seconds == 0:
                self._finish_rest()
        elif self.state == SequencerState.INTERVAL_RUNNING and clock_running:
            for round_number, phase in self._interval.tick(seconds):
                self._emit(EventType.INTERVAL_PHASE, round=round_number, phase=phase)
            if self._interval.finished:
                self.complete_interval_block()

    def pause(self) -> None:
        self._require_live(action="pause")
        if not self.paused:
            self.paused = True
            self._emit(EventType.PAUSED)

    def resume(self) -> None:
        self._require_live(action="resume")
        if self.paused:
            self.paused = False
            self._emit(EventType.RESUMED)

    # -------------------------------------------------------------------------
    # Exercise swap
    # -------------------------------------------------------------------------

    def begin_swap(self) -> None:
        """Open the swap dialog; the workout clock stops until it closes."""
        self._require_state(SequencerState.AWAITING_INPUT, action="swap an exercise")
        self.swap_in_progress = True

    def cancel_swap(self) -> None:
        self.swap_in_progress = False

    def swap(
        self,
        exercise_id: str,
        exercise_name: str,
        equipment: Optional[List[str]] = None,
    ) -> ProgramExercise:
        """
        Replace the exercise on the current slot.

        Sets already logged on the slot and its current targets are kept.
        """
        self._require_state(SequencerState.AWAITING_INPUT, action="swap an exercise")
        current = self._exercises[self._index]
        updates: Dict[str, Any] = {"exercise_id": exercise_id, "exercise_name": exercise_name}
        if equipment is not None:
            updates["equipment"] = list(equipment)
        replacement = current.model_copy(update=updates)
        self._exercises[self._index] = replacement
        self.swap_in_progress = False
        self._emit(
            EventType.EXERCISE_SWAPPED,
            previous_exercise_id=current.exercise_id,
            exercise_id=exercise_id,
        )
        logger.info(
            "Swapped %s -> %s on slot %s", current.exercise_id, exercise_id, current.id
        )
        return replacement

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------

    def end_early(self) -> WorkoutSummary:
        """
        Stop the workout now.

        The summary covers fully completed exercises only; exercises after
        the current one are left as scheduled.
        """
        self._require_live(action="end the workout")
        return self._complete(incomplete=True)

    def abandon(self) -> None:
        """
        Leave the workout without finishing it.

        Releases the live hold so reconciliation can resume. A claimed
        scheduled session goes back to pending; a session created for this
        workout is marked skipped. Nothing is logged against progression.
        """
        self._require_live(action="abandon the workout")
        self._rest = None
        self._interval = None
        self._pending = None
        self.state = SequencerState.ABANDONED
        status = None if self._scheduled_session_id else SessionStatus.SKIPPED.value
        try:
            self._session_repo.update(self.session_id, {"status": status})
        finally:
            if self._registry is not None:
                self._registry.release(self.session_id)
        self._emit(EventType.SESSION_ABANDONED, session_id=self.session_id)
        logger.info("Abandoned session %s for workout %s", self.session_id, self._workout.id)

    def _complete(self, incomplete: bool) -> WorkoutSummary:
        self._rest = None
        self._interval = None
        self._pending = None
        self.state = SequencerState.COMPLETE
        self.summary = self._build_summary(incomplete)
        self._emit(
            EventType.SESSION_COMPLETE,
            incomplete=incomplete,
            completed_exercises=self.summary.completed_exercises,
        )
        self._persist_completion(self.summary)
        if self._registry is not None and self.session_id:
            self._registry.release(self.session_id)
        return self.summary

    def _build_summary(self, incomplete: bool) -> WorkoutSummary:
        counted = sorted(self._done)
        volume_lb = sum(
            entry.actual_weight or 0.0 for i in counted for entry in self._logs[i]
        )
        minutes = int(round(self.elapsed_seconds / 60))
        calories = None
        if self._body_weight_kg:
            calories = self._calorie_formula(minutes, self._body_weight_kg, self._intensity)
        return WorkoutSummary(
            duration_seconds=self.elapsed_seconds,
            duration_minutes=minutes,
            exercise_count=len(self._exercises),
            completed_exercises=len(counted),
            total_volume=round(from_canonical(volume_lb, self._weight_unit), 2),
            weight_unit=self._weight_unit,
            sets_logged=sum(len(self._logs[i]) for i in counted),
            calories=calories,
            incomplete=incomplete,
        )

    def _persist_completion(self, summary: WorkoutSummary) -> None:
        if not self.session_id:
            return
        data: Dict[str, Any] = {
            "status": SessionStatus.COMPLETE.value,
            "completed": 1,
            "session_date": datetime.now(timezone.utc).isoformat(),
            "duration_minutes": summary.duration_minutes,
            "calories": summary.calories,
        }
        if summary.incomplete:
            data["notes"] = (
                f"Ended early after {summary.completed_exercises} of "
                f"{summary.exercise_count} exercises"
            )
        try:
            self._session_repo.update(self.session_id, data)
        except Exception as e:
            logger.warning("Failed to record completion of session %s: %s", self.session_id, e)

    # -------------------------------------------------------------------------
    # Navigation helpers
    # -------------------------------------------------------------------------

    def _enter(self, index: int, set_number: int) -> None:
        exercise = self._exercises[index]
        if exercise.in_superset and exercise.superset_order == 2 and set_number == 1:
            partner = self._partner_index(index)
            if partner not in self._done:
                index, exercise = partner, self._exercises[partner]

        changed = index != self._index or not any(self._logs[index])
        self._set_position(index, set_number)

        if exercise.is_interval:
            self._interval = IntervalTimer(
                work_seconds=exercise.work_seconds,
                rest_seconds=exercise.rest_seconds or 0,
                rounds=exercise.target_sets,
            )
            self.state = SequencerState.INTERVAL_RUNNING
            self._emit(
                EventType.INTERVAL_STARTED,
                work_seconds=exercise.work_seconds,
                rest_seconds=exercise.rest_seconds or 0,
                rounds=exercise.target_sets,
            )
            return

        self.state = SequencerState.AWAITING_INPUT
        if changed and set_number == 1:
            self._emit(EventType.EXERCISE_STARTED, exercise_id=exercise.exercise_id)

    def _set_position(self, index: int, set_number: int) -> None:
        self._index = index
        self._set = set_number

    def _partner_index(self, index: int) -> int:
        group = self._exercises[index].superset_group
        for i, exercise in enumerate(self._exercises):
            if i != index and exercise.superset_group == group:
                return i
        raise InvalidTransitionError(f"Superset '{group}' has no partner")

    def _first_pending_index(self) -> Optional[int]:
        for i in range(len(self._exercises)):
            if i not in self._done:
                return i
        return None

    def _require_state(self, expected: SequencerState, action: str) -> None:
        if self.state == SequencerState.BLOCKED and self.error is not None:
            raise self.error
        if self.state != expected:
            raise InvalidTransitionError(
                f"Cannot {action} while {self.state.value}", self.state.value
            )

    def _require_live(self, action: str) -> None:
        if self.state == SequencerState.BLOCKED and self.error is not None:
            raise self.error
        if self.state in _IDLE_STATES:
            raise InvalidTransitionError(
                f"Cannot {action} while {self.state.value}", self.state.value
            )

    def _emit(self, event_type: EventType, **data: Any) -> None:
        self.events.append(SequencerEvent(event_type, self._index, self._set, data))
