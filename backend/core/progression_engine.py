"""
Progression Engine for per-set progressive overload.

Part of AMA-614: Per-set progressive overload

After a set is logged this module decides whether the slot's future target
should move:
- Weighted exercises: recommended weight -5% / -10% on a rep deficit,
  +5 / +10 lb on surplus reps or high reps-in-reserve (RIR)
- Bodyweight exercises: the rep range moves by one instead of the weight
- Duration and interval exercises never change

RIR always comes from the rest period *before* the set being logged; it
never applies retroactively to the set it followed.

Every change is recorded as a versioned ProgressionEvent. The current target
of a slot is the fold of its events, so a retried or concurrent write with a
stale version is rejected instead of overwriting a newer target.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from application.exceptions import ProgressionWriteError, SessionNotFoundError
from application.ports import ProgramExerciseRepository
from domain.converters import db_row_to_exercise, exercise_targets_to_db_row
from domain.models import ExerciseKind, ProgramExercise, ProgressionEvent, SetLogEntry

logger = logging.getLogger(__name__)


# =============================================================================
# Thresholds
# =============================================================================

# Empirical training heuristics, kept exactly as tuned in the app
SMALL_REDUCTION = 0.05
LARGE_REDUCTION = 0.10
LARGE_DEFICIT_REPS = 2  # deficit at or above this uses LARGE_REDUCTION
RIR_INCREASE_ABOVE = 2  # RIR strictly above this triggers an increase
RIR_LARGE_INCREASE_AT = 5
SMALL_INCREMENT_LB = 5
LARGE_INCREMENT_LB = 10
MIN_REPS = 1


def round_half_up(value: float) -> float:
    """Round to the nearest whole unit, halves away from zero."""
    return float(math.floor(value + 0.5))


def weight_increase_for_rir(rir: Optional[int]) -> int:
    """
    Weight increase (lb) shown on the next-set banner for a reported RIR.

    Args:
        rir: Reps in reserve reported during rest

    Returns:
        10 for RIR >= 5, 5 for RIR >= 3, otherwise 0
    """
    if rir is None:
        return 0
    if rir >= RIR_LARGE_INCREASE_AT:
        return LARGE_INCREMENT_LB
    if rir > RIR_INCREASE_ABOVE:
        return SMALL_INCREMENT_LB
    return 0


# =============================================================================
# Decisions
# =============================================================================


@dataclass
class ProgressionDecision:
    """Outcome of evaluating one logged set."""
    action: str  # "increase", "decrease" or "none"
    reason: str
    new_weight: Optional[float] = None
    new_reps_min: Optional[int] = None
    new_reps_max: Optional[int] = None

    @property
    def changed(self) -> bool:
        return self.action != "none"


NO_CHANGE = "none"


def decide_weighted(
    reps_min: int,
    reps_max: int,
    actual_reps: int,
    last_rir: Optional[int],
    current_weight: float,
) -> ProgressionDecision:
    """
    Decide the next recommended weight for a weighted exercise.

    Args:
        reps_min: Bottom of the target rep range
        reps_max: Top of the target rep range
        actual_reps: Reps performed in the logged set
        last_rir: RIR reported during the rest before this set
        current_weight: Current recommended weight (lb)

    Returns:
        ProgressionDecision with new_weight set when the weight moves
    """
    if actual_reps < reps_min:
        deficit = reps_min - actual_reps
        reduction = LARGE_REDUCTION if deficit >= LARGE_DEFICIT_REPS else SMALL_REDUCTION
        return ProgressionDecision(
            action="decrease",
            reason=f"{actual_reps} reps, {deficit} below target minimum {reps_min}",
            new_weight=round_half_up(current_weight * (1 - reduction)),
        )

    if actual_reps > reps_max or (last_rir is not None and last_rir > RIR_INCREASE_ABOVE):
        increment = (
            LARGE_INCREMENT_LB
            if last_rir is not None and last_rir >= RIR_LARGE_INCREASE_AT
            else SMALL_INCREMENT_LB
        )
        reason = (
            f"{actual_reps} reps above target maximum {reps_max}"
            if actual_reps > reps_max
            else f"RIR {last_rir} reported"
        )
        return ProgressionDecision(
            action="increase",
            reason=reason,
            new_weight=current_weight + increment,
        )

    return ProgressionDecision(action=NO_CHANGE, reason="within target range")


def decide_bodyweight(
    reps_min: int,
    reps_max: int,
    actual_reps: int,
    last_rir: Optional[int],
) -> ProgressionDecision:
    """
    Decide the next rep range for a bodyweight exercise.

    Same thresholds as the weighted rule; the range moves by one rep,
    never below MIN_REPS.
    """
    if actual_reps < reps_min:
        new_min = max(MIN_REPS, reps_min - 1)
        new_max = max(new_min, reps_max - 1)
        if (new_min, new_max) == (reps_min, reps_max):
            return ProgressionDecision(action=NO_CHANGE, reason="rep range at floor")
        return ProgressionDecision(
            action="decrease",
            reason=f"{actual_reps} reps below target minimum {reps_min}",
            new_reps_min=new_min,
            new_reps_max=new_max,
        )

    if actual_reps > reps_max or (last_rir is not None and last_rir > RIR_INCREASE_ABOVE):
        return ProgressionDecision(
            action="increase",
            reason=(
                f"{actual_reps} reps above target maximum {reps_max}"
                if actual_reps > reps_max
                else f"RIR {last_rir} reported"
            ),
            new_reps_min=reps_min + 1,
            new_reps_max=reps_max + 1,
        )

    return ProgressionDecision(action=NO_CHANGE, reason="within target range")


def fold_events(
    exercise: ProgramExercise,
    events: Iterable[ProgressionEvent],
) -> ProgramExercise:
    """
    Derive the current target of a slot from its progression events.

    Events at or below the slot's version are already folded in and skipped.
    """
    current = exercise.model_copy()
    for event in sorted(events, key=lambda e: e.version):
        if event.version <= current.version:
            continue
        updates = {"version": event.version}
        if event.new_weight is not None:
            updates["recommended_weight"] = event.new_weight
        if event.new_reps_min is not None:
            updates["reps_min"] = event.new_reps_min
        if event.new_reps_max is not None:
            updates["reps_max"] = event.new_reps_max
        current = current.model_copy(update=updates)
    return current


# =============================================================================
# Engine
# =============================================================================


@dataclass
class ProgressionOutcome:
    """Result of applying a logged set to a slot."""
    decision: ProgressionDecision
    event: Optional[ProgressionEvent] = None
    persisted: bool = False


class ProgressionEngine:
    """
    Applies progression decisions to exercise slots.

    The in-memory slot is updated immediately, so later sets in the same
    session (and a swapped-in replacement on the same slot) see the new
    target. Persistence is best-effort: a failed write is logged and the
    in-memory target still advances.
    """

    def __init__(self, exercise_repo: Optional[ProgramExerciseRepository] = None):
        """
        Initialize the engine.

        Args:
            exercise_repo: Repository for slot targets and events. When None,
                           changes stay in memory.
        """
        self._exercise_repo = exercise_repo

    def evaluate(
        self,
        exercise: ProgramExercise,
        entry: SetLogEntry,
        last_rir: Optional[int] = None,
    ) -> ProgressionDecision:
        """Decide what a logged set means for the slot, without side effects."""
        kind = exercise.kind
        if kind in (ExerciseKind.DURATION, ExerciseKind.INTERVAL):
            return ProgressionDecision(action=NO_CHANGE, reason=f"{kind.value} exercise")
        if entry.actual_reps is None or exercise.reps_min is None:
            return ProgressionDecision(action=NO_CHANGE, reason="no rep target or reps logged")

        reps_max = exercise.reps_max if exercise.reps_max is not None else exercise.reps_min

        if kind == ExerciseKind.BODYWEIGHT:
            return decide_bodyweight(exercise.reps_min, reps_max, entry.actual_reps, last_rir)

        base_weight = exercise.recommended_weight
        if base_weight is None:
            base_weight = entry.actual_weight
        if base_weight is None:
            return ProgressionDecision(action=NO_CHANGE, reason="no weight to progress from")

        return decide_weighted(
            exercise.reps_min, reps_max, entry.actual_reps, last_rir, base_weight
        )

    def apply(
        self,
        exercise: ProgramExercise,
        entry: SetLogEntry,
        last_rir: Optional[int] = None,
    ) -> ProgressionOutcome:
        """
        Evaluate a set and write any change back to the slot.

        Args:
            exercise: Slot the set was logged on (updated in place)
            entry: The logged set (weights in lb)
            last_rir: RIR reported during the rest before this set

        Returns:
            ProgressionOutcome with the decision and the recorded event
        """
        decision = self.evaluate(exercise, entry, last_rir)
        if not decision.changed:
            return ProgressionOutcome(decision=decision)

        event = ProgressionEvent(
            exercise_slot_id=exercise.id,
            version=exercise.version + 1,
            reason=decision.reason,
            previous_weight=exercise.recommended_weight,
            new_weight=decision.new_weight,
            previous_reps_min=exercise.reps_min,
            new_reps_min=decision.new_reps_min,
            previous_reps_max=exercise.reps_max,
            new_reps_max=decision.new_reps_max,
        )

        # In-memory target advances regardless of persistence
        if decision.new_weight is not None:
            exercise.recommended_weight = decision.new_weight
        if decision.new_reps_min is not None:
            exercise.reps_min = decision.new_reps_min
        if decision.new_reps_max is not None:
            exercise.reps_max = decision.new_reps_max
        exercise.version = event.version

        logger.info(
            "Progression %s on slot %s (v%d): %s",
            decision.action,
            exercise.id,
            event.version,
            decision.reason,
        )

        persisted = False
        try:
            persisted = self._persist(exercise, event)
        except ProgressionWriteError as e:
            logger.warning(str(e))

        return ProgressionOutcome(decision=decision, event=event, persisted=persisted)

    def _persist(self, exercise: ProgramExercise, event: ProgressionEvent) -> bool:
        if self._exercise_repo is None:
            return False
        try:
            self._exercise_repo.append_event(event.to_dict())
            self._exercise_repo.update_targets(
                exercise.id, exercise_targets_to_db_row(exercise)
            )
        except Exception as e:
            raise ProgressionWriteError(exercise.id, e) from e
        return True

    def history(self, exercise_slot_id: str) -> List[ProgressionEvent]:
        """Progression events of a slot, oldest first."""
        if self._exercise_repo is None:
            return []
        rows = self._exercise_repo.list_events(exercise_slot_id)
        return sorted(
            (ProgressionEvent.from_dict(row) for row in rows), key=lambda e: e.version
        )

    def current_target(self, exercise_slot_id: str) -> ProgramExercise:
        """
        Current target of a slot: stored row folded with any newer events.

        Raises:
            SessionNotFoundError: If the slot does not exist
        """
        if self._exercise_repo is None:
            raise SessionNotFoundError("No exercise repository configured")
        row = self._exercise_repo.get_by_id(exercise_slot_id)
        if row is None:
            raise SessionNotFoundError(f"Exercise slot {exercise_slot_id} not found")
        return fold_events(db_row_to_exercise(row), self.history(exercise_slot_id))
