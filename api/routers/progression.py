"""
Progression router for exercise slot targets.

Part of AMA-614: Per-set progressive overload

This router provides endpoints for:
- The current target of an exercise slot (stored row folded with its events)
- The slot's progression event history
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_progression_engine
from api.errors import to_http_exception
from application.exceptions import ScheduleEngineError
from backend.core.progression_engine import ProgressionEngine
from domain.models import UnitPreference, from_canonical

router = APIRouter(
    prefix="/progression",
    tags=["Progression"],
)


# =============================================================================
# Response Models
# =============================================================================


class SlotTargetResponse(BaseModel):
    """Current target of an exercise slot, weights in the requested unit."""
    exercise_slot_id: str
    exercise_id: str
    exercise_name: str
    kind: str
    target_sets: int
    reps_min: Optional[int] = None
    reps_max: Optional[int] = None
    recommended_weight: Optional[float] = None
    weight_unit: str = "lb"
    version: int = 0


class ProgressionEventResponse(BaseModel):
    version: int
    reason: str
    previous_weight: Optional[float] = None
    new_weight: Optional[float] = None
    previous_reps_min: Optional[int] = None
    new_reps_min: Optional[int] = None
    previous_reps_max: Optional[int] = None
    new_reps_max: Optional[int] = None
    weight_unit: str = "lb"
    created_at: Optional[datetime] = None


class ProgressionHistoryResponse(BaseModel):
    exercise_slot_id: str
    events: List[ProgressionEventResponse] = Field(default_factory=list)


def _display(weight: Optional[float], unit: str) -> Optional[float]:
    return round(from_canonical(weight, unit), 2) if weight is not None else None


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/slots/{exercise_slot_id}", response_model=SlotTargetResponse)
def get_slot_target(
    exercise_slot_id: str = Path(..., description="Program exercise slot ID"),
    units: UnitPreference = Query(default=UnitPreference.IMPERIAL),
    user_id: str = Depends(get_current_user),
    engine: ProgressionEngine = Depends(get_progression_engine),
):
    """Current target of a slot, including changes not yet folded into the row."""
    try:
        exercise = engine.current_target(exercise_slot_id)
    except ScheduleEngineError as e:
        raise to_http_exception(e)

    unit = units.weight_unit
    return SlotTargetResponse(
        exercise_slot_id=exercise.id,
        exercise_id=exercise.exercise_id,
        exercise_name=exercise.exercise_name,
        kind=exercise.kind.value,
        target_sets=exercise.target_sets,
        reps_min=exercise.reps_min,
        reps_max=exercise.reps_max,
        recommended_weight=_display(exercise.recommended_weight, unit),
        weight_unit=unit,
        version=exercise.version,
    )


@router.get("/slots/{exercise_slot_id}/events", response_model=ProgressionHistoryResponse)
def get_slot_history(
    exercise_slot_id: str = Path(..., description="Program exercise slot ID"),
    units: UnitPreference = Query(default=UnitPreference.IMPERIAL),
    user_id: str = Depends(get_current_user),
    engine: ProgressionEngine = Depends(get_progression_engine),
):
    """Progression events of a slot, oldest first."""
    unit = units.weight_unit
    return ProgressionHistoryResponse(
        exercise_slot_id=exercise_slot_id,
        events=[
            ProgressionEventResponse(
                version=e.version,
                reason=e.reason,
                previous_weight=_display(e.previous_weight, unit),
                new_weight=_display(e.new_weight, unit),
                previous_reps_min=e.previous_reps_min,
                new_reps_min=e.new_reps_min,
                previous_reps_max=e.previous_reps_max,
                new_reps_max=e.new_reps_max,
                weight_unit=unit,
                created_at=e.created_at,
            )
            for e in engine.history(exercise_slot_id)
        ],
    )
