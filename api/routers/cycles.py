"""
Cycles router: seven-day cycle status and the cycle-complete choices.

Part of AMA-616: Seven-day cycle tracking
Part of AMA-617: Regenerate program at cycle end

This router provides endpoints for:
- Cycle status (prompt-once flag after each completion)
- Repeating the same weekdays for the next cycle
- Generating and activating a new program
- Resetting the cycle counters
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import (
    get_current_user,
    get_cycle_tracker,
    get_regenerate_program_use_case,
)
from api.errors import to_http_exception
from application.exceptions import ScheduleEngineError
from application.use_cases import RegenerateProgramUseCase
from backend.core.cycle_tracker import CycleTracker
from domain.models import ProgramWorkout, WorkoutSession
from infrastructure.program_generator_client import (
    ProgramGeneratorAPIError,
    ProgramGeneratorUnavailable,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/cycles",
    tags=["Cycles"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class CycleStatusResponse(BaseModel):
    should_prompt: bool
    cycle_complete: bool
    cycle_number: int
    total_workouts_completed: int
    current_cycle_dates: List[date] = Field(default_factory=list)


class RepeatCycleRequest(BaseModel):
    """Workouts of the active program, in rotation order."""
    workouts: List[ProgramWorkout] = Field(..., min_length=1)


class CycleAdvanceResponse(BaseModel):
    cycle_number: int
    total_workouts_completed: int
    anchor_date: Optional[date] = None
    program_id: Optional[str] = None
    sessions: List[WorkoutSession] = Field(default_factory=list)


class NewProgramRequest(BaseModel):
    template: Optional[str] = None
    start_date: Optional[date] = None


class CycleCountersResponse(BaseModel):
    cycle_number: int
    total_workouts_completed: int


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/status", response_model=CycleStatusResponse)
def get_cycle_status(
    current_date: Optional[date] = Query(default=None, description="Caller's local day"),
    user_id: str = Depends(get_current_user),
    tracker: CycleTracker = Depends(get_cycle_tracker),
):
    """
    Evaluate the current cycle.

    Called after each session completion; `should_prompt` is true once per
    completed cycle.
    """
    try:
        status = tracker.evaluate(user_id, current_date)
    except ScheduleEngineError as e:
        raise to_http_exception(e)

    return CycleStatusResponse(
        should_prompt=status.should_prompt,
        cycle_complete=status.cycle_complete,
        cycle_number=status.cycle_number,
        total_workouts_completed=status.total_workouts_completed,
        current_cycle_dates=status.current_cycle_dates,
    )


@router.post("/repeat", response_model=CycleAdvanceResponse)
def repeat_cycle(
    request: RepeatCycleRequest,
    current_date: Optional[date] = Query(default=None, description="Caller's local day"),
    user_id: str = Depends(get_current_user),
    tracker: CycleTracker = Depends(get_cycle_tracker),
):
    """
    Schedule the next cycle on the same weekdays.

    Only allowed once the current cycle is resolved (409 otherwise).
    """
    try:
        advance = tracker.repeat_same_days(user_id, request.workouts, current_date)
    except ScheduleEngineError as e:
        raise to_http_exception(e)

    return CycleAdvanceResponse(
        cycle_number=advance.cycle_number,
        total_workouts_completed=advance.total_workouts_completed,
        anchor_date=advance.anchor_date,
        sessions=advance.sessions,
    )


@router.post("/new-program", response_model=CycleAdvanceResponse)
async def start_new_program(
    request: NewProgramRequest,
    user_id: str = Depends(get_current_user),
    use_case: RegenerateProgramUseCase = Depends(get_regenerate_program_use_case),
):
    """Generate a new program and activate it, closing the finished cycle."""
    try:
        result = await use_case.execute(
            user_id, template=request.template, start_date=request.start_date
        )
    except ProgramGeneratorUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ProgramGeneratorAPIError as e:
        logger.exception(f"Program generation failed for {user_id}: {e}")
        raise HTTPException(status_code=502, detail="Program generation failed")

    if not result.success:
        if result.validation_errors:
            raise HTTPException(
                status_code=422,
                detail={"message": result.error, "errors": result.validation_errors},
            )
        raise HTTPException(status_code=404, detail=result.error)

    return CycleAdvanceResponse(
        cycle_number=result.cycle_number,
        total_workouts_completed=result.total_workouts_completed or 0,
        program_id=result.program_id,
        anchor_date=result.sessions[0].scheduled_date if result.sessions else None,
        sessions=result.sessions,
    )


@router.post("/reset", response_model=CycleCountersResponse)
def reset_cycle_counters(
    user_id: str = Depends(get_current_user),
    tracker: CycleTracker = Depends(get_cycle_tracker),
):
    """Reset cycle number and completed-workout total (account reset)."""
    try:
        profile = tracker.reset_account(user_id)
    except ScheduleEngineError as e:
        raise to_http_exception(e)
    return CycleCountersResponse(
        cycle_number=profile.cycle_number,
        total_workouts_completed=profile.total_workouts_completed,
    )
