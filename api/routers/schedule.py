"""
Schedule router: program activation, sessions and missed-workout handling.

Part of AMA-613: Persist scheduled sessions
Part of AMA-619: Missed workout reconciliation

This router provides endpoints for:
- Activating a program (materializing its calendar)
- Listing a program's sessions
- Missed workout count and the two reconciliation policies
- The app-load pass (reschedule, then archive)
- Manually moving one upcoming workout

Every program and session route answers 404 for ids owned by another user.
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import (
    get_activate_program_use_case,
    get_current_user,
    get_reconciler,
    get_session_repo,
    require_program_owner,
    require_session_owner,
)
from api.errors import to_http_exception
from application.exceptions import ScheduleEngineError
from application.ports import SessionRepository
from application.use_cases import ActivateProgramUseCase
from backend.core.missed_workout_reconciler import (
    MissedWorkoutReconciler,
    ReconciliationResult,
)
from domain.converters import db_row_to_session
from domain.models import ProgramWorkout, WorkoutSession

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/schedule",
    tags=["Schedule"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class ActivateProgramRequest(BaseModel):
    """Request body for activating a program."""
    workouts: List[ProgramWorkout] = Field(..., min_length=1)
    days_per_week: Optional[int] = Field(default=None, ge=1, le=7)
    selected_days: Optional[List[int]] = None
    explicit_dates: Optional[List[date]] = None
    start_date: Optional[date] = None
    weeks: int = Field(default=1, ge=1, le=52)


class ActivateProgramResponse(BaseModel):
    """Response for program activation."""
    program_id: str
    anchor_date: date
    cycle_number: int
    sessions: List[WorkoutSession]


class MissedWorkoutsResponse(BaseModel):
    """Missed workout banner data."""
    count: int
    date_range: str
    earliest: Optional[date] = None
    session_ids: List[str] = Field(default_factory=list)


class SessionMoveResponse(BaseModel):
    session_id: str
    from_date: date
    to_date: date


class ReconciliationResponse(BaseModel):
    """Outcome of one reconciliation or archival pass."""
    policy: str
    changed: int
    gap_days: int = 0
    deferred: bool = False
    moves: List[SessionMoveResponse] = Field(default_factory=list)
    conflicts: List[str] = Field(default_factory=list)


class LoadReconciliationResponse(BaseModel):
    reschedule: ReconciliationResponse
    archive: ReconciliationResponse


class RescheduleRequest(BaseModel):
    new_date: date
    current_date: Optional[date] = None


def _reconciliation_response(result: ReconciliationResult) -> ReconciliationResponse:
    return ReconciliationResponse(
        policy=result.policy,
        changed=result.changed,
        gap_days=result.gap_days,
        deferred=result.deferred,
        moves=[
            SessionMoveResponse(
                session_id=m.session_id, from_date=m.from_date, to_date=m.to_date
            )
            for m in result.moves
        ],
        conflicts=list(result.conflicts),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/programs/{program_id}/activate", response_model=ActivateProgramResponse)
def activate_program(
    request: ActivateProgramRequest,
    program_id: str = Depends(require_program_owner),
    user_id: str = Depends(get_current_user),
    use_case: ActivateProgramUseCase = Depends(get_activate_program_use_case),
):
    """
    Materialize a program onto the calendar and make it the active program.

    Nothing is written when the weekday configuration is invalid (422).
    """
    result = use_case.execute(
        user_id,
        program_id,
        request.workouts,
        days_per_week=request.days_per_week,
        selected_days=request.selected_days,
        explicit_dates=request.explicit_dates,
        start_date=request.start_date,
        weeks=request.weeks,
    )
    if not result.success:
        if result.validation_errors:
            raise HTTPException(
                status_code=422,
                detail={"message": result.error, "errors": result.validation_errors},
            )
        raise HTTPException(status_code=404, detail=result.error)

    return ActivateProgramResponse(
        program_id=program_id,
        anchor_date=result.anchor_date,
        cycle_number=result.cycle_number,
        sessions=result.sessions,
    )


@router.get("/programs/{program_id}/sessions", response_model=List[WorkoutSession])
def list_sessions(
    program_id: str = Depends(require_program_owner),
    include_archived: bool = Query(default=False),
    user_id: str = Depends(get_current_user),
    session_repo: SessionRepository = Depends(get_session_repo),
):
    """List a program's sessions ordered by scheduled date."""
    rows = session_repo.list_by_program(program_id, include_archived=include_archived)
    return sorted((db_row_to_session(r) for r in rows), key=lambda s: s.scheduled_date)


@router.get("/programs/{program_id}/missed", response_model=MissedWorkoutsResponse)
def get_missed_workouts(
    program_id: str = Depends(require_program_owner),
    current_date: Optional[date] = Query(default=None, description="Caller's local day"),
    user_id: str = Depends(get_current_user),
    reconciler: MissedWorkoutReconciler = Depends(get_reconciler),
):
    """Count missed workouts for the banner and decision dialog."""
    missed = reconciler.missed_count(program_id, current_date)
    return MissedWorkoutsResponse(
        count=missed.count,
        date_range=missed.date_range,
        earliest=missed.earliest,
        session_ids=[s.id for s in missed.sessions if s.id],
    )


@router.post("/programs/{program_id}/reconcile", response_model=LoadReconciliationResponse)
def reconcile_on_load(
    program_id: str = Depends(require_program_owner),
    current_date: Optional[date] = Query(default=None, description="Caller's local day"),
    user_id: str = Depends(get_current_user),
    reconciler: MissedWorkoutReconciler = Depends(get_reconciler),
):
    """App-load pass: auto-reschedule missed workouts, then archive the past."""
    result = reconciler.run_on_load(program_id, current_date)
    return LoadReconciliationResponse(
        reschedule=_reconciliation_response(result.reschedule),
        archive=_reconciliation_response(result.archive),
    )


@router.post("/programs/{program_id}/skip-missed", response_model=ReconciliationResponse)
def skip_missed_workouts(
    program_id: str = Depends(require_program_owner),
    current_date: Optional[date] = Query(default=None, description="Caller's local day"),
    user_id: str = Depends(get_current_user),
    reconciler: MissedWorkoutReconciler = Depends(get_reconciler),
):
    """Mark missed workouts skipped; the rest of the calendar is untouched."""
    return _reconciliation_response(reconciler.skip_missed(program_id, current_date))


@router.post("/sessions/{session_id}/reschedule", response_model=List[WorkoutSession])
def reschedule_session(
    request: RescheduleRequest,
    session_id: str = Depends(require_session_owner),
    user_id: str = Depends(get_current_user),
    reconciler: MissedWorkoutReconciler = Depends(get_reconciler),
):
    """Move one upcoming workout; a pending session on the target day swaps."""
    try:
        return reconciler.reschedule_session(session_id, request.new_date, request.current_date)
    except ScheduleEngineError as e:
        raise to_http_exception(e)
