"""
FastAPI Dependency Providers for the scheduling API.

Part of AMA-621: Scheduling API surface

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fakes.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository and service providers create new instances per-request
- The active-session registry is process-wide
- The clock follows the caller's X-Timezone header, else settings

Usage in routers:
    from api.deps import get_reconciler, get_current_user

    @router.get("/schedule/{program_id}/missed")
    def missed(
        program_id: str,
        user_id: str = Depends(get_current_user),
        reconciler: MissedWorkoutReconciler = Depends(get_reconciler),
    ):
        return reconciler.missed_count(program_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_session_repo] = lambda: FakeSessionRepository()
"""

from functools import lru_cache, partial
from typing import Optional
from zoneinfo import ZoneInfoNotFoundError

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    ProgramExerciseRepository,
    ProgramGenerator,
    SessionRepository,
    UserProfileRepository,
)

# Concrete implementations
from infrastructure import (
    SupabaseProgramExerciseRepository,
    SupabaseSessionRepository,
    SupabaseUserProfileRepository,
)
from infrastructure.program_generator_client import ProgramGeneratorClient

from application.use_cases import ActivateProgramUseCase, RegenerateProgramUseCase
from backend.core.calendar_mapper import CalendarMapper
from backend.core.cycle_tracker import CycleTracker
from backend.core.missed_workout_reconciler import MissedWorkoutReconciler
from backend.core.progression_engine import ProgressionEngine
from backend.core.session_guard import ActiveSessionRegistry, default_registry
from backend.core.session_sequencer import SessionSequencer
from backend.settings import Settings, get_settings as _get_settings
from backend.auth import get_current_user as _get_current_user
from shared.local_dates import Clock, SystemClock


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_service_role_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_session_repo(
    client: Client = Depends(get_supabase_client_required),
) -> SessionRepository:
    """Get SessionRepository implementation."""
    return SupabaseSessionRepository(client)


def get_program_exercise_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProgramExerciseRepository:
    """Get ProgramExerciseRepository implementation."""
    return SupabaseProgramExerciseRepository(client)


def get_user_profile_repo(
    client: Client = Depends(get_supabase_client_required),
) -> UserProfileRepository:
    """Get UserProfileRepository implementation."""
    return SupabaseUserProfileRepository(client)


# =============================================================================
# Clock and Registry Providers
# =============================================================================


def get_clock(
    x_timezone: Optional[str] = Header(None, alias="X-Timezone"),
    settings: Settings = Depends(get_settings),
) -> Clock:
    """
    Clock for the caller's local calendar day.

    Uses the IANA name in X-Timezone when present, else default_timezone.

    Raises:
        HTTPException: 400 if the timezone is unknown
    """
    timezone_name = x_timezone or settings.default_timezone
    try:
        return SystemClock(timezone_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=400, detail=f"Unknown timezone '{timezone_name}'")


def get_session_registry() -> ActiveSessionRegistry:
    """Process-wide registry of sessions being logged."""
    return default_registry


# =============================================================================
# Service Providers
# =============================================================================


def get_calendar_mapper(clock: Clock = Depends(get_clock)) -> CalendarMapper:
    return CalendarMapper(clock)


def get_reconciler(
    session_repo: SessionRepository = Depends(get_session_repo),
    clock: Clock = Depends(get_clock),
    registry: ActiveSessionRegistry = Depends(get_session_registry),
) -> MissedWorkoutReconciler:
    """Get MissedWorkoutReconciler with injected repository, clock and registry."""
    return MissedWorkoutReconciler(session_repo, clock, registry)


def get_cycle_tracker(
    session_repo: SessionRepository = Depends(get_session_repo),
    profile_repo: UserProfileRepository = Depends(get_user_profile_repo),
    calendar_mapper: CalendarMapper = Depends(get_calendar_mapper),
    clock: Clock = Depends(get_clock),
) -> CycleTracker:
    """Get CycleTracker with injected repositories."""
    return CycleTracker(session_repo, profile_repo, calendar_mapper, clock)


def get_progression_engine(
    exercise_repo: ProgramExerciseRepository = Depends(get_program_exercise_repo),
) -> ProgressionEngine:
    """Get ProgressionEngine backed by the exercise slot repository."""
    return ProgressionEngine(exercise_repo)


def get_program_generator(
    settings: Settings = Depends(get_settings),
) -> ProgramGenerator:
    """Get the HTTP program generator client."""
    return ProgramGeneratorClient(
        settings.program_generator_url,
        service_token=settings.internal_service_token,
    )


def get_session_sequencer_factory(
    session_repo: SessionRepository = Depends(get_session_repo),
    progression_engine: ProgressionEngine = Depends(get_progression_engine),
    registry: ActiveSessionRegistry = Depends(get_session_registry),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    """
    Build SessionSequencer instances for in-process workout logging.

    Call the result with the workout (and per-session keyword arguments
    such as program_id or weight_unit).
    """
    return partial(
        SessionSequencer,
        session_repo=session_repo,
        progression_engine=progression_engine,
        registry=registry,
        clock=clock,
        default_rest_seconds=settings.default_rest_seconds,
    )


# =============================================================================
# Use Case Providers
# =============================================================================


def get_activate_program_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
    profile_repo: UserProfileRepository = Depends(get_user_profile_repo),
    calendar_mapper: CalendarMapper = Depends(get_calendar_mapper),
    cycle_tracker: CycleTracker = Depends(get_cycle_tracker),
    clock: Clock = Depends(get_clock),
) -> ActivateProgramUseCase:
    return ActivateProgramUseCase(
        session_repo=session_repo,
        profile_repo=profile_repo,
        calendar_mapper=calendar_mapper,
        cycle_tracker=cycle_tracker,
        clock=clock,
    )


def get_regenerate_program_use_case(
    generator: ProgramGenerator = Depends(get_program_generator),
    activate_program: ActivateProgramUseCase = Depends(get_activate_program_use_case),
    profile_repo: UserProfileRepository = Depends(get_user_profile_repo),
) -> RegenerateProgramUseCase:
    return RegenerateProgramUseCase(generator, activate_program, profile_repo)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(user_id: str = Depends(_get_current_user)) -> str:
    """
    Get the authenticated user ID.

    Wraps backend.auth.get_current_user (API key or Clerk JWT).

    Raises:
        HTTPException: 401 if not authenticated
    """
    return user_id


# =============================================================================
# Ownership Providers
# =============================================================================


def _owned_by_other(row, user_id: str) -> bool:
    owner = row.get("user_id")
    return owner is not None and owner != user_id


def require_program_owner(
    program_id: str,
    user_id: str = Depends(get_current_user),
    session_repo: SessionRepository = Depends(get_session_repo),
) -> str:
    """
    Resolve a program id the caller may act on.

    A program whose sessions belong to another user is reported as missing
    so ids cannot be guessed across accounts.

    Raises:
        HTTPException: 404 if the program belongs to another user
    """
    rows = session_repo.list_by_program(program_id, include_archived=True)
    if any(_owned_by_other(r, user_id) for r in rows):
        raise HTTPException(status_code=404, detail=f"Program {program_id} not found")
    return program_id


def require_session_owner(
    session_id: str,
    user_id: str = Depends(get_current_user),
    session_repo: SessionRepository = Depends(get_session_repo),
) -> str:
    """
    Resolve a session id the caller may act on.

    Raises:
        HTTPException: 404 if the session belongs to another user
    """
    row = session_repo.get_by_id(session_id)
    if row is not None and _owned_by_other(row, user_id):
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return session_id


__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_session_repo",
    "get_program_exercise_repo",
    "get_user_profile_repo",
    # Clock and registry
    "get_clock",
    "get_session_registry",
    # Services
    "get_calendar_mapper",
    "get_reconciler",
    "get_cycle_tracker",
    "get_progression_engine",
    "get_program_generator",
    "get_session_sequencer_factory",
    # Use cases
    "get_activate_program_use_case",
    "get_regenerate_program_use_case",
    # Authentication
    "get_current_user",
    # Ownership
    "require_program_owner",
    "require_session_owner",
]
