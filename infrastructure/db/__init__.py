"""
Infrastructure Database Layer.

Part of AMA-613: Persist scheduled sessions

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseSessionRepository,
        SupabaseProgramExerciseRepository,
        SupabaseUserProfileRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    session_repo = SupabaseSessionRepository(client)
    exercise_repo = SupabaseProgramExerciseRepository(client)
    profile_repo = SupabaseUserProfileRepository(client)
"""

from infrastructure.db.session_repository import SupabaseSessionRepository
from infrastructure.db.program_exercise_repository import SupabaseProgramExerciseRepository
from infrastructure.db.profile_repository import SupabaseUserProfileRepository

__all__ = [
    # Scheduled sessions
    "SupabaseSessionRepository",

    # Exercise slot targets and progression events (AMA-614)
    "SupabaseProgramExerciseRepository",

    # Profiles and cycle counters (AMA-616)
    "SupabaseUserProfileRepository",
]
