"""
Infrastructure Layer for the adaptive workout scheduling engine.

Part of AMA-613: Persist scheduled sessions

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
- program_generator_client: HTTP client for the program generation service
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseSessionRepository,
    SupabaseProgramExerciseRepository,
    SupabaseUserProfileRepository,
)

__all__ = [
    "SupabaseSessionRepository",
    "SupabaseProgramExerciseRepository",
    "SupabaseUserProfileRepository",
]
