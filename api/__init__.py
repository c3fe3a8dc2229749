"""
API package for the scheduling service.

Part of AMA-621: Scheduling API surface

This package contains:
- deps.py: FastAPI dependency providers for DI
- errors.py: Domain exception -> HTTP status mapping
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_session_repo,
    get_program_exercise_repo,
    get_user_profile_repo,
    get_clock,
    get_current_user,
)

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
    # Clock
    "get_clock",
    # Authentication
    "get_current_user",
]
