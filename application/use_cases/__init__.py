"""
Application Use Cases for the adaptive scheduling engine.

Part of AMA-613: Persist scheduled sessions
Part of AMA-617: Regenerate program at cycle end

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate core services and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import (
        ActivateProgramUseCase,
        ActivateProgramResult,
        RegenerateProgramUseCase,
        RegenerateProgramResult,
    )

    # Schedule and activate a program
    activate = ActivateProgramUseCase(
        session_repo=session_repo,
        profile_repo=profile_repo,
        calendar_mapper=mapper,
        cycle_tracker=tracker,
        clock=clock,
    )
    result = activate.execute("user-123", "program-1", workouts, selected_days=[1, 3, 5])

    # Generate a new program at cycle end
    regenerate = RegenerateProgramUseCase(generator, activate, profile_repo)
    result = await regenerate.execute("user-123")
"""

from application.use_cases.activate_program import (
    ActivateProgramResult,
    ActivateProgramUseCase,
)
from application.use_cases.regenerate_program import (
    RegenerateProgramResult,
    RegenerateProgramUseCase,
)

__all__ = [
    # ActivateProgram
    "ActivateProgramUseCase",
    "ActivateProgramResult",
    # RegenerateProgram
    "RegenerateProgramUseCase",
    "RegenerateProgramResult",
]
