"""
Repository Interfaces (Ports) for the adaptive scheduling engine.

Part of AMA-613: Persist scheduled sessions

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SessionRepository

    class MissedWorkoutReconciler:
        def __init__(self, session_repo: SessionRepository, clock: Clock):
            self._session_repo = session_repo
"""

# Scheduled session persistence
from application.ports.session_repository import SessionRepository

# Exercise slot targets and progression events
from application.ports.program_exercise_repository import ProgramExerciseRepository

# User profiles and cycle counters
from application.ports.user_profile_repository import UserProfileRepository

# Program generation collaborator
from application.ports.program_generator import GeneratedProgram, ProgramGenerator

__all__ = [
    "SessionRepository",
    "ProgramExerciseRepository",
    "UserProfileRepository",
    "ProgramGenerator",
    "GeneratedProgram",
]
