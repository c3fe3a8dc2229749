"""
Program Generator Interface (Port).

Part of AMA-617: Regenerate program at cycle end

The generator is an opaque collaborator (AI-backed in production); the
scheduling engine only consumes the resulting workout list.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from domain.models import ProgramWorkout, UserProfile


@dataclass
class GeneratedProgram:
    """Structured result of program generation."""
    program_id: str
    workouts: List[ProgramWorkout]
    duration_weeks: int = 4
    weekly_structure: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class ProgramGenerator(Protocol):
    """
    Abstract interface for program generation.
    """

    async def generate_program(
        self,
        profile: UserProfile,
        template: Optional[str] = None,
    ) -> GeneratedProgram:
        """
        Generate a program for the given profile.

        Args:
            profile: User profile (equipment, days per week, ...)
            template: Optional template identifier

        Returns:
            GeneratedProgram with ordered ProgramWorkouts
        """
        ...
