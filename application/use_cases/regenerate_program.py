"""
RegenerateProgram Use Case.

Part of AMA-617: Regenerate program at cycle end

The "generate new program" branch of the cycle-complete prompt: ask the
generator for a fresh program, then activate it. Activation closes the
finished cycle (cycle number +1, completed workouts carried into the total).
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from application.ports import ProgramGenerator, UserProfileRepository
from application.use_cases.activate_program import ActivateProgramUseCase
from domain.converters import db_row_to_profile
from domain.models import WorkoutSession

logger = logging.getLogger(__name__)


@dataclass
class RegenerateProgramResult:
    """Result of the RegenerateProgram use case execution."""

    success: bool
    program_id: Optional[str] = None
    sessions: List[WorkoutSession] = field(default_factory=list)
    cycle_number: Optional[int] = None
    total_workouts_completed: Optional[int] = None
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)


class RegenerateProgramUseCase:
    """
    Use case for replacing the active program with a generated one.

    Usage:
        >>> use_case = RegenerateProgramUseCase(generator, activate_use_case, profile_repo)
        >>> result = await use_case.execute("user-1")
    """

    def __init__(
        self,
        generator: ProgramGenerator,
        activate_program: ActivateProgramUseCase,
        profile_repo: UserProfileRepository,
    ) -> None:
        self._generator = generator
        self._activate_program = activate_program
        self._profile_repo = profile_repo

    async def execute(
        self,
        user_id: str,
        *,
        template: Optional[str] = None,
        start_date: Optional[date] = None,
    ) -> RegenerateProgramResult:
        """
        Generate and activate a new program.

        Generator failures propagate; the current program and cycle are
        left untouched in that case.
        """
        row = self._profile_repo.get(user_id)
        if row is None:
            return RegenerateProgramResult(
                success=False, error=f"Profile for user {user_id} not found"
            )
        profile = db_row_to_profile(row)

        generated = await self._generator.generate_program(profile, template)
        logger.info(
            "Generated program %s (%d workouts) for user %s",
            generated.program_id,
            len(generated.workouts),
            user_id,
        )

        activation = self._activate_program.execute(
            user_id,
            generated.program_id,
            generated.workouts,
            start_date=start_date,
        )
        return RegenerateProgramResult(
            success=activation.success,
            program_id=generated.program_id,
            sessions=activation.sessions,
            cycle_number=activation.cycle_number,
            total_workouts_completed=activation.total_workouts_completed,
            error=activation.error,
            validation_errors=activation.validation_errors,
        )
