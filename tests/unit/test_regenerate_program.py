"""
Unit tests for the RegenerateProgram use case.

Part of AMA-617: Regenerate program at cycle end
"""

from datetime import date

import pytest

from application.ports import GeneratedProgram
from application.use_cases import ActivateProgramUseCase, RegenerateProgramUseCase
from backend.core.cycle_tracker import CycleTracker
from infrastructure.program_generator_client import ProgramGeneratorUnavailable
from tests.fakes import FakeProgramGenerator, build_workout, profile_row


@pytest.fixture
def generator():
    return FakeProgramGenerator(
        GeneratedProgram(
            program_id="program-2",
            workouts=[
                build_workout("upper", day_of_week=1, name="Upper"),
                build_workout("lower", day_of_week=4, name="Lower"),
            ],
        )
    )


@pytest.fixture
def use_case(generator, session_repo, profile_repo, calendar_mapper, clock):
    tracker = CycleTracker(session_repo, profile_repo, calendar_mapper, clock)
    activate = ActivateProgramUseCase(session_repo, profile_repo, calendar_mapper, tracker, clock)
    return RegenerateProgramUseCase(generator, activate, profile_repo)


@pytest.fixture(autouse=True)
def active_profile(profile_repo):
    profile_repo.seed([
        profile_row(
            "user-1",
            days_per_week=2,
            selected_days=[1, 4],
            active_program_id="program-1",
            cycle_anchor_date="2025-03-03",
        )
    ])


@pytest.mark.unit
class TestRegenerateProgram:
    """Tests for RegenerateProgramUseCase.execute()."""

    @pytest.mark.asyncio
    async def test_generates_and_activates(self, use_case, generator, profile_repo):
        result = await use_case.execute("user-1", template="strength")

        assert result.success is True
        assert result.program_id == "program-2"
        assert len(result.sessions) == 7
        assert result.cycle_number == 2
        assert generator.calls == [("user-1", "strength")]
        assert profile_repo.get("user-1")["active_program_id"] == "program-2"

    @pytest.mark.asyncio
    async def test_start_date_passed_through(self, use_case, profile_repo):
        result = await use_case.execute("user-1", start_date=date(2025, 3, 17))

        assert result.sessions[0].scheduled_date == date(2025, 3, 17)
        assert profile_repo.get("user-1")["cycle_anchor_date"] == "2025-03-17"

    @pytest.mark.asyncio
    async def test_generator_failure_leaves_cycle_alone(self, use_case, generator, profile_repo, session_repo):
        generator.error = ProgramGeneratorUnavailable("connection refused")

        with pytest.raises(ProgramGeneratorUnavailable):
            await use_case.execute("user-1")

        stored = profile_repo.get("user-1")
        assert stored["active_program_id"] == "program-1"
        assert stored["cycle_number"] == 1
        assert session_repo.all() == []

    @pytest.mark.asyncio
    async def test_empty_program_rejected(self, use_case, generator, profile_repo):
        generator.program = GeneratedProgram(program_id="program-3", workouts=[])

        result = await use_case.execute("user-1")

        assert result.success is False
        assert result.validation_errors
        assert profile_repo.get("user-1")["active_program_id"] == "program-1"

    @pytest.mark.asyncio
    async def test_unknown_user(self, use_case, generator):
        result = await use_case.execute("ghost")

        assert result.success is False
        assert generator.calls == []
