"""
Pytest fixtures shared across the scheduling engine tests.

Part of AMA-612: Adaptive scheduling test scaffold
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from api.deps import (
    get_clock,
    get_current_user,
    get_program_exercise_repo,
    get_program_generator,
    get_session_registry,
    get_session_repo,
    get_settings,
    get_user_profile_repo,
)
from application.ports import GeneratedProgram
from backend.core.calendar_mapper import CalendarMapper
from backend.core.session_guard import ActiveSessionRegistry
from backend.main import create_app
from backend.settings import Settings
from shared.local_dates import FixedClock
from tests.fakes import (
    FakeProgramExerciseRepository,
    FakeProgramGenerator,
    FakeSessionRepository,
    FakeUserProfileRepository,
    build_workout,
)

# Monday
TODAY = date(2025, 3, 10)
TEST_USER_ID = "user-1"


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to Monday 2025-03-10."""
    return FixedClock(TODAY)


@pytest.fixture
def session_repo() -> FakeSessionRepository:
    return FakeSessionRepository()


@pytest.fixture
def exercise_repo() -> FakeProgramExerciseRepository:
    return FakeProgramExerciseRepository()


@pytest.fixture
def profile_repo() -> FakeUserProfileRepository:
    return FakeUserProfileRepository()


@pytest.fixture
def registry() -> ActiveSessionRegistry:
    return ActiveSessionRegistry()


@pytest.fixture
def calendar_mapper(clock) -> CalendarMapper:
    return CalendarMapper(clock)


@pytest.fixture
def program_generator() -> FakeProgramGenerator:
    return FakeProgramGenerator(
        GeneratedProgram(
            program_id="program-2",
            workouts=[
                build_workout("upper", day_of_week=1, name="Upper"),
                build_workout("lower", day_of_week=4, name="Lower"),
            ],
        )
    )


# =============================================================================
# API client
# =============================================================================


async def _mock_current_user() -> str:
    return TEST_USER_ID


@pytest.fixture
def api_client(
    session_repo, exercise_repo, profile_repo, registry, clock, program_generator
) -> TestClient:
    """
    TestClient on the real app with auth and storage replaced by fakes.

    Services (reconciler, cycle tracker, use cases) are built by the real
    providers on top of the overridden repositories and clock.
    """
    settings = Settings(environment="test", _env_file=None)
    app = create_app(settings=settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_current_user] = _mock_current_user
    app.dependency_overrides[get_session_repo] = lambda: session_repo
    app.dependency_overrides[get_program_exercise_repo] = lambda: exercise_repo
    app.dependency_overrides[get_user_profile_repo] = lambda: profile_repo
    app.dependency_overrides[get_session_registry] = lambda: registry
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_program_generator] = lambda: program_generator
    return TestClient(app)
