"""
Unit tests for api/deps.py dependency providers.

Part of AMA-621: Scheduling API surface

These tests verify that the dependency providers are properly wired and
return the correct types. Uses mocks for external dependencies.
"""

import pytest
from unittest.mock import MagicMock, patch
from fastapi import HTTPException

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit


# =============================================================================
# Import Tests
# =============================================================================


class TestDepsImports:
    """Test that all dependency providers can be imported."""

    def test_import_from_api_package(self):
        """Providers are re-exported from the api package."""
        from api import (
            get_clock,
            get_current_user,
            get_session_repo,
            get_settings,
        )

        assert all([get_clock, get_current_user, get_session_repo, get_settings])


# =============================================================================
# Settings and Supabase Providers
# =============================================================================


class TestGetSettings:
    """Test get_settings provider."""

    def test_returns_settings_instance(self):
        from api.deps import get_settings
        from backend.settings import Settings

        assert isinstance(get_settings(), Settings)


class TestGetSupabaseClient:
    """Test Supabase client providers."""

    def test_returns_none_when_not_configured(self):
        from api.deps import get_supabase_client

        get_supabase_client.cache_clear()
        with patch("api.deps._get_settings") as mock_settings:
            mock_settings.return_value = MagicMock(
                supabase_url=None, supabase_service_role_key=None
            )
            assert get_supabase_client() is None
        get_supabase_client.cache_clear()

    def test_creates_client_when_configured(self):
        from api.deps import get_supabase_client

        get_supabase_client.cache_clear()
        with patch("api.deps._get_settings") as mock_settings:
            mock_settings.return_value = MagicMock(
                supabase_url="https://example.supabase.co",
                supabase_service_role_key="service-key",
            )
            with patch("api.deps.create_client") as mock_create:
                mock_create.return_value = MagicMock()
                client = get_supabase_client()

                mock_create.assert_called_once_with("https://example.supabase.co", "service-key")
                assert client is mock_create.return_value
        get_supabase_client.cache_clear()

    def test_required_raises_503_when_not_configured(self):
        from api.deps import get_supabase_client_required

        with patch("api.deps.get_supabase_client", return_value=None):
            with pytest.raises(HTTPException) as exc_info:
                get_supabase_client_required()

        assert exc_info.value.status_code == 503


# =============================================================================
# Repository Providers
# =============================================================================


class TestRepositoryProviders:
    """Repository providers wrap the Supabase client."""

    def test_session_repo(self):
        from api.deps import get_session_repo
        from infrastructure import SupabaseSessionRepository

        assert isinstance(get_session_repo(client=MagicMock()), SupabaseSessionRepository)

    def test_program_exercise_repo(self):
        from api.deps import get_program_exercise_repo
        from infrastructure import SupabaseProgramExerciseRepository

        repo = get_program_exercise_repo(client=MagicMock())
        assert isinstance(repo, SupabaseProgramExerciseRepository)

    def test_user_profile_repo(self):
        from api.deps import get_user_profile_repo
        from infrastructure import SupabaseUserProfileRepository

        assert isinstance(get_user_profile_repo(client=MagicMock()), SupabaseUserProfileRepository)


# =============================================================================
# Clock Provider
# =============================================================================


class TestGetClock:
    """The clock follows X-Timezone, else the configured default."""

    def test_header_timezone(self):
        from api.deps import get_clock
        from backend.settings import Settings
        from shared.local_dates import SystemClock

        clock = get_clock(x_timezone="Asia/Tokyo", settings=Settings(_env_file=None))

        assert isinstance(clock, SystemClock)
        assert str(clock.now().tzinfo) == "Asia/Tokyo"

    def test_default_timezone(self):
        from api.deps import get_clock
        from backend.settings import Settings

        settings = Settings(default_timezone="America/Chicago", _env_file=None)
        clock = get_clock(x_timezone=None, settings=settings)

        assert str(clock.now().tzinfo) == "America/Chicago"

    def test_unknown_timezone_400(self):
        from api.deps import get_clock
        from backend.settings import Settings

        with pytest.raises(HTTPException) as exc_info:
            get_clock(x_timezone="Mars/Olympus_Mons", settings=Settings(_env_file=None))

        assert exc_info.value.status_code == 400


# =============================================================================
# Service Providers
# =============================================================================


class TestServiceProviders:
    """Services are assembled from the injected collaborators."""

    def test_reconciler(self, session_repo, clock, registry):
        from api.deps import get_reconciler
        from backend.core.missed_workout_reconciler import MissedWorkoutReconciler

        reconciler = get_reconciler(session_repo=session_repo, clock=clock, registry=registry)

        assert isinstance(reconciler, MissedWorkoutReconciler)

    def test_cycle_tracker(self, session_repo, profile_repo, calendar_mapper, clock):
        from api.deps import get_cycle_tracker
        from backend.core.cycle_tracker import CycleTracker

        tracker = get_cycle_tracker(
            session_repo=session_repo,
            profile_repo=profile_repo,
            calendar_mapper=calendar_mapper,
            clock=clock,
        )

        assert isinstance(tracker, CycleTracker)

    def test_program_generator_uses_settings(self):
        from api.deps import get_program_generator
        from backend.settings import Settings
        from infrastructure.program_generator_client import ProgramGeneratorClient

        settings = Settings(program_generator_url="http://generator:9000/", _env_file=None)
        generator = get_program_generator(settings=settings)

        assert isinstance(generator, ProgramGeneratorClient)
        assert generator._base_url == "http://generator:9000"

    def test_session_sequencer_factory(self, session_repo, clock, registry):
        from api.deps import get_session_sequencer_factory
        from backend.core.progression_engine import ProgressionEngine
        from backend.core.session_sequencer import SessionSequencer
        from backend.settings import Settings
        from tests.fakes import build_workout

        factory = get_session_sequencer_factory(
            session_repo=session_repo,
            progression_engine=ProgressionEngine(),
            registry=registry,
            clock=clock,
            settings=Settings(default_rest_seconds=60, _env_file=None),
        )
        sequencer = factory(build_workout(), program_id="program-1")

        assert isinstance(sequencer, SessionSequencer)
        assert sequencer._default_rest == 60
        assert sequencer._session_repo is session_repo

    def test_session_registry_is_process_wide(self):
        from api.deps import get_session_registry

        assert get_session_registry() is get_session_registry()


# =============================================================================
# Authentication Provider Tests
# =============================================================================


class TestAuthProviders:
    """Test authentication provider functions."""

    @pytest.mark.asyncio
    async def test_get_current_user_passes_through(self):
        """get_current_user returns the user resolved by backend.auth."""
        from api.deps import get_current_user

        assert await get_current_user(user_id="user_123") == "user_123"
