"""
Tests for fake repository implementations.

Part of AMA-613: Persist scheduled sessions

The fakes stand in for Supabase across the suite, so their behaviour
has to match what the services expect of the real tables.
"""
from datetime import date

import pytest

from tests.fakes import (
    FakeProgramExerciseRepository,
    FakeSessionRepository,
    FakeUserProfileRepository,
    profile_row,
    session_row,
)

pytestmark = pytest.mark.unit


class TestFakeSessionRepository:
    """In-memory workout_sessions."""

    def test_seed_assigns_ids_and_defaults(self):
        repo = FakeSessionRepository()

        stored = repo.seed([session_row("p-1", date(2025, 3, 10))])

        assert stored[0]["id"] == "session-1"
        assert stored[0]["notes"] is None

    def test_rows_are_copied(self):
        repo = FakeSessionRepository()
        stored = repo.seed([session_row("p-1", date(2025, 3, 10), session_id="s-1")])

        stored[0]["status"] = "complete"

        assert repo.get_by_id("s-1")["status"] is None

    def test_list_excludes_archived(self):
        repo = FakeSessionRepository()
        repo.seed([
            session_row("p-1", date(2025, 3, 10)),
            session_row("p-1", date(2025, 3, 3), status="archived"),
            session_row("p-2", date(2025, 3, 11)),
        ])

        assert len(repo.list_by_program("p-1")) == 1
        assert len(repo.list_by_program("p-1", include_archived=True)) == 2

    def test_list_in_range_inclusive(self):
        repo = FakeSessionRepository()
        repo.seed([
            session_row("p-1", date(2025, 3, 10)),
            session_row("p-1", date(2025, 3, 16)),
            session_row("p-1", date(2025, 3, 17)),
        ])

        rows = repo.list_in_range("p-1", "2025-03-10", "2025-03-16")

        assert [r["scheduled_date"] for r in rows] == ["2025-03-10", "2025-03-16"]

    def test_create_error_hook(self):
        repo = FakeSessionRepository()
        repo.create_error = ConnectionError("down")

        with pytest.raises(ConnectionError):
            repo.create_many([session_row("p-1", date(2025, 3, 10))])

    def test_after_list_hook_runs_once(self):
        repo = FakeSessionRepository()
        repo.seed([session_row("p-1", date(2025, 3, 10), session_id="s-1")])
        repo.after_list = lambda r: r.force_update("s-1", {"status": "complete"})

        first = repo.list_by_program("p-1")
        second = repo.list_by_program("p-1")

        assert first[0]["status"] is None
        assert second[0]["status"] == "complete"
        assert repo.update_calls == []

    def test_update_unknown_returns_none(self):
        assert FakeSessionRepository().update("ghost", {"status": "skipped"}) is None


class TestFakeProgramExerciseRepository:
    """In-memory program_exercises and progression_events."""

    def test_duplicate_version_rejected(self):
        repo = FakeProgramExerciseRepository()
        repo.append_event({"exercise_slot_id": "bench", "version": 1})

        with pytest.raises(ValueError):
            repo.append_event({"exercise_slot_id": "bench", "version": 1})

    def test_update_targets_ignores_older_versions(self):
        repo = FakeProgramExerciseRepository()
        repo.seed([{"id": "bench", "recommended_weight": 100.0, "version": 2}])

        assert repo.update_targets("bench", {"recommended_weight": 90.0, "version": 1}) is None
        assert repo.get_by_id("bench")["recommended_weight"] == 100.0

    def test_fail_writes(self):
        repo = FakeProgramExerciseRepository()
        repo.seed([{"id": "bench"}])
        repo.fail_writes = True

        with pytest.raises(ConnectionError):
            repo.update_targets("bench", {"version": 1})
        assert repo.get_by_id("bench")["version"] == 0

    def test_events_sorted_by_version(self):
        repo = FakeProgramExerciseRepository()
        repo.append_event({"exercise_slot_id": "bench", "version": 2})
        repo.append_event({"exercise_slot_id": "bench", "version": 1})

        assert [e["version"] for e in repo.list_events("bench")] == [1, 2]
        assert repo.list_events("other") == []


class TestFakeUserProfileRepository:
    """In-memory profiles."""

    def test_update_and_reset(self):
        repo = FakeUserProfileRepository()
        repo.seed([profile_row("user-1")])

        repo.update("user-1", {"cycle_number": 2})
        assert repo.get("user-1")["cycle_number"] == 2

        repo.reset()
        assert repo.get("user-1") is None
