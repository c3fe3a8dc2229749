"""
Tests for the progression router.

Part of AMA-614: Per-set progressive overload
"""

import pytest

from domain.models import ProgressionEvent
from tests.fakes import build_exercise


@pytest.fixture
def bench_slot(exercise_repo):
    exercise_repo.seed([build_exercise("bench").model_dump()])
    exercise_repo.append_event(
        ProgressionEvent(
            exercise_slot_id="bench",
            version=1,
            reason="11 reps above target maximum 10",
            previous_weight=100.0,
            new_weight=105.0,
        ).to_dict()
    )


@pytest.mark.unit
class TestSlotTarget:
    """GET /progression/slots/{exercise_slot_id}"""

    def test_target_folds_pending_events(self, api_client, bench_slot):
        response = api_client.get("/progression/slots/bench")

        assert response.status_code == 200
        body = response.json()
        assert body["recommended_weight"] == 105.0
        assert body["weight_unit"] == "lb"
        assert body["version"] == 1
        assert body["kind"] == "weighted"

    def test_metric_display(self, api_client, bench_slot):
        response = api_client.get("/progression/slots/bench", params={"units": "metric"})

        body = response.json()
        assert body["weight_unit"] == "kg"
        assert body["recommended_weight"] == pytest.approx(47.63)

    def test_unknown_slot_404(self, api_client):
        response = api_client.get("/progression/slots/missing")

        assert response.status_code == 404


@pytest.mark.unit
class TestSlotHistory:
    """GET /progression/slots/{exercise_slot_id}/events"""

    def test_history(self, api_client, bench_slot):
        response = api_client.get("/progression/slots/bench/events")

        assert response.status_code == 200
        events = response.json()["events"]
        assert len(events) == 1
        assert events[0]["version"] == 1
        assert events[0]["previous_weight"] == 100.0
        assert events[0]["new_weight"] == 105.0
        assert events[0]["created_at"] is not None

    def test_empty_history(self, api_client):
        response = api_client.get("/progression/slots/bench/events")

        assert response.json() == {"exercise_slot_id": "bench", "events": []}
