"""
Unit tests for backend/core/calendar_mapper.py

Part of AMA-613: Persist scheduled sessions

Tests cover:
- Weekday selection -> workout and rest days over a 7-day window
- Workout rotation across days and windows
- Explicit dates repeating week over week
- Configuration validation (nothing materialized on error)
"""

from datetime import date, timedelta

import pytest

from application.exceptions import ConfigurationError
from backend.core.calendar_mapper import CalendarMapper, iso_weekday
from domain.models import SessionType
from shared.local_dates import FixedClock
from tests.fakes import build_workout

MONDAY = date(2025, 3, 10)


@pytest.fixture
def mapper() -> CalendarMapper:
    return CalendarMapper(FixedClock(MONDAY))


@pytest.fixture
def workouts():
    return [
        build_workout("workout-a", day_of_week=1, name="Push"),
        build_workout("workout-b", day_of_week=3, name="Pull"),
        build_workout("workout-c", day_of_week=5, name="Legs"),
    ]


@pytest.mark.unit
class TestWeekdaySchedule:
    """Selected weekdays become workout days, everything else rest."""

    def test_mon_wed_fri_yields_three_workouts_and_four_rests(self, mapper, workouts):
        sessions = mapper.materialize("p1", workouts, 3, [1, 3, 5])

        assert len(sessions) == 7
        workout_days = [s for s in sessions if s.session_type == SessionType.WORKOUT]
        rest_days = [s for s in sessions if s.session_type == SessionType.REST]
        assert [s.scheduled_date for s in workout_days] == [
            date(2025, 3, 10),
            date(2025, 3, 12),
            date(2025, 3, 14),
        ]
        assert len(rest_days) == 4
        assert all(s.workout_name == "Rest Day" for s in rest_days)
        assert all(s.program_workout_id is None for s in rest_days)

    def test_workouts_assigned_in_program_order(self, mapper, workouts):
        sessions = mapper.materialize("p1", workouts, 3, [1, 3, 5])

        names = [s.workout_name for s in sessions if s.session_type == SessionType.WORKOUT]
        assert names == ["Push", "Pull", "Legs"]

    def test_one_session_per_day_in_date_order(self, mapper, workouts):
        sessions = mapper.materialize("p1", workouts, 3, [2, 4, 6])

        dates = [s.scheduled_date for s in sessions]
        assert dates == [MONDAY + timedelta(days=i) for i in range(7)]

    def test_sessions_start_pending(self, mapper, workouts):
        sessions = mapper.materialize("p1", workouts, 3, [1, 3, 5])

        assert all(s.status is None for s in sessions)
        assert not any(s.completed for s in sessions)
        assert all(s.program_id == "p1" for s in sessions)

    def test_selected_weekdays_map_to_iso_weekdays(self, mapper, workouts):
        sessions = mapper.materialize("p1", workouts, 3, [5, 6, 7])

        weekdays = [
            iso_weekday(s.scheduled_date)
            for s in sessions
            if s.session_type == SessionType.WORKOUT
        ]
        assert weekdays == [5, 6, 7]

    def test_start_date_mid_week_wraps_window(self, mapper, workouts):
        thursday = date(2025, 3, 13)
        sessions = mapper.materialize("p1", workouts, 3, [1, 3, 5], start_date=thursday)

        workout_dates = [
            s.scheduled_date for s in sessions if s.session_type == SessionType.WORKOUT
        ]
        # Fri 14, Mon 17, Wed 19
        assert workout_dates == [date(2025, 3, 14), date(2025, 3, 17), date(2025, 3, 19)]


@pytest.mark.unit
class TestRotation:
    """Workouts repeat in order when there are more days than workouts."""

    def test_fewer_workouts_than_days_rotates(self, mapper, workouts):
        sessions = mapper.materialize("p1", workouts[:2], 3, [1, 3, 5])

        names = [s.workout_name for s in sessions if s.session_type == SessionType.WORKOUT]
        assert names == ["Push", "Pull", "Push"]

    def test_rotation_continues_across_weeks(self, mapper, workouts):
        sessions = mapper.materialize("p1", workouts[:2], 3, [1, 3, 5], weeks=2)

        assert len(sessions) == 14
        names = [s.workout_name for s in sessions if s.session_type == SessionType.WORKOUT]
        assert names == ["Push", "Pull", "Push", "Pull", "Push", "Pull"]

    def test_workout_offset_starts_rotation_later(self, mapper, workouts):
        sessions = mapper.materialize("p1", workouts, 3, [1, 3, 5], workout_offset=1)

        names = [s.workout_name for s in sessions if s.session_type == SessionType.WORKOUT]
        assert names == ["Pull", "Legs", "Push"]


@pytest.mark.unit
class TestExplicitDates:
    """Explicit dates in the first window repeat at the same offsets."""

    def test_explicit_dates_repeat_weekly(self, mapper, workouts):
        first = [date(2025, 3, 11), date(2025, 3, 13)]
        sessions = mapper.materialize(
            "p1", workouts, 2, explicit_dates=first, weeks=2
        )

        workout_dates = [
            s.scheduled_date for s in sessions if s.session_type == SessionType.WORKOUT
        ]
        assert workout_dates == [
            date(2025, 3, 11),
            date(2025, 3, 13),
            date(2025, 3, 18),
            date(2025, 3, 20),
        ]
        assert sessions[0].scheduled_date == date(2025, 3, 11)

    def test_explicit_date_outside_first_window_rejected(self, mapper, workouts):
        with pytest.raises(ConfigurationError):
            mapper.materialize(
                "p1",
                workouts,
                2,
                explicit_dates=[date(2025, 3, 10), date(2025, 3, 20)],
            )


@pytest.mark.unit
class TestValidation:
    """Invalid configuration raises before anything is built."""

    def test_zero_days_per_week(self, mapper, workouts):
        with pytest.raises(ConfigurationError) as exc_info:
            mapper.materialize("p1", workouts, 0, [])
        assert any("at least 1" in e for e in exc_info.value.errors)

    def test_more_than_seven_days(self, mapper, workouts):
        with pytest.raises(ConfigurationError):
            mapper.materialize("p1", workouts, 8, [1, 2, 3, 4, 5, 6, 7, 1])

    def test_count_mismatch(self, mapper, workouts):
        with pytest.raises(ConfigurationError) as exc_info:
            mapper.materialize("p1", workouts, 3, [1, 3])
        assert any("days_per_week is 3" in e for e in exc_info.value.errors)

    def test_invalid_weekday(self, mapper, workouts):
        with pytest.raises(ConfigurationError) as exc_info:
            mapper.materialize("p1", workouts, 3, [0, 3, 8])
        assert any("Invalid weekdays" in e for e in exc_info.value.errors)

    def test_duplicate_weekdays(self, mapper, workouts):
        with pytest.raises(ConfigurationError) as exc_info:
            mapper.materialize("p1", workouts, 3, [1, 1, 5])
        assert any("Duplicate" in e for e in exc_info.value.errors)

    def test_no_workouts(self, mapper):
        with pytest.raises(ConfigurationError) as exc_info:
            mapper.materialize("p1", [], 3, [1, 3, 5])
        assert any("no workouts" in e for e in exc_info.value.errors)

    def test_all_problems_reported_together(self, mapper):
        with pytest.raises(ConfigurationError) as exc_info:
            mapper.materialize("p1", [], 3, [1, 1])
        assert len(exc_info.value.errors) >= 3

    def test_zero_weeks_rejected(self, mapper, workouts):
        with pytest.raises(ConfigurationError):
            mapper.materialize("p1", workouts, 3, [1, 3, 5], weeks=0)
