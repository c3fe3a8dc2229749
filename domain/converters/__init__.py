"""
Domain converters between repository rows and domain models.

Part of AMA-613: Persist scheduled sessions

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import db_row_to_session, session_to_db_row
    >>> session = db_row_to_session({"id": "s-1", "scheduled_date": "2026-03-02"})
    >>> session_to_db_row(session)["scheduled_date"]
    '2026-03-02'
"""

from domain.converters.db_converters import (
    db_row_to_exercise,
    db_row_to_profile,
    db_row_to_session,
    exercise_targets_to_db_row,
    profile_cycle_fields_to_db_row,
    session_to_db_row,
)

__all__ = [
    "db_row_to_session",
    "session_to_db_row",
    "db_row_to_exercise",
    "exercise_targets_to_db_row",
    "db_row_to_profile",
    "profile_cycle_fields_to_db_row",
]
