"""
Fake Session Repository for Testing.

Part of AMA-613: Persist scheduled sessions

In-memory implementation of SessionRepository for fast, isolated testing.
"""
from typing import Any, Callable, Dict, List, Optional
import copy


class FakeSessionRepository:
    """
    In-memory fake implementation of SessionRepository.

    Rows are copied on the way in and out so callers cannot mutate storage
    behind the repository's back.

    Test hooks:
        create_error: raised by create() / create_many() when set
        after_list: called after every list_by_program(), e.g. to simulate
                    a session being completed while reconciliation runs
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._sessions: Dict[str, Dict[str, Any]] = {}
        self._next_id = 1
        self.create_error: Optional[Exception] = None
        self.after_list: Optional[Callable[["FakeSessionRepository"], None]] = None
        self.update_calls: List[Dict[str, Any]] = []

    def reset(self) -> None:
        """Clear all stored data."""
        self._sessions.clear()
        self._next_id = 1
        self.create_error = None
        self.after_list = None
        self.update_calls.clear()

    def seed(self, sessions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Seed the repository with session rows.

        Rows without an id get one; missing optional fields get defaults.

        Returns:
            The stored rows
        """
        return [self._store(row) for row in sessions]

    def all(self) -> List[Dict[str, Any]]:
        """All rows (archived included) ordered by scheduled_date."""
        return sorted(
            (copy.deepcopy(r) for r in self._sessions.values()),
            key=lambda r: r["scheduled_date"],
        )

    def force_update(self, session_id: str, data: Dict[str, Any]) -> None:
        """Change a row without recording an update call (simulates another writer)."""
        self._sessions[session_id].update(data)

    def _store(self, data: Dict[str, Any]) -> Dict[str, Any]:
        row = {
            "user_id": None,
            "program_id": None,
            "program_workout_id": None,
            "session_type": "workout",
            "session_date": None,
            "status": None,
            "completed": 0,
            "workout_name": None,
            "movement_patterns": [],
            "duration_minutes": None,
            "calories": None,
            "notes": None,
            **copy.deepcopy(data),
        }
        if not row.get("id"):
            row["id"] = f"session-{self._next_id}"
            self._next_id += 1
        self._sessions[row["id"]] = row
        return copy.deepcopy(row)

    # -------------------------------------------------------------------------
    # SessionRepository protocol
    # -------------------------------------------------------------------------

    def get_by_id(self, session_id: str) -> Optional[Dict[str, Any]]:
        row = self._sessions.get(session_id)
        return copy.deepcopy(row) if row else None

    def list_by_program(
        self,
        program_id: str,
        *,
        include_archived: bool = False,
    ) -> List[Dict[str, Any]]:
        rows = [
            r for r in self.all()
            if r["program_id"] == program_id
            and (include_archived or r.get("status") != "archived")
        ]
        if self.after_list is not None:
            hook, self.after_list = self.after_list, None
            hook(self)
        return rows

    def list_in_range(
        self,
        program_id: str,
        start_date: str,
        end_date: str,
    ) -> List[Dict[str, Any]]:
        return [
            r for r in self.all()
            if r["program_id"] == program_id
            and start_date <= r["scheduled_date"] <= end_date
        ]

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if self.create_error is not None:
            raise self.create_error
        return self._store(data)

    def create_many(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if self.create_error is not None:
            raise self.create_error
        return [self._store(r) for r in rows]

    def update(self, session_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.update_calls.append({"id": session_id, **copy.deepcopy(data)})
        row = self._sessions.get(session_id)
        if row is None:
            return None
        row.update(copy.deepcopy(data))
        return copy.deepcopy(row)
