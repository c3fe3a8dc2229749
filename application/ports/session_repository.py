"""
Session Repository Interface (Port).

Part of AMA-613: Persist scheduled sessions

This module defines the abstract interface for WorkoutSession persistence.
Writes are atomic per record; the core never needs cross-record transactions.
"""
from typing import Protocol, Optional, List, Dict, Any


class SessionRepository(Protocol):
    """
    Abstract interface for scheduled session persistence.

    Rows are plain dictionaries in the workout_sessions shape
    (see domain.converters.db_converters); dates are YYYY-MM-DD strings.
    """

    def get_by_id(self, session_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a session by ID.

        Args:
            session_id: Session UUID

        Returns:
            Session row if found, None otherwise
        """
        ...

    def list_by_program(
        self,
        program_id: str,
        *,
        include_archived: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        List sessions of a program ordered by scheduled_date.

        Args:
            program_id: Program UUID
            include_archived: Include sessions with status 'archived'

        Returns:
            List of session rows
        """
        ...

    def list_in_range(
        self,
        program_id: str,
        start_date: str,
        end_date: str,
    ) -> List[Dict[str, Any]]:
        """
        List all sessions (archived included) with start <= scheduled_date <= end.

        Args:
            program_id: Program UUID
            start_date: First day, YYYY-MM-DD
            end_date: Last day, YYYY-MM-DD

        Returns:
            List of session rows ordered by scheduled_date
        """
        ...

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create one session.

        Args:
            data: Session row without ID

        Returns:
            Created row with generated ID

        Raises:
            Exception: Storage or network failure
        """
        ...

    def create_many(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Create a batch of sessions in one insert.

        Args:
            rows: Session rows without IDs

        Returns:
            Created rows with generated IDs, in input order
        """
        ...

    def update(self, session_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update fields of a session.

        Args:
            session_id: Session UUID
            data: Fields to change

        Returns:
            Updated row, or None if not found
        """
        ...
