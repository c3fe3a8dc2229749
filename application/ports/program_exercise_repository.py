"""
Program Exercise Repository Interface (Port).

Part of AMA-614: Per-set progressive overload

Persistence for exercise slot targets and their append-only progression
event log.
"""
from typing import Protocol, Optional, List, Dict, Any


class ProgramExerciseRepository(Protocol):
    """
    Abstract interface for exercise slot persistence.
    """

    def get_by_id(self, exercise_slot_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an exercise slot by ID.

        Returns:
            Slot row if found, None otherwise
        """
        ...

    def update_targets(
        self,
        exercise_slot_id: str,
        data: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Update recommended_weight / reps_min / reps_max / version of a slot.

        Returns:
            Updated row, or None if not found
        """
        ...

    def append_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Append a progression event.

        Implementations must reject an event whose (exercise_slot_id, version)
        already exists, so two writers cannot silently clobber each other.

        Returns:
            Stored event row
        """
        ...

    def list_events(self, exercise_slot_id: str) -> List[Dict[str, Any]]:
        """
        List progression events of a slot ordered by version.
        """
        ...
