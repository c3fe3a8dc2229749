"""
Supabase Program Exercise Repository Implementation.

Part of AMA-614: Per-set progressive overload

Exercise slot targets live in program_exercises; every progression change
is appended to progression_events, which carries a unique constraint on
(exercise_slot_id, version).
"""
from typing import Optional, List, Dict, Any
import logging

from supabase import Client

logger = logging.getLogger(__name__)

EXERCISES_TABLE = "program_exercises"
EVENTS_TABLE = "progression_events"

TARGET_FIELDS = ("recommended_weight", "reps_min", "reps_max", "version")


class SupabaseProgramExerciseRepository:
    """
    Supabase implementation of ProgramExerciseRepository.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get_by_id(self, exercise_slot_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table(EXERCISES_TABLE) \
                .select("*") \
                .eq("id", exercise_slot_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error fetching exercise slot {exercise_slot_id}: {e}")
            return None

    def update_targets(
        self,
        exercise_slot_id: str,
        data: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        payload = {k: v for k, v in data.items() if k in TARGET_FIELDS}
        query = self._client.table(EXERCISES_TABLE) \
            .update(payload) \
            .eq("id", exercise_slot_id)
        if "version" in payload:
            # Never move a slot backwards past a newer version
            query = query.lt("version", payload["version"])
        result = query.execute()
        return result.data[0] if result.data else None

    def append_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        # Duplicate (exercise_slot_id, version) fails on the unique constraint
        result = self._client.table(EVENTS_TABLE).insert(event).execute()
        if not result.data:
            raise RuntimeError("Progression event insert returned no rows")
        return result.data[0]

    def list_events(self, exercise_slot_id: str) -> List[Dict[str, Any]]:
        try:
            result = self._client.table(EVENTS_TABLE) \
                .select("*") \
                .eq("exercise_slot_id", exercise_slot_id) \
                .order("version") \
                .execute()
            return result.data or []
        except Exception as e:
            logger.exception(f"Error listing progression events for {exercise_slot_id}: {e}")
            return []
