"""
Supabase Session Repository Implementation.

Part of AMA-613: Persist scheduled sessions

This module implements the SessionRepository protocol using Supabase.
Sessions live in the workout_sessions table, one row per calendar day
of a program.
"""
from typing import Optional, List, Dict, Any
import logging

from supabase import Client

logger = logging.getLogger(__name__)

TABLE = "workout_sessions"


class SupabaseSessionRepository:
    """
    Supabase implementation of SessionRepository.

    Reads log and degrade to empty results; writes raise so callers
    (sequencer, reconciler) can decide how to surface the failure.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get_by_id(self, session_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("id", session_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error fetching session {session_id}: {e}")
            return None

    def list_by_program(
        self,
        program_id: str,
        *,
        include_archived: bool = False,
    ) -> List[Dict[str, Any]]:
        try:
            query = self._client.table(TABLE) \
                .select("*") \
                .eq("program_id", program_id)
            if not include_archived:
                # NULL status is pending; neq alone would drop those rows
                query = query.or_("status.is.null,status.neq.archived")
            result = query.order("scheduled_date").execute()
            return result.data or []
        except Exception as e:
            logger.exception(f"Error listing sessions for program {program_id}: {e}")
            return []

    def list_in_range(
        self,
        program_id: str,
        start_date: str,
        end_date: str,
    ) -> List[Dict[str, Any]]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("program_id", program_id) \
                .gte("scheduled_date", start_date) \
                .lte("scheduled_date", end_date) \
                .order("scheduled_date") \
                .execute()
            return result.data or []
        except Exception as e:
            logger.exception(
                f"Error listing sessions {start_date}..{end_date} for program {program_id}: {e}"
            )
            return []

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        result = self._client.table(TABLE).insert(data).execute()
        if not result.data:
            raise RuntimeError("Session insert returned no rows")
        return result.data[0]

    def create_many(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not rows:
            return []
        result = self._client.table(TABLE).insert(rows).execute()
        return result.data or []

    def update(self, session_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        result = self._client.table(TABLE) \
            .update(data) \
            .eq("id", session_id) \
            .execute()
        return result.data[0] if result.data else None
