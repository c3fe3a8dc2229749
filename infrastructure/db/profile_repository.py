"""
Supabase User Profile Repository Implementation.

Part of AMA-616: Seven-day cycle tracking

Profiles hold schedule preferences (days per week, selected weekdays) and
the cycle counters owned by the cycle tracker.
"""
from typing import Optional, Dict, Any
import logging

from supabase import Client

logger = logging.getLogger(__name__)

TABLE = "profiles"


class SupabaseUserProfileRepository:
    """
    Supabase implementation of UserProfileRepository.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error fetching profile for {user_id}: {e}")
            return None

    def update(self, user_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        result = self._client.table(TABLE) \
            .update(data) \
            .eq("user_id", user_id) \
            .execute()
        return result.data[0] if result.data else None
