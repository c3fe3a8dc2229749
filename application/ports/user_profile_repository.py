"""
User Profile Repository Interface (Port).

Part of AMA-616: Seven-day cycle tracking

Profiles hold schedule preferences and the cycle counters.
"""
from typing import Protocol, Optional, Dict, Any


class UserProfileRepository(Protocol):
    """
    Abstract interface for user profile persistence.
    """

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a profile by user ID.

        Returns:
            Profile row if found, None otherwise
        """
        ...

    def update(self, user_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update fields of a profile.

        Returns:
            Updated row, or None if the profile does not exist
        """
        ...
