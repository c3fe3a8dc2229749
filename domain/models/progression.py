"""
Set logs and progression events.

Part of AMA-614: Per-set progressive overload

SetLogEntry lives only for the duration of a session. ProgressionEvent is the
durable record of a target change; the current target of a slot is the fold
of its events over the original prescription.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass
class SetLogEntry:
    """One logged set. Weights are in pounds."""

    exercise_slot_id: str
    set_number: int
    actual_reps: Optional[int] = None
    actual_duration_seconds: Optional[int] = None
    actual_weight: Optional[float] = None
    rir: Optional[int] = None


@dataclass
class ProgressionEvent:
    """A versioned change to an exercise slot's targets."""

    exercise_slot_id: str
    version: int
    reason: str
    previous_weight: Optional[float] = None
    new_weight: Optional[float] = None
    previous_reps_min: Optional[int] = None
    new_reps_min: Optional[int] = None
    previous_reps_max: Optional[int] = None
    new_reps_max: Optional[int] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a repository row."""
        return {
            "exercise_slot_id": self.exercise_slot_id,
            "version": self.version,
            "reason": self.reason,
            "previous_weight": self.previous_weight,
            "new_weight": self.new_weight,
            "previous_reps_min": self.previous_reps_min,
            "new_reps_min": self.new_reps_min,
            "previous_reps_max": self.previous_reps_max,
            "new_reps_max": self.new_reps_max,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "ProgressionEvent":
        created_at = row.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        return cls(
            exercise_slot_id=row["exercise_slot_id"],
            version=int(row["version"]),
            reason=row.get("reason", ""),
            previous_weight=row.get("previous_weight"),
            new_weight=row.get("new_weight"),
            previous_reps_min=row.get("previous_reps_min"),
            new_reps_min=row.get("new_reps_min"),
            previous_reps_max=row.get("previous_reps_max"),
            new_reps_max=row.get("new_reps_max"),
            created_at=created_at or datetime.now(timezone.utc),
        )
