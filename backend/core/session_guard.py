"""
Registry of sessions currently being logged.

Part of AMA-619: Missed workout reconciliation

Reconciliation and live-session mutation are mutually exclusive phases keyed
by session id: a sequencer holds its session id while the workout is live and
reconciliation defers while any session of the program is held.

A hold older than `max_age_seconds` is treated as abandoned (the client went
away without finishing or abandoning the workout) and dropped on the next read.
"""

import logging
import threading
import time
from typing import Callable, Dict, Iterable

logger = logging.getLogger(__name__)

# Longer than any realistic workout
DEFAULT_MAX_HOLD_SECONDS = 6 * 60 * 60


class ActiveSessionRegistry:
    """Thread-safe map of session ids held by live sequencers to hold start."""

    def __init__(
        self,
        max_age_seconds: float = DEFAULT_MAX_HOLD_SECONDS,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.Lock()
        self._active: Dict[str, float] = {}
        self._max_age = max_age_seconds
        self._now = time_source

    def acquire(self, session_id: str) -> None:
        with self._lock:
            self._active[session_id] = self._now()
        logger.debug("Session %s marked active", session_id)

    def release(self, session_id: str) -> None:
        with self._lock:
            self._active.pop(session_id, None)
        logger.debug("Session %s released", session_id)

    def is_active(self, session_id: str) -> bool:
        with self._lock:
            self._expire()
            return session_id in self._active

    def any_active(self, session_ids: Iterable[str]) -> bool:
        with self._lock:
            self._expire()
            return any(sid in self._active for sid in session_ids)

    def _expire(self) -> None:
        # Caller holds the lock
        cutoff = self._now() - self._max_age
        for sid in [sid for sid, held_at in self._active.items() if held_at < cutoff]:
            del self._active[sid]
            logger.warning("Session %s hold expired; treating it as abandoned", sid)


# Process-wide registry shared by the API dependencies
default_registry = ActiveSessionRegistry()
