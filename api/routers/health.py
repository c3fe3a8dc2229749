"""
Health check router.

Part of AMA-621: Scheduling API surface

This router provides health check endpoints for monitoring and load balancers.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from api.deps import get_clock, get_settings
from backend.settings import Settings
from shared.local_dates import Clock, format_local_date

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint for schedule-api.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/clock")
def clock_check(
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    """
    Report the local calendar day the scheduler will use.

    Honors the X-Timezone header, which makes it handy for checking a
    client's day boundary against the server's.
    """
    return {
        "today": format_local_date(clock.today()),
        "server_time_utc": datetime.now(timezone.utc).isoformat(),
        "default_timezone": settings.default_timezone,
    }
