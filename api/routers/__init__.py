"""
Router package for the scheduling API.

Part of AMA-621: Scheduling API surface

This package contains all API routers organized by domain:
- health: Health check endpoints
- schedule: Program activation, sessions, missed-workout reconciliation
- cycles: Seven-day cycle status and cycle-complete choices
- progression: Exercise slot targets and progression history
"""

from api.routers.health import router as health_router
from api.routers.schedule import router as schedule_router
from api.routers.cycles import router as cycles_router
from api.routers.progression import router as progression_router

__all__ = [
    "health_router",
    "schedule_router",
    "cycles_router",
    "progression_router",
]
