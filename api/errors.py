"""
Domain exception -> HTTPException mapping.

Part of AMA-621: Scheduling API surface
"""

from fastapi import HTTPException

from application.exceptions import (
    ConfigurationError,
    InvalidSetError,
    InvalidTransitionError,
    RescheduleError,
    ScheduleEngineError,
    SessionNotFoundError,
)


def to_http_exception(exc: ScheduleEngineError) -> HTTPException:
    """Translate a scheduling error into the HTTP error the routers raise."""
    if isinstance(exc, ConfigurationError):
        return HTTPException(
            status_code=422,
            detail={"message": exc.message, "errors": exc.errors},
        )
    if isinstance(exc, InvalidSetError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, SessionNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, (InvalidTransitionError, RescheduleError)):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
