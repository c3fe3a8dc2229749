"""
HTTP client for the program generation service.

Part of AMA-617: Regenerate program at cycle end

Program generation (AI-backed) runs in a separate service. This client posts
the user's profile and maps the response onto ProgramWorkouts; the
scheduling engine never looks inside the generator.
"""

import logging
from typing import Any, Optional

import httpx

from application.ports import GeneratedProgram
from domain.models import ProgramWorkout, UserProfile

logger = logging.getLogger(__name__)


class ProgramGeneratorError(Exception):
    """Base exception for program generator client errors."""

    pass


class ProgramGeneratorUnavailable(ProgramGeneratorError):
    """Raised when the generator service is unavailable."""

    pass


class ProgramGeneratorAPIError(ProgramGeneratorError):
    """Raised when the generator service returns an error."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ProgramGeneratorClient:
    """
    HTTP implementation of the ProgramGenerator port.
    """

    def __init__(
        self,
        base_url: str,
        service_token: Optional[str] = None,
        timeout: float = 60.0,
    ):
        """
        Initialize the generator client.

        Args:
            base_url: Base URL of the generator (e.g., "http://program-api:8005")
            service_token: Bearer token for service-to-service calls
            timeout: Request timeout in seconds (generation is slow)
        """
        self._base_url = base_url.rstrip("/")
        self._service_token = service_token
        self._timeout = timeout

    def _build_payload(self, profile: UserProfile, template: Optional[str]) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "user_id": profile.user_id,
            "days_per_week": profile.days_per_week,
            "selected_days": list(profile.selected_days),
            "equipment": list(profile.equipment),
            "unit_preference": profile.unit_preference.value,
            "cycle_number": profile.cycle_number,
        }
        if template:
            payload["template"] = template
        return payload

    async def generate_program(
        self,
        profile: UserProfile,
        template: Optional[str] = None,
    ) -> GeneratedProgram:
        """
        Generate a program for a user.

        Args:
            profile: User profile driving generation
            template: Optional template identifier

        Returns:
            GeneratedProgram with workouts ordered by day_of_week

        Raises:
            ProgramGeneratorUnavailable: If the service is not reachable
            ProgramGeneratorAPIError: If the service returns an error response
        """
        url = f"{self._base_url}/generate"
        headers = {"Content-Type": "application/json"}
        if self._service_token:
            headers["Authorization"] = f"Bearer {self._service_token}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    url, json=self._build_payload(profile, template), headers=headers
                )

                if response.status_code in (200, 201):
                    return self._parse_program(response.json())

                logger.error(
                    f"Program generator error: {response.status_code} - {response.text}"
                )
                raise ProgramGeneratorAPIError(
                    f"Failed to generate program: {response.text}",
                    response.status_code,
                )

        except httpx.ConnectError as e:
            logger.error(f"Program generator unavailable: {e}")
            raise ProgramGeneratorUnavailable(
                f"Program generator is not available at {self._base_url}"
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"Program generator timeout: {e}")
            raise ProgramGeneratorUnavailable(
                "Program generator request timed out"
            ) from e

    @staticmethod
    def _parse_program(data: dict[str, Any]) -> GeneratedProgram:
        workouts = sorted(
            (ProgramWorkout.model_validate(w) for w in data.get("workouts", [])),
            key=lambda w: w.day_of_week,
        )
        return GeneratedProgram(
            program_id=str(data["program_id"]),
            workouts=workouts,
            duration_weeks=data.get("duration_weeks", 4),
            weekly_structure=data.get("weekly_structure"),
            metadata=data.get("metadata") or {},
        )
