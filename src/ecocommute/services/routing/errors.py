"""Error kinds raised by the route planning pipeline."""

from __future__ import annotations

from typing import Sequence


class PlanningError(Exception):
    """Base class for failures surfaced to the caller of the planner."""

    kind = "PlanningError"
    status_code = 500

    def __init__(self, message: str, details: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = list(details or [])

    def to_dict(self) -> dict:
        payload = {"error": self.kind, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class RouteRequestValidationError(PlanningError):
    kind = "ValidationError"
    status_code = 400


class NoValidModesError(PlanningError):
    kind = "NoValidModes"
    status_code = 400


class NoRoutesFoundError(PlanningError):
    kind = "NoRoutesFound"
    status_code = 404


class ProviderUnavailableError(PlanningError):
    """Directions provider failure for one mode; recovered by the gateway."""

    kind = "ProviderUnavailable"
    status_code = 502


class CandidateComputationError(PlanningError):
    """Metric derivation failure for one raw route; recovered by the builder."""

    kind = "InternalComputationError"
    status_code = 500
