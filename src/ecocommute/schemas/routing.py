"""Route planning request/response schemas."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import CandidateRoute


class WaypointModel(BaseModel):
    coordinates: Optional[List[Any]] = Field(default=None, description="[longitude, latitude] in decimal degrees.")
    name: Optional[str] = None


class RoutePlanRequest(BaseModel):
    """Inbound plan request.

    Shapes are kept permissive so the planner can report malformed input as a
    ValidationError instead of a framework-level rejection.
    """

    model_config = ConfigDict(populate_by_name=True)

    origin: Optional[WaypointModel] = None
    destination: Optional[WaypointModel] = None
    transport_modes: Optional[List[Any]] = Field(default=None, alias="transportModes")


class RouteStepModel(BaseModel):
    instruction: str
    distance: float
    duration: float
    type: str


class CandidateRouteModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    mode: str
    distance: float
    duration: int
    co2_saved: float = Field(alias="co2Saved")
    geometry: Any = None
    steps: List[RouteStepModel]
    calories: int
    difficulty: str
    cost: float
    estimated_arrival: str = Field(alias="estimatedArrival")
    weather_suitability: str

    @classmethod
    def from_candidate(cls, candidate: CandidateRoute) -> "CandidateRouteModel":
        return cls(
            id=candidate.id,
            name=candidate.name,
            mode=candidate.mode.value,
            distance=candidate.distance_km,
            duration=candidate.duration_min,
            co2_saved=candidate.co2_saved_kg,
            geometry=candidate.geometry,
            steps=[
                RouteStepModel(
                    instruction=step.instruction,
                    distance=step.distance,
                    duration=step.duration,
                    type=step.type,
                )
                for step in candidate.steps
            ],
            calories=candidate.calories,
            difficulty=candidate.difficulty.value,
            cost=candidate.cost,
            estimated_arrival=candidate.estimated_arrival,
            weather_suitability=candidate.weather_suitability,
        )


class PlanningErrorModel(BaseModel):
    error: str
    message: str
    details: Optional[List[str]] = None
