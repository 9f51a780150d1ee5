"""Domain models shared by the route planning pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


class TransportMode(str, Enum):
    WALKING = "walking"
    CYCLING = "cycling"
    DRIVING = "driving"
    TRANSIT = "transit"

    @classmethod
    def parse(cls, value: Any) -> Optional["TransportMode"]:
        """Return the matching mode for a free-text identifier, or None when unrecognized."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class SustainabilityPriority(str, Enum):
    ECO_FIRST = "Eco First"
    BALANCED = "Balanced"
    SPEED_FIRST = "Speed First"

    @classmethod
    def parse(cls, value: Any) -> "SustainabilityPriority":
        """Map a stored label onto a priority; anything unknown ranks as Balanced."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            label = value.strip().lower()
            for priority in cls:
                if priority.value.lower() == label:
                    return priority
        return cls.BALANCED


class Difficulty(str, Enum):
    EASY = "Easy"
    MODERATE = "Moderate"
    CHALLENGING = "Challenging"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A (longitude, latitude) pair in decimal degrees."""

    longitude: float
    latitude: float

    def is_valid(self) -> bool:
        return -180.0 <= self.longitude <= 180.0 and -90.0 <= self.latitude <= 90.0

    def as_lon_lat(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)


@dataclass(frozen=True, slots=True)
class Waypoint:
    """Named location used as a trip origin or destination."""

    name: str
    coordinate: Coordinate


@dataclass(frozen=True, slots=True)
class TravelPreferences:
    """Read-only view of the preferences the planner consumes."""

    sustainability_priority: SustainabilityPriority = SustainabilityPriority.BALANCED
    max_walking_distance_km: Optional[float] = None
    max_cycling_distance_km: Optional[float] = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any] | None) -> "TravelPreferences":
        """Build preferences from a stored profile document, tolerating absent fields."""
        document = document or {}
        return cls(
            sustainability_priority=SustainabilityPriority.parse(document.get("sustainabilityPriority")),
            max_walking_distance_km=_positive_or_none(document.get("maxWalkingDistance")),
            max_cycling_distance_km=_positive_or_none(document.get("maxCyclingDistance")),
        )


def _positive_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


@dataclass(slots=True)
class RouteStep:
    instruction: str
    distance: float
    duration: float
    type: str


@dataclass(slots=True)
class CandidateRoute:
    """One scorable route option for a single mode and alternative index."""

    id: str
    name: str
    mode: TransportMode
    alternative_index: int
    distance_km: float
    duration_min: int
    co2_saved_kg: float
    geometry: Any
    steps: list[RouteStep] = field(default_factory=list)
    calories: int = 0
    difficulty: Difficulty = Difficulty.EASY
    cost: float = 0
    estimated_arrival: str = ""
    weather_suitability: str = "weather_independent"
    # Unrounded provider distance; distance caps compare against this.
    measured_distance_km: Optional[float] = None

    @property
    def cap_distance_km(self) -> float:
        return self.measured_distance_km if self.measured_distance_km is not None else self.distance_km
