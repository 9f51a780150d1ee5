"""Route planning orchestration service."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from numbers import Real
from typing import Any, Callable, Sequence

from ...config import settings
from ...models.domain import CandidateRoute, Coordinate, TravelPreferences, Waypoint
from ...schemas.routing import RoutePlanRequest, WaypointModel
from .builder import BuildOutcome, build_candidates
from .errors import NoRoutesFoundError, ProviderUnavailableError, RouteRequestValidationError
from .filters import apply_preference_filter
from .gateway import DirectionsGateway, ModeResult
from .modes import DEFAULT_MODE_TABLE, ModeTable, resolve_modes
from .ranking import rank_candidates

logger = logging.getLogger(__name__)

NO_ROUTES_MESSAGE = (
    "No routes found for the selected criteria. Please try different locations or transport modes, "
    "or relax your maximum walking/cycling distance preferences."
)


class PlanningStage(str, Enum):
    VALIDATING = "Validating"
    RESOLVING_MODES = "Resolving Modes"
    FETCHING_DIRECTIONS = "Fetching Directions"
    BUILDING_CANDIDATES = "Building Candidates"
    FILTERING = "Filtering"
    RANKING = "Ranking"
    DONE = "Done"


def _enter(stage: PlanningStage) -> None:
    logger.debug(f"Route planning stage: {stage.value}")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _parse_waypoint(waypoint: WaypointModel, label: str) -> Waypoint:
    coordinates = waypoint.coordinates
    if not isinstance(coordinates, list) or len(coordinates) != 2 or not all(_is_number(v) for v in coordinates):
        raise RouteRequestValidationError(f"Invalid {label.lower()} coordinates format.")

    coordinate = Coordinate(longitude=float(coordinates[0]), latitude=float(coordinates[1]))
    if not coordinate.is_valid():
        raise RouteRequestValidationError(f"{label} coordinates out of valid range.")

    name = (waypoint.name or "").strip() or label
    return Waypoint(name=name, coordinate=coordinate)


def validate_request(payload: RoutePlanRequest) -> tuple[Waypoint, Waypoint, list[str]]:
    """Check the request shape and return parsed waypoints plus raw mode identifiers."""
    if payload.origin is None or payload.destination is None:
        raise RouteRequestValidationError("Both origin and destination are required.")
    if payload.origin.coordinates is None or payload.destination.coordinates is None:
        raise RouteRequestValidationError("Origin and destination coordinates are required.")

    origin = _parse_waypoint(payload.origin, "Origin")
    destination = _parse_waypoint(payload.destination, "Destination")

    modes = payload.transport_modes
    if not modes:
        raise RouteRequestValidationError("At least one transport mode is required.")
    return origin, destination, [str(mode) for mode in modes]


def _failure_details(
    mode_results: Sequence[ModeResult],
    outcomes: Sequence[BuildOutcome],
    filtered_out: int,
) -> list[str]:
    details = [f"{result.mode.value}: {result.error}" for result in mode_results if not result.ok]
    details.extend(
        f"{outcome.mode.value} route {outcome.alternative_index}: {outcome.error}"
        for outcome in outcomes
        if outcome.error
    )
    degenerate = sum(1 for outcome in outcomes if outcome.degenerate)
    if degenerate:
        details.append(f"{degenerate} route(s) shorter than {settings.min_route_distance_km}km were discarded")
    if filtered_out:
        details.append(f"{filtered_out} route(s) exceeded your distance preferences")
    return details


def plan_routes(
    payload: RoutePlanRequest,
    preferences: TravelPreferences,
    *,
    gateway: DirectionsGateway | None = None,
    mode_table: ModeTable = DEFAULT_MODE_TABLE,
    clock: Callable[[], datetime] = datetime.now,
) -> list[CandidateRoute]:
    """Plan, score, filter and rank candidate routes for one request.

    Individual mode or route failures are logged and skipped; the request only
    fails when nothing usable remains.
    """
    _enter(PlanningStage.VALIDATING)
    origin, destination, identifiers = validate_request(payload)

    _enter(PlanningStage.RESOLVING_MODES)
    profiles = resolve_modes(identifiers, mode_table)
    logger.info(
        f"Planning routes {origin.name} -> {destination.name} for modes "
        f"{[profile.mode.value for profile in profiles]}"
    )

    _enter(PlanningStage.FETCHING_DIRECTIONS)
    if gateway is None:
        try:
            gateway = DirectionsGateway()
        except ValueError as exc:
            raise ProviderUnavailableError(f"Directions provider is not available: {exc}") from exc
    mode_results = gateway.fetch(origin.coordinate, destination.coordinate, profiles)

    _enter(PlanningStage.BUILDING_CANDIDATES)
    outcomes = build_candidates(
        mode_results,
        table=mode_table,
        now=clock(),
        min_distance_km=settings.min_route_distance_km,
        max_alternatives=settings.max_alternatives_per_mode,
    )
    candidates = [outcome.candidate for outcome in outcomes if outcome.candidate is not None]

    _enter(PlanningStage.FILTERING)
    filtered = apply_preference_filter(candidates, preferences)
    logger.info(f"Total routes generated: {len(candidates)}, after preference filtering: {len(filtered)}")

    if not filtered:
        details = _failure_details(mode_results, outcomes, len(candidates) - len(filtered))
        logger.info(f"Route planning failed: no routes found ({'; '.join(details) or 'no provider routes'})")
        raise NoRoutesFoundError(NO_ROUTES_MESSAGE, details=details)

    _enter(PlanningStage.RANKING)
    ranked = rank_candidates(filtered, preferences.sustainability_priority, limit=settings.max_results)

    _enter(PlanningStage.DONE)
    return ranked
