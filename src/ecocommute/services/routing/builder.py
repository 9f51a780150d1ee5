"""Conversion of raw provider routes into candidate routes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional

from ...models.domain import CandidateRoute, RouteStep, TransportMode
from . import metrics
from .errors import CandidateComputationError
from .gateway import ModeResult
from .modes import ModeTable

logger = logging.getLogger(__name__)

DEFAULT_INSTRUCTION = "Continue"
DEFAULT_MANEUVER = "continue"


@dataclass(slots=True)
class BuildOutcome:
    """Result of processing one raw provider route."""

    mode: TransportMode
    alternative_index: int
    candidate: Optional[CandidateRoute] = None
    error: Optional[str] = None
    degenerate: bool = False


def _build_steps(raw_steps: Iterable[Any]) -> list[RouteStep]:
    steps = []
    for raw_step in raw_steps:
        maneuver = raw_step.get("maneuver") or {}
        steps.append(
            RouteStep(
                instruction=maneuver.get("instruction") or DEFAULT_INSTRUCTION,
                distance=float(raw_step.get("distance") or 0),
                duration=float(raw_step.get("duration") or 0),
                type=maneuver.get("type") or DEFAULT_MANEUVER,
            )
        )
    return steps


def route_name(mode: TransportMode, alternative_index: int, table: ModeTable) -> str:
    suffix = "Route" if alternative_index == 0 else "Alternative"
    return f"{table.display_name(mode)} {suffix}"


def build_candidate(
    mode: TransportMode,
    alternative_index: int,
    route: dict,
    *,
    table: ModeTable,
    now: datetime,
    min_distance_km: float,
) -> Optional[CandidateRoute]:
    """Derive a candidate from one provider route.

    Returns None for degenerate routes shorter than ``min_distance_km``.
    Raises CandidateComputationError when the route is missing leg data or
    its values cannot be interpreted.
    """
    legs = route.get("legs") or []
    if not legs or not legs[0]:
        raise CandidateComputationError(f"No leg data for {mode.value} route {alternative_index}")
    leg = legs[0]

    try:
        distance_km = metrics.meters_to_km(float(route.get("distance") or 0))
        duration_min = metrics.seconds_to_minutes(float(route.get("duration") or 0))
    except (TypeError, ValueError) as exc:
        raise CandidateComputationError(f"Invalid distance/duration for {mode.value} route {alternative_index}") from exc

    if distance_km < min_distance_km:
        return None

    try:
        steps = _build_steps(leg.get("steps") or [])
    except (AttributeError, TypeError, ValueError) as exc:
        raise CandidateComputationError(f"Malformed steps for {mode.value} route {alternative_index}: {exc}") from exc

    return CandidateRoute(
        id=f"{mode.value}-{alternative_index}-{int(now.timestamp() * 1000)}",
        name=route_name(mode, alternative_index, table),
        mode=mode,
        alternative_index=alternative_index,
        distance_km=round(distance_km, 1),
        measured_distance_km=distance_km,
        duration_min=duration_min,
        co2_saved_kg=round(metrics.co2_saved(mode, distance_km, table), 2),
        geometry=route.get("geometry"),
        steps=steps,
        calories=metrics.calories_burned(mode, distance_km),
        difficulty=metrics.difficulty_tier(mode, distance_km),
        cost=metrics.trip_cost(mode, distance_km),
        estimated_arrival=metrics.estimated_arrival(now, duration_min),
        weather_suitability=table.weather_suitability(mode),
    )


def build_candidates(
    results: Iterable[ModeResult],
    *,
    table: ModeTable,
    now: datetime,
    min_distance_km: float,
    max_alternatives: int,
) -> list[BuildOutcome]:
    """Process every successful mode result into per-route outcomes.

    Results may arrive in any order. Failures stay local to the route that
    produced them and are returned as error outcomes.
    """
    outcomes: list[BuildOutcome] = []
    for result in results:
        if not result.ok:
            continue
        routes = result.response.get("routes", []) if isinstance(result.response, dict) else None
        if not isinstance(routes, list):
            logger.warning(f"Malformed directions payload for {result.mode.value}; skipping mode")
            outcomes.append(
                BuildOutcome(mode=result.mode, alternative_index=0, error="Malformed directions payload")
            )
            continue
        if not routes:
            logger.info(f"No routes returned for {result.mode.value}")
            continue

        for index, route in enumerate(routes[:max_alternatives]):
            try:
                candidate = build_candidate(
                    result.mode,
                    index,
                    route,
                    table=table,
                    now=now,
                    min_distance_km=min_distance_km,
                )
            except CandidateComputationError as exc:
                logger.warning(f"Skipping {result.mode.value} route {index}: {exc.message}")
                outcomes.append(BuildOutcome(mode=result.mode, alternative_index=index, error=exc.message))
                continue
            except Exception as exc:
                logger.exception(f"Error processing {result.mode.value} route {index}")
                outcomes.append(BuildOutcome(mode=result.mode, alternative_index=index, error=str(exc)))
                continue

            if candidate is None:
                logger.debug(f"Skipping degenerate {result.mode.value} route {index}")
                outcomes.append(BuildOutcome(mode=result.mode, alternative_index=index, degenerate=True))
                continue
            outcomes.append(BuildOutcome(mode=result.mode, alternative_index=index, candidate=candidate))
    return outcomes
