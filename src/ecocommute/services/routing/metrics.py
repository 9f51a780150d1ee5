"""Derived per-route metrics.

Calories and cost are coarse linear heuristics: calories ignore body weight
and terrain, and cost is expressed in an unspecified local currency unit.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from ...models.domain import Difficulty, TransportMode
from .modes import ModeTable

CALORIES_PER_KM = {
    TransportMode.WALKING: 60,
    TransportMode.CYCLING: 45,
}
DRIVING_COST_PER_KM = 8
TRANSIT_COST_PER_KM = 3
TRANSIT_MIN_FARE = 10
TRANSIT_MAX_FARE = 50
ARRIVAL_FORMAT = "%I:%M %p"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def meters_to_km(meters: float) -> float:
    return max(meters or 0.0, 0.0) / 1000


def seconds_to_minutes(seconds: float) -> int:
    return round_half_up(max(seconds or 0.0, 0.0) / 60)


def co2_saved(mode: TransportMode, distance_km: float, table: ModeTable) -> float:
    """Kilograms of CO2 avoided versus covering the same distance by car."""
    saved = distance_km * (table.baseline_factor - table.emission_factor(mode))
    return max(saved, 0.0)


def calories_burned(mode: TransportMode, distance_km: float) -> int:
    rate = CALORIES_PER_KM.get(mode)
    if rate is None:
        return 0
    return round_half_up(distance_km * rate)


def trip_cost(mode: TransportMode, distance_km: float) -> float:
    if mode is TransportMode.DRIVING:
        return round_half_up(distance_km * DRIVING_COST_PER_KM)
    if mode is TransportMode.TRANSIT:
        fare = min(max(distance_km * TRANSIT_COST_PER_KM, TRANSIT_MIN_FARE), TRANSIT_MAX_FARE)
        return round(fare, 2)
    return 0


def difficulty_tier(mode: TransportMode, distance_km: float) -> Difficulty:
    if mode is TransportMode.WALKING:
        if distance_km < 1:
            return Difficulty.EASY
        if distance_km < 3:
            return Difficulty.MODERATE
        return Difficulty.CHALLENGING
    if mode is TransportMode.CYCLING:
        if distance_km < 3:
            return Difficulty.EASY
        if distance_km < 8:
            return Difficulty.MODERATE
        return Difficulty.CHALLENGING
    return Difficulty.EASY


def estimated_arrival(now: datetime, duration_min: int) -> str:
    return (now + timedelta(minutes=duration_min)).strftime(ARRIVAL_FORMAT)
