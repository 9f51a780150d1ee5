"""User preference filtering of candidate routes."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import CandidateRoute, TransportMode, TravelPreferences

logger = logging.getLogger(__name__)


def _distance_cap(mode: TransportMode, preferences: TravelPreferences) -> float | None:
    if mode is TransportMode.WALKING:
        return preferences.max_walking_distance_km
    if mode is TransportMode.CYCLING:
        return preferences.max_cycling_distance_km
    return None


def apply_preference_filter(
    candidates: Sequence[CandidateRoute],
    preferences: TravelPreferences,
) -> list[CandidateRoute]:
    """Drop walking/cycling candidates longer than the user's distance caps."""
    kept: list[CandidateRoute] = []
    for candidate in candidates:
        cap = _distance_cap(candidate.mode, preferences)
        if cap is not None and candidate.cap_distance_km > cap:
            logger.debug(
                f"{candidate.mode.value.capitalize()} route too long: {candidate.cap_distance_km}km > {cap}km"
            )
            continue
        kept.append(candidate)
    return kept
