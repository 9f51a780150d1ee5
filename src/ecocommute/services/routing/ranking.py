"""Ordering of candidate routes by the user's sustainability priority."""

from __future__ import annotations

from typing import Sequence

from ...config import settings
from ...models.domain import CandidateRoute, SustainabilityPriority

BALANCED_CO2_WEIGHT = 0.5
BALANCED_DURATION_WEIGHT = 0.01


def balanced_score(candidate: CandidateRoute) -> float:
    # Linear blend of kilograms and minutes; kept as-is for response compatibility.
    return BALANCED_CO2_WEIGHT * candidate.co2_saved_kg - BALANCED_DURATION_WEIGHT * candidate.duration_min


def rank_candidates(
    candidates: Sequence[CandidateRoute],
    priority: SustainabilityPriority | str | None,
    limit: int | None = None,
) -> list[CandidateRoute]:
    """Sort candidates for the given priority and cap the result size.

    Eco First favours CO2 saved, Speed First favours short durations and
    anything else uses the balanced score. Ties keep their input order.
    """
    limit = limit if limit is not None else settings.max_results
    priority = SustainabilityPriority.parse(priority)

    if priority is SustainabilityPriority.ECO_FIRST:
        ordered = sorted(candidates, key=lambda candidate: candidate.co2_saved_kg, reverse=True)
    elif priority is SustainabilityPriority.SPEED_FIRST:
        ordered = sorted(candidates, key=lambda candidate: candidate.duration_min)
    else:
        ordered = sorted(candidates, key=balanced_score, reverse=True)
    return ordered[:limit]
