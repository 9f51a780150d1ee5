import pytest

from src.ecocommute.models.domain import CandidateRoute, SustainabilityPriority, TransportMode
from src.ecocommute.services.routing.ranking import balanced_score, rank_candidates


def _candidate(name: str, co2: float, duration: int, mode: TransportMode = TransportMode.WALKING) -> CandidateRoute:
    return CandidateRoute(
        id=name,
        name=name,
        mode=mode,
        alternative_index=0,
        distance_km=1.0,
        duration_min=duration,
        co2_saved_kg=co2,
        geometry=None,
    )


@pytest.fixture
def candidates():
    return [
        _candidate("car", 0.0, 12, TransportMode.DRIVING),
        _candidate("walk", 0.84, 50),
        _candidate("bus", 0.68, 20, TransportMode.TRANSIT),
        _candidate("bike", 0.84, 18, TransportMode.CYCLING),
    ]


def test_eco_first_orders_by_co2_saved(candidates):
    ranked = rank_candidates(candidates, SustainabilityPriority.ECO_FIRST)

    assert [c.name for c in ranked] == ["walk", "bike", "bus", "car"]
    assert all(a.co2_saved_kg >= b.co2_saved_kg for a, b in zip(ranked, ranked[1:]))


def test_speed_first_orders_by_duration(candidates):
    ranked = rank_candidates(candidates, "Speed First")

    assert [c.name for c in ranked] == ["car", "bike", "bus", "walk"]
    assert all(a.duration_min <= b.duration_min for a, b in zip(ranked, ranked[1:]))


@pytest.mark.parametrize("priority", [SustainabilityPriority.BALANCED, None, "unknown"])
def test_balanced_uses_linear_score(candidates, priority):
    ranked = rank_candidates(candidates, priority)

    # scores: walk 0.42-0.50=-0.08, bike 0.42-0.18=0.24, bus 0.34-0.20=0.14, car -0.12
    assert [c.name for c in ranked] == ["bike", "bus", "walk", "car"]
    assert balanced_score(ranked[0]) == pytest.approx(0.24)


def test_results_are_capped_at_eight():
    many = [_candidate(f"route-{i}", i * 0.1, 10 + i) for i in range(12)]

    ranked = rank_candidates(many, SustainabilityPriority.ECO_FIRST)

    assert len(ranked) == 8
    assert ranked[0].name == "route-11"


def test_explicit_limit_overrides_default(candidates):
    assert len(rank_candidates(candidates, SustainabilityPriority.BALANCED, limit=2)) == 2
