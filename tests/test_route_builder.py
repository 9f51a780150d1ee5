import pytest
from conftest import FIXED_NOW, make_response, make_route

from src.ecocommute.models.domain import Difficulty, TransportMode
from src.ecocommute.services.routing.builder import build_candidates
from src.ecocommute.services.routing.gateway import ModeResult
from src.ecocommute.services.routing.modes import DEFAULT_MODE_TABLE


def _build(results):
    return build_candidates(
        results,
        table=DEFAULT_MODE_TABLE,
        now=FIXED_NOW,
        min_distance_km=0.2,
        max_alternatives=2,
    )


def _ok(mode: TransportMode, *routes: dict) -> ModeResult:
    return ModeResult(mode=mode, profile=mode.value, response=make_response(*routes))


def test_walking_candidate_metrics():
    outcomes = _build([_ok(TransportMode.WALKING, make_route(4000, 3000))])

    assert len(outcomes) == 1
    candidate = outcomes[0].candidate
    assert candidate.name == "Walking Route"
    assert candidate.mode is TransportMode.WALKING
    assert candidate.distance_km == 4.0
    assert candidate.duration_min == 50
    assert candidate.co2_saved_kg == pytest.approx(0.84)
    assert candidate.calories == 240
    assert candidate.cost == 0
    assert candidate.difficulty is Difficulty.CHALLENGING
    assert candidate.estimated_arrival == "10:20 AM"
    assert candidate.weather_suitability == "weather_dependent"
    assert candidate.id.startswith("walking-0-")
    assert candidate.geometry["type"] == "LineString"


def test_second_alternative_is_named_and_third_is_ignored():
    outcomes = _build(
        [
            _ok(
                TransportMode.TRANSIT,
                make_route(5000, 900),
                make_route(5600, 1000),
                make_route(7000, 1200),
            )
        ]
    )

    names = [outcome.candidate.name for outcome in outcomes]
    assert names == ["Public Transit Route", "Public Transit Alternative"]
    assert outcomes[1].candidate.id.startswith("transit-1-")


def test_degenerate_routes_are_discarded():
    outcomes = _build(
        [
            _ok(TransportMode.DRIVING, make_route(150, 30), make_route(199.9, 40)),
            _ok(TransportMode.WALKING, make_route(200, 150)),
        ]
    )

    candidates = [outcome.candidate for outcome in outcomes if outcome.candidate]
    assert [candidate.mode for candidate in candidates] == [TransportMode.WALKING]
    assert sum(1 for outcome in outcomes if outcome.degenerate) == 2
    assert all(candidate.distance_km >= 0.2 for candidate in candidates)


def test_route_without_legs_is_reported_not_raised():
    outcomes = _build(
        [_ok(TransportMode.CYCLING, make_route(3000, 600, with_legs=False), make_route(3500, 700))]
    )

    assert outcomes[0].candidate is None
    assert "No leg data" in outcomes[0].error
    assert outcomes[1].candidate.name == "Cycling Alternative"


def test_malformed_steps_only_skip_their_route():
    broken = make_route(3000, 600, steps=["not-a-step"])
    outcomes = _build([_ok(TransportMode.CYCLING, broken, make_route(3200, 650))])

    assert outcomes[0].candidate is None
    assert outcomes[0].error
    assert outcomes[1].candidate is not None


def test_missing_instruction_falls_back_to_continue():
    outcomes = _build([_ok(TransportMode.WALKING, make_route(1500, 1200))])

    steps = outcomes[0].candidate.steps
    assert steps[0].instruction == "Head east"
    assert steps[0].type == "depart"
    assert steps[1].instruction == "Continue"
    assert steps[1].type == "arrive"


def test_failed_and_empty_results_are_skipped_in_any_order():
    results = [
        ModeResult(mode=TransportMode.DRIVING, profile="driving-traffic", error="HTTP 503"),
        ModeResult(mode=TransportMode.TRANSIT, profile="driving", response={"code": "Ok", "routes": []}),
        _ok(TransportMode.CYCLING, make_route(2500, 500)),
    ]

    outcomes = _build(results)

    assert [outcome.candidate.mode for outcome in outcomes] == [TransportMode.CYCLING]


def test_distance_is_rounded_for_display():
    outcomes = _build([_ok(TransportMode.DRIVING, make_route(6049, 720))])

    candidate = outcomes[0].candidate
    assert candidate.distance_km == 6.0
    assert candidate.duration_min == 12
    assert candidate.co2_saved_kg == 0
    assert candidate.cost == 48


def test_unrounded_distance_is_kept_for_caps():
    candidate = _build([_ok(TransportMode.WALKING, make_route(3040, 2400))])[0].candidate

    assert candidate.distance_km == 3.0
    assert candidate.measured_distance_km == pytest.approx(3.04)


@pytest.mark.parametrize("response", [{"code": "Ok", "routes": {"a": 1}}, ["not", "a", "payload"], {"routes": None}])
def test_malformed_mode_payload_does_not_discard_other_modes(response):
    results = [
        ModeResult(mode=TransportMode.DRIVING, profile="driving-traffic", response=response),
        _ok(TransportMode.CYCLING, make_route(2500, 500)),
    ]

    outcomes = _build(results)

    assert outcomes[0].mode is TransportMode.DRIVING
    assert outcomes[0].error == "Malformed directions payload"
    assert [outcome.candidate.mode for outcome in outcomes if outcome.candidate] == [TransportMode.CYCLING]
