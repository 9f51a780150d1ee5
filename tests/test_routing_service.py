import pytest
from conftest import make_response, make_route

from src.ecocommute.models.domain import SustainabilityPriority, TransportMode, TravelPreferences
from src.ecocommute.schemas.routing import RoutePlanRequest
from src.ecocommute.services.routing import service as routing_service
from src.ecocommute.services.routing.errors import (
    NoRoutesFoundError,
    NoValidModesError,
    ProviderUnavailableError,
    RouteRequestValidationError,
)
from src.ecocommute.services.routing.gateway import DirectionsGateway


class StubDirections:
    """Serves canned provider payloads per profile and records every call."""

    def __init__(self, responses: dict, failing=()):
        self.responses = responses
        self.failing = set(failing)
        self.calls = []

    def directions(self, profile, origin, destination, cancel_event=None, timeout=None):
        self.calls.append(profile)
        if profile in self.failing:
            raise ProviderUnavailableError(f"Directions provider responded with HTTP 500 for '{profile}'.")
        return self.responses[profile]


def _request(modes, origin=(77.0, 28.0), destination=(77.1, 28.0)) -> RoutePlanRequest:
    return RoutePlanRequest.model_validate(
        {
            "origin": {"coordinates": list(origin), "name": "Home"},
            "destination": {"coordinates": list(destination), "name": "Office"},
            "transportModes": modes,
        }
    )


def _gateway(client) -> DirectionsGateway:
    return DirectionsGateway(client=client, deadline_seconds=2)


def test_eco_first_end_to_end(fixed_clock):
    client = StubDirections(
        {
            "walking": make_response(make_route(4000, 3000)),
            "driving-traffic": make_response(make_route(6000, 720)),
        }
    )
    preferences = TravelPreferences(sustainability_priority=SustainabilityPriority.ECO_FIRST)

    routes = routing_service.plan_routes(
        _request(["walking", "driving"]), preferences, gateway=_gateway(client), clock=fixed_clock
    )

    assert [route.mode for route in routes] == [TransportMode.WALKING, TransportMode.DRIVING]
    walking, driving = routes
    assert walking.co2_saved_kg == pytest.approx(0.84)
    assert walking.calories == 240
    assert walking.duration_min == 50
    assert driving.co2_saved_kg == 0
    assert driving.cost == 48
    assert driving.duration_min == 12


def test_empty_mode_list_is_rejected_without_provider_calls():
    client = StubDirections({})

    with pytest.raises(RouteRequestValidationError) as excinfo:
        routing_service.plan_routes(_request([]), TravelPreferences(), gateway=_gateway(client))

    assert excinfo.value.kind == "ValidationError"
    assert excinfo.value.status_code == 400
    assert client.calls == []


@pytest.mark.parametrize(
    "payload",
    [
        {"destination": {"coordinates": [77.1, 28.0]}, "transportModes": ["walking"]},
        {"origin": {"name": "Home"}, "destination": {"coordinates": [77.1, 28.0]}, "transportModes": ["walking"]},
        {"origin": {"coordinates": [77.0]}, "destination": {"coordinates": [77.1, 28.0]}, "transportModes": ["walking"]},
        {"origin": {"coordinates": [77.0, 95.0]}, "destination": {"coordinates": [77.1, 28.0]}, "transportModes": ["walking"]},
        {"origin": {"coordinates": [-181, 0]}, "destination": {"coordinates": [77.1, 28.0]}, "transportModes": ["walking"]},
        {"origin": {"coordinates": ["a", "b"]}, "destination": {"coordinates": [77.1, 28.0]}, "transportModes": ["walking"]},
    ],
)
def test_malformed_waypoints_are_validation_errors(payload):
    client = StubDirections({})

    with pytest.raises(RouteRequestValidationError):
        routing_service.plan_routes(RoutePlanRequest.model_validate(payload), TravelPreferences(), gateway=_gateway(client))
    assert client.calls == []


def test_unrecognized_modes_raise_no_valid_modes():
    client = StubDirections({})

    with pytest.raises(NoValidModesError):
        routing_service.plan_routes(_request(["rocket"]), TravelPreferences(), gateway=_gateway(client))
    assert client.calls == []


def test_partial_provider_failure_keeps_other_modes(fixed_clock):
    client = StubDirections(
        {
            "walking": make_response(make_route(2000, 1500)),
            "driving": make_response(make_route(6000, 900)),
        },
        failing={"cycling"},
    )

    routes = routing_service.plan_routes(
        _request(["walking", "cycling", "transit"]), TravelPreferences(), gateway=_gateway(client), clock=fixed_clock
    )

    assert {route.mode for route in routes} == {TransportMode.WALKING, TransportMode.TRANSIT}


def test_all_modes_failing_reports_no_routes_found():
    client = StubDirections({}, failing={"walking", "cycling"})

    with pytest.raises(NoRoutesFoundError) as excinfo:
        routing_service.plan_routes(_request(["walking", "cycling"]), TravelPreferences(), gateway=_gateway(client))

    error = excinfo.value
    assert error.status_code == 404
    assert "relax" in error.message
    assert any(detail.startswith("walking:") for detail in error.details)
    assert any(detail.startswith("cycling:") for detail in error.details)


def test_everything_filtered_reports_no_routes_found():
    client = StubDirections({"walking": make_response(make_route(6000, 4500), make_route(6500, 4800))})
    preferences = TravelPreferences(max_walking_distance_km=3)

    with pytest.raises(NoRoutesFoundError) as excinfo:
        routing_service.plan_routes(_request(["walking"]), preferences, gateway=_gateway(client))

    assert "2 route(s) exceeded your distance preferences" in excinfo.value.details


def test_only_degenerate_routes_reports_no_routes_found():
    client = StubDirections({"walking": make_response(make_route(50, 40))})

    with pytest.raises(NoRoutesFoundError):
        routing_service.plan_routes(_request(["walking"]), TravelPreferences(), gateway=_gateway(client))


def test_preference_caps_are_respected(fixed_clock):
    client = StubDirections(
        {
            "walking": make_response(make_route(2500, 1800), make_route(4200, 3100)),
            "cycling": make_response(make_route(9000, 1800), make_route(12500, 2400)),
        }
    )
    preferences = TravelPreferences(max_walking_distance_km=3, max_cycling_distance_km=10)

    routes = routing_service.plan_routes(
        _request(["walking", "cycling"]), preferences, gateway=_gateway(client), clock=fixed_clock
    )

    assert len(routes) == 2
    for route in routes:
        if route.mode is TransportMode.WALKING:
            assert route.distance_km <= 3
        if route.mode is TransportMode.CYCLING:
            assert route.distance_km <= 10


def test_walk_just_over_the_cap_is_dropped(fixed_clock):
    client = StubDirections({"walking": make_response(make_route(3040, 2400), make_route(3000, 2350))})
    preferences = TravelPreferences(max_walking_distance_km=3)

    routes = routing_service.plan_routes(_request(["walking"]), preferences, gateway=_gateway(client), clock=fixed_clock)

    assert [route.name for route in routes] == ["Walking Alternative"]
    assert routes[0].distance_km == 3.0


def test_malformed_mode_payload_keeps_other_modes(fixed_clock):
    client = StubDirections(
        {
            "walking": {"code": "Ok", "routes": "unexpected"},
            "cycling": make_response(make_route(3000, 600)),
        }
    )

    routes = routing_service.plan_routes(
        _request(["walking", "cycling"]), TravelPreferences(), gateway=_gateway(client), clock=fixed_clock
    )

    assert [route.mode for route in routes] == [TransportMode.CYCLING]


def test_result_is_capped_at_eight(fixed_clock):
    three_routes = make_response(make_route(3000, 900), make_route(3300, 1000), make_route(3600, 1100))
    client = StubDirections(
        {"walking": three_routes, "cycling": three_routes, "driving-traffic": three_routes, "driving": three_routes}
    )

    routes = routing_service.plan_routes(
        _request(["walking", "cycling", "driving", "transit"]),
        TravelPreferences(sustainability_priority=SustainabilityPriority.SPEED_FIRST),
        gateway=_gateway(client),
        clock=fixed_clock,
    )

    assert len(routes) == 8
    assert all(a.duration_min <= b.duration_min for a, b in zip(routes, routes[1:]))


def test_missing_provider_configuration_is_reported(monkeypatch):
    monkeypatch.setattr(routing_service.settings, "mapbox_access_token", None)

    with pytest.raises(ProviderUnavailableError):
        routing_service.plan_routes(_request(["walking"]), TravelPreferences())


def test_default_gateway_is_used_when_none_given(monkeypatch, fixed_clock):
    client = StubDirections({"cycling": make_response(make_route(5000, 1200))})
    monkeypatch.setattr(routing_service, "DirectionsGateway", lambda: _gateway(client))

    routes = routing_service.plan_routes(_request(["cycling"]), TravelPreferences(), clock=fixed_clock)

    assert routes[0].name == "Cycling Route"
