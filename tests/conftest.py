from datetime import datetime

import pytest

FIXED_NOW = datetime(2025, 3, 14, 9, 30)


def make_route(distance_m: float, duration_s: float, *, steps=None, with_legs: bool = True) -> dict:
    if steps is None:
        steps = [
            {"maneuver": {"instruction": "Head east", "type": "depart"}, "distance": distance_m, "duration": duration_s},
            {"maneuver": {"type": "arrive"}, "distance": 0, "duration": 0},
        ]
    route = {
        "distance": distance_m,
        "duration": duration_s,
        "geometry": {"type": "LineString", "coordinates": [[77.0, 28.0], [77.1, 28.0]]},
    }
    route["legs"] = [{"steps": steps}] if with_legs else []
    return route


def make_response(*routes: dict) -> dict:
    return {"code": "Ok", "routes": list(routes)}


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
