"""Trip history management."""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from ...config import settings
from ...persistence.users import UserRepository
from ...schemas.trips import TripCreate, TripModel, TripSavedResponse

logger = logging.getLogger(__name__)


class TripValidationError(ValueError):
    """Raised when a trip payload fails validation; ``details`` lists every problem."""

    def __init__(self, details: list[str]) -> None:
        super().__init__("Validation failed")
        self.details = details


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_int(value: Any) -> int | None:
    number = _to_float(value)
    return int(number) if number is not None else None


def _non_empty_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _parse_coords(value: Any, label: str, errors: list[str]) -> dict | None:
    if not isinstance(value, dict):
        errors.append(f"{label} coordinates are required")
        return None
    lat = _to_float(value.get("lat"))
    lng = _to_float(value.get("lng"))
    if lat is None or lng is None:
        errors.append(f"Valid {label} coordinates are required")
        return None
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        errors.append(f"{label} coordinates out of valid range")
        return None
    return {"lat": lat, "lng": lng}


def validate_trip(payload: TripCreate, now: datetime) -> dict:
    """Validate and sanitize an inbound trip into its stored document form."""
    errors: list[str] = []
    if not _non_empty_text(payload.origin_name):
        errors.append("Origin name is required")
    if not _non_empty_text(payload.destination_name):
        errors.append("Destination name is required")
    if not _non_empty_text(payload.mode):
        errors.append("Transport mode is required")

    distance = _to_float(payload.distance)
    if distance is None:
        errors.append("Valid distance is required")
    duration = _to_int(payload.duration)
    if duration is None:
        errors.append("Valid duration is required")
    co2_saved = _to_float(payload.co2_saved)
    if co2_saved is None:
        errors.append("Valid CO2 saved value is required")

    origin_coords = _parse_coords(payload.origin_coords, "Origin", errors)
    destination_coords = _parse_coords(payload.destination_coords, "Destination", errors)

    if errors:
        raise TripValidationError(errors)

    return {
        "id": uuid.uuid4().hex,
        "originName": payload.origin_name.strip(),
        "destinationName": payload.destination_name.strip(),
        "originCoords": origin_coords,
        "destinationCoords": destination_coords,
        "mode": payload.mode.strip().lower(),
        "distance": max(distance, 0.0),
        "duration": max(duration, 0),
        "co2Saved": max(co2_saved, 0.0),
        "calories": max(_to_int(payload.calories) or 0, 0),
        "date": now.isoformat(),
    }


def _trip_date(trip: dict) -> datetime:
    value = trip.get("date")
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError:
            return datetime.min.replace(tzinfo=timezone.utc)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def save_trip(
    repository: UserRepository,
    user_id: str,
    payload: TripCreate,
    *,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> TripSavedResponse:
    """Prepend a validated trip to the user's history, keeping only the newest entries."""
    trip = validate_trip(payload, clock())
    trips = [trip, *repository.get_trips(user_id)][: settings.trip_history_limit]
    repository.save_trips(user_id, trips)
    logger.info(f"Trip saved for user {user_id} ({trip['mode']}, {trip['distance']}km)")
    return TripSavedResponse(
        message="Trip saved successfully",
        trip=TripModel.model_validate(trip),
        total_trips=len(trips),
    )


def list_trips(repository: UserRepository, user_id: str) -> list[TripModel]:
    trips = sorted(repository.get_trips(user_id), key=_trip_date, reverse=True)
    return [TripModel.model_validate(trip) for trip in trips]


def clear_trips(repository: UserRepository, user_id: str) -> None:
    repository.clear_trips(user_id)
    logger.info(f"Trip history cleared for user {user_id}")
