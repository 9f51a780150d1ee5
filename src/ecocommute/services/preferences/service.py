"""Reading and updating stored travel preferences."""

from __future__ import annotations

import logging

from ...models.domain import TravelPreferences
from ...persistence.users import UserRepository
from ...schemas.preferences import PreferencesModel, PreferencesUpdate

logger = logging.getLogger(__name__)

DEFAULT_PREFERENCES = {
    "transportModes": ["Walking", "Cycling", "Driving"],
    "maxWalkingDistance": 5,
    "maxCyclingDistance": 20,
    "sustainabilityPriority": "Balanced",
    "monthlyGoal": 60,
    "homeAddress": "",
    "workAddress": "",
}
DEFAULT_MONTHLY_GOAL_KG = 60.0


def get_preferences(repository: UserRepository, user_id: str) -> PreferencesModel:
    """Return stored preferences layered over the display defaults."""
    stored = repository.get_preferences(user_id) or {}
    return PreferencesModel.model_validate({**DEFAULT_PREFERENCES, **stored})


def update_preferences(repository: UserRepository, user_id: str, payload: PreferencesUpdate) -> PreferencesModel:
    document = payload.to_document()
    saved = repository.save_preferences(user_id, document)
    logger.info(f"Updated preferences for user {user_id}: {sorted(document)}")
    return PreferencesModel.model_validate({**DEFAULT_PREFERENCES, **saved})


def load_travel_preferences(repository: UserRepository, user_id: str) -> TravelPreferences:
    """Preferences as the route planner sees them; absent caps stay unset."""
    return TravelPreferences.from_document(repository.get_preferences(user_id))


def monthly_goal(repository: UserRepository, user_id: str) -> float:
    stored = repository.get_preferences(user_id) or {}
    try:
        return float(stored.get("monthlyGoal", DEFAULT_MONTHLY_GOAL_KG))
    except (TypeError, ValueError):
        return DEFAULT_MONTHLY_GOAL_KG
