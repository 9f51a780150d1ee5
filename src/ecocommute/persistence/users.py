"""Storage of per-user preferences and trip history."""

from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any

from ..db.supabase import get_supabase_client

logger = logging.getLogger(__name__)

PROFILE_TABLE = "user_profiles"


class UserRepository(ABC):
    """Contract for reading and writing a user's profile documents."""

    @abstractmethod
    def get_preferences(self, user_id: str) -> dict | None:
        raise NotImplementedError

    @abstractmethod
    def save_preferences(self, user_id: str, preferences: dict) -> dict:
        raise NotImplementedError

    @abstractmethod
    def get_trips(self, user_id: str) -> list[dict]:
        raise NotImplementedError

    @abstractmethod
    def save_trips(self, user_id: str, trips: list[dict]) -> None:
        raise NotImplementedError

    def clear_trips(self, user_id: str) -> None:
        self.save_trips(user_id, [])


class InMemoryUserRepository(UserRepository):
    """Process-local repository used when Supabase is not configured."""

    def __init__(self) -> None:
        self._profiles: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def _profile(self, user_id: str) -> dict[str, Any]:
        return self._profiles.setdefault(user_id, {"preferences": None, "trip_history": []})

    def get_preferences(self, user_id: str) -> dict | None:
        with self._lock:
            preferences = self._profiles.get(user_id, {}).get("preferences")
            return copy.deepcopy(preferences)

    def save_preferences(self, user_id: str, preferences: dict) -> dict:
        with self._lock:
            self._profile(user_id)["preferences"] = copy.deepcopy(preferences)
            return copy.deepcopy(preferences)

    def get_trips(self, user_id: str) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._profiles.get(user_id, {}).get("trip_history", []))

    def save_trips(self, user_id: str, trips: list[dict]) -> None:
        with self._lock:
            self._profile(user_id)["trip_history"] = copy.deepcopy(trips)


class SupabaseUserRepository(UserRepository):
    """Stores one ``user_profiles`` row per user with JSON preference and trip columns."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def _select(self, user_id: str, column: str) -> Any:
        response = (
            self.client.table(PROFILE_TABLE)
            .select(column)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return rows[0].get(column) if rows else None

    def _upsert(self, user_id: str, values: dict) -> None:
        self.client.table(PROFILE_TABLE).upsert({"user_id": user_id, **values}, on_conflict="user_id").execute()

    def get_preferences(self, user_id: str) -> dict | None:
        preferences = self._select(user_id, "preferences")
        return preferences if isinstance(preferences, dict) else None

    def save_preferences(self, user_id: str, preferences: dict) -> dict:
        self._upsert(user_id, {"preferences": preferences})
        return preferences

    def get_trips(self, user_id: str) -> list[dict]:
        trips = self._select(user_id, "trip_history")
        return list(trips) if isinstance(trips, list) else []

    def save_trips(self, user_id: str, trips: list[dict]) -> None:
        self._upsert(user_id, {"trip_history": trips})


@lru_cache()
def get_user_repository() -> UserRepository:
    """Return the configured repository, falling back to in-process storage."""
    client = get_supabase_client()
    if client is None:
        logger.info("Supabase not configured - user profiles will be kept in memory")
        return InMemoryUserRepository()
    return SupabaseUserRepository(client)
