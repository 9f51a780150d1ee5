"""Route group exports."""

from . import health, preferences, routes, stats, trips, weather

__all__ = ["routes", "health", "trips", "preferences", "stats", "weather"]
