"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ECO_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Eco Commute Planner API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level for the service.")

    mapbox_base_url: str = Field(
        default="https://api.mapbox.com",
        description="Base URL for the Mapbox Directions API.",
    )
    mapbox_access_token: Optional[str] = Field(
        default=None,
        description="Mapbox access token used for directions requests.",
    )
    directions_timeout_seconds: float = Field(default=10.0, gt=0.0)
    directions_deadline_seconds: float = Field(
        default=8.0,
        gt=0.0,
        description="Upper bound for the whole per-mode fan-out; pending modes count as failed.",
    )
    directions_max_retries: int = Field(default=1, ge=0)
    directions_backoff_seconds: float = Field(default=0.5, ge=0.0)
    directions_max_parallel_requests: int = Field(default=4, ge=1)

    max_alternatives_per_mode: int = Field(default=2, ge=1)
    min_route_distance_km: float = Field(default=0.2, ge=0.0)
    max_results: int = Field(default=8, ge=1)

    openweather_base_url: str = Field(default="https://api.openweathermap.org/data/2.5")
    openweather_api_key: Optional[str] = None
    weather_timeout_seconds: float = Field(default=5.0, gt=0.0)

    trip_history_limit: int = Field(default=100, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: Any) -> str:
        return str(value or "INFO").strip().upper()


settings = Settings()
