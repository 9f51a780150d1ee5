"""Passthrough client for OpenWeatherMap current conditions."""

from __future__ import annotations

import logging

import httpx

from ...config import settings

logger = logging.getLogger(__name__)


class WeatherServiceError(Exception):
    """Raised when the weather provider answers with an error status or cannot be reached."""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.status_code = status_code


class WeatherClient:
    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.openweather_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.openweather_api_key
        if not self.api_key:
            raise ValueError("OpenWeatherMap API key is not configured.")
        self.timeout = timeout if timeout is not None else settings.weather_timeout_seconds
        self._transport = transport

    def current(self, lat: float, lon: float) -> dict:
        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"}
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = client.get(f"{self.base_url}/weather", params=params)
            except httpx.HTTPError as exc:
                logger.warning(f"Weather API request failed: {exc}")
                raise WeatherServiceError("Failed to fetch weather data.") from exc

        if response.is_error:
            raise WeatherServiceError("Weather service unavailable", status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise WeatherServiceError("Weather service returned malformed data.") from exc
