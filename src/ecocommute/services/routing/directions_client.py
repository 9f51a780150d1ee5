"""HTTP client for the Mapbox Directions API."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

import httpx

from ...config import settings
from ...models.domain import Coordinate
from .errors import ProviderUnavailableError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class MapboxDirectionsClient:
    def __init__(
        self,
        base_url: str | None = None,
        access_token: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.mapbox_base_url).rstrip("/")
        self.access_token = access_token if access_token is not None else settings.mapbox_access_token
        if not self.access_token:
            raise ValueError("Mapbox access token is not configured.")
        self.timeout = timeout if timeout is not None else settings.directions_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.directions_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.directions_backoff_seconds
        self._transport = transport

    def _get_client(self, timeout: float) -> httpx.Client:
        # One client per call; the gateway invokes this from worker threads.
        return httpx.Client(
            timeout=httpx.Timeout(timeout, connect=min(timeout, 5.0)),
            transport=self._transport,
        )

    def build_params(self) -> dict:
        return {
            "geometries": "geojson",
            "steps": "true",
            "overview": "full",
            "alternatives": "true",
            "annotations": "distance,duration",
            "access_token": self.access_token,
        }

    def directions(
        self,
        profile: str,
        origin: Coordinate,
        destination: Coordinate,
        cancel_event: Optional[threading.Event] = None,
        timeout: float | None = None,
    ) -> dict:
        """Request directions for one profile between two coordinates.

        ``timeout`` caps the per-request timeout below the configured one, so a
        caller with a deadline does not leave requests running past it.

        Returns the decoded provider payload. Raises ProviderUnavailableError for
        transport failures, error statuses and provider-side error codes such as
        ``NoRoute``.
        """
        coordinate_str = ";".join(",".join(map(str, point.as_lon_lat())) for point in (origin, destination))
        url = f"{self.base_url}/directions/v5/mapbox/{profile}/{coordinate_str}"
        params = self.build_params()

        effective_timeout = self.timeout if timeout is None else max(min(self.timeout, timeout), 0.1)
        client = self._get_client(effective_timeout)
        try:
            attempt = 0
            while True:
                if cancel_event is not None and cancel_event.is_set():
                    raise ProviderUnavailableError(f"Directions request for '{profile}' was cancelled.")
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    data = response.json()
                    code = data.get("code", "Ok")
                    if code != "Ok":
                        message = data.get("message") or code
                        raise ProviderUnavailableError(f"Directions provider returned {code} for '{profile}': {message}")
                    return data
                except httpx.HTTPStatusError as exc:
                    status_code = exc.response.status_code
                    if status_code not in RETRYABLE_STATUS_CODES or attempt >= self.max_retries:
                        raise ProviderUnavailableError(
                            f"Directions provider responded with HTTP {status_code} for '{profile}'."
                        ) from exc
                except (httpx.TimeoutException, httpx.NetworkError) as exc:
                    if attempt >= self.max_retries:
                        raise ProviderUnavailableError(
                            f"Failed to reach directions provider at {self.base_url} for '{profile}': {exc}"
                        ) from exc
                except ValueError as exc:
                    raise ProviderUnavailableError(f"Directions provider returned malformed JSON for '{profile}'.") from exc

                attempt += 1
                wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                logger.debug(
                    f"Directions request for '{profile}' failed, retrying in {wait_time:.1f}s "
                    f"(attempt {attempt}/{self.max_retries})"
                )
                if cancel_event is not None:
                    if cancel_event.wait(wait_time):
                        raise ProviderUnavailableError(f"Directions request for '{profile}' was cancelled.")
                else:
                    time.sleep(wait_time)
        finally:
            client.close()


def check_health(base_url: str | None = None, access_token: str | None = None) -> bool:
    """Probe the directions provider with a short walking request."""
    token = access_token or settings.mapbox_access_token
    if not token:
        return False
    base = (base_url or settings.mapbox_base_url).rstrip("/")
    url = f"{base}/directions/v5/mapbox/walking/13.388860,52.517037;13.385983,52.496891"
    try:
        response = httpx.get(url, params={"access_token": token, "overview": "false"}, timeout=5.0)
        response.raise_for_status()
        return response.json().get("code") == "Ok"
    except (httpx.HTTPError, ValueError):
        return False
