"""Concurrent per-mode fan-out to the directions provider."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from ...config import settings
from ...models.domain import Coordinate, TransportMode
from .directions_client import MapboxDirectionsClient
from .errors import PlanningError
from .modes import ModeProfile

logger = logging.getLogger(__name__)


class DirectionsProvider(Protocol):
    def directions(
        self,
        profile: str,
        origin: Coordinate,
        destination: Coordinate,
        cancel_event: Optional[threading.Event] = None,
        timeout: float | None = None,
    ) -> dict: ...


@dataclass(slots=True)
class ModeResult:
    """Settled outcome of one per-mode directions request."""

    mode: TransportMode
    profile: str
    response: Optional[dict] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.response is not None


class DirectionsGateway:
    """Issues one directions request per mode and joins on all of them.

    A failing mode never aborts the others. Modes still in flight when the
    deadline expires are reported as failed and asked to stop retrying; each
    request's timeout is capped at the time left before the deadline.
    """

    def __init__(
        self,
        client: DirectionsProvider | None = None,
        deadline_seconds: float | None = None,
        max_parallel_requests: int | None = None,
    ) -> None:
        self.client = client or MapboxDirectionsClient()
        self.deadline_seconds = deadline_seconds if deadline_seconds is not None else settings.directions_deadline_seconds
        self.max_parallel_requests = max_parallel_requests or settings.directions_max_parallel_requests

    def _timeout_message(self) -> str:
        return f"Timed out after {self.deadline_seconds:.1f}s"

    def _fetch_one(
        self,
        mode_profile: ModeProfile,
        origin: Coordinate,
        destination: Coordinate,
        cancel_event: threading.Event,
        deadline_at: float,
    ) -> ModeResult:
        remaining = deadline_at - time.monotonic()
        if remaining <= 0:
            return ModeResult(mode=mode_profile.mode, profile=mode_profile.profile, error=self._timeout_message())
        try:
            response = self.client.directions(
                mode_profile.profile, origin, destination, cancel_event=cancel_event, timeout=remaining
            )
        except PlanningError as exc:
            logger.warning(f"Directions request failed for {mode_profile.mode.value}: {exc.message}")
            return ModeResult(mode=mode_profile.mode, profile=mode_profile.profile, error=exc.message)
        except Exception as exc:
            logger.warning(f"Unexpected directions failure for {mode_profile.mode.value}: {exc}")
            return ModeResult(mode=mode_profile.mode, profile=mode_profile.profile, error=str(exc))
        return ModeResult(mode=mode_profile.mode, profile=mode_profile.profile, response=response)

    def fetch(
        self,
        origin: Coordinate,
        destination: Coordinate,
        profiles: Sequence[ModeProfile],
    ) -> list[ModeResult]:
        """Fetch directions for every profile and return results in completion order."""
        if not profiles:
            return []

        start_time = time.monotonic()
        deadline_at = start_time + self.deadline_seconds
        cancel_event = threading.Event()
        results: list[ModeResult] = []

        executor = ThreadPoolExecutor(
            max_workers=min(self.max_parallel_requests, len(profiles)),
            thread_name_prefix="directions",
        )
        try:
            future_to_profile: dict[Future, ModeProfile] = {
                executor.submit(self._fetch_one, mode_profile, origin, destination, cancel_event, deadline_at): mode_profile
                for mode_profile in profiles
            }
            pending = set(future_to_profile)
            while pending:
                remaining = deadline_at - time.monotonic()
                if remaining <= 0:
                    break
                done, pending = wait(pending, timeout=remaining, return_when=FIRST_COMPLETED)
                for future in done:
                    results.append(future.result())

            if pending:
                cancel_event.set()
                for future in pending:
                    mode_profile = future_to_profile[future]
                    future.cancel()
                    logger.warning(
                        f"Directions request for {mode_profile.mode.value} did not settle within "
                        f"{self.deadline_seconds:.1f}s; treating it as failed"
                    )
                    results.append(
                        ModeResult(
                            mode=mode_profile.mode,
                            profile=mode_profile.profile,
                            error=self._timeout_message(),
                        )
                    )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        succeeded = sum(1 for result in results if result.ok)
        logger.info(
            f"Directions fan-out settled: {succeeded}/{len(profiles)} modes succeeded "
            f"in {time.monotonic() - start_time:.2f}s"
        )
        return results
