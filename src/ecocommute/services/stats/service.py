"""Aggregation of saved trips into carbon savings statistics."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable

from ...schemas.stats import GoalProgress, PeriodStats, StatsResponse


def _as_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _as_int(value) -> int:
    return int(_as_float(value))


def _trip_date(trip: dict) -> datetime | None:
    value = trip.get("date")
    try:
        parsed = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def period_starts(now: datetime) -> dict[str, datetime]:
    """Start of today, this week (weeks begin on Sunday) and this month."""
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    days_since_sunday = (today.weekday() + 1) % 7
    return {
        "today": today,
        "week": today - timedelta(days=days_since_sunday),
        "month": today.replace(day=1),
    }


def goal_progress(achieved: float, target: float) -> GoalProgress:
    progress = min(achieved / target * 100, 100.0) if target > 0 else 0.0
    return GoalProgress(
        target=target,
        achieved=round(achieved, 2),
        remaining=round(max(target - achieved, 0.0), 2),
        progress=round(progress, 1),
    )


def compute_stats(trips: Iterable[dict], monthly_goal: float, now: datetime | None = None) -> StatsResponse:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    starts = period_starts(now)
    totals = {name: PeriodStats() for name in ("today", "week", "month", "all_time")}

    for trip in trips:
        co2 = _as_float(trip.get("co2Saved"))
        distance = _as_float(trip.get("distance"))
        calories = _as_int(trip.get("calories"))
        trip_date = _trip_date(trip)

        buckets = ["all_time"]
        if trip_date is not None:
            buckets.extend(name for name, start in starts.items() if trip_date >= start)
        for name in buckets:
            bucket = totals[name]
            bucket.co2_saved += co2
            bucket.trips += 1
            bucket.distance += distance
            bucket.calories += calories

    for bucket in totals.values():
        bucket.co2_saved = round(bucket.co2_saved, 2)
        bucket.distance = round(bucket.distance, 1)

    return StatsResponse(
        today=totals["today"],
        week=totals["week"],
        month=totals["month"],
        all_time=totals["all_time"],
        monthly_goal=goal_progress(totals["month"].co2_saved, monthly_goal),
    )
