"""Carbon savings statistics schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PeriodStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    co2_saved: float = Field(default=0.0, alias="co2Saved")
    trips: int = 0
    distance: float = 0.0
    calories: int = 0


class GoalProgress(BaseModel):
    target: float
    achieved: float
    remaining: float
    progress: float = Field(description="Percentage of the monthly goal reached, capped at 100.")


class StatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    today: PeriodStats
    week: PeriodStats
    month: PeriodStats
    all_time: PeriodStats = Field(alias="allTime")
    monthly_goal: GoalProgress = Field(alias="monthlyGoal")
