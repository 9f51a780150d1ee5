"""Travel preference schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PriorityLabel = Literal["Eco First", "Balanced", "Speed First"]


class PreferencesUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    transport_modes: Optional[List[str]] = Field(default=None, alias="transportModes")
    sustainability_priority: Optional[PriorityLabel] = Field(default=None, alias="sustainabilityPriority")
    max_walking_distance: Optional[float] = Field(default=None, gt=0, alias="maxWalkingDistance")
    max_cycling_distance: Optional[float] = Field(default=None, gt=0, alias="maxCyclingDistance")
    monthly_goal: Optional[float] = Field(default=None, ge=0, alias="monthlyGoal")
    home_address: Optional[str] = Field(default=None, alias="homeAddress")
    work_address: Optional[str] = Field(default=None, alias="workAddress")

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class PreferencesModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transport_modes: List[str] = Field(alias="transportModes")
    sustainability_priority: str = Field(alias="sustainabilityPriority")
    max_walking_distance: Optional[float] = Field(default=None, alias="maxWalkingDistance")
    max_cycling_distance: Optional[float] = Field(default=None, alias="maxCyclingDistance")
    monthly_goal: float = Field(alias="monthlyGoal")
    home_address: str = Field(default="", alias="homeAddress")
    work_address: str = Field(default="", alias="workAddress")
