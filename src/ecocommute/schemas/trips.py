"""Trip history schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TripCreate(BaseModel):
    """Inbound trip payload; values are checked by the trip service so every problem is reported at once."""

    model_config = ConfigDict(populate_by_name=True)

    origin_name: Any = Field(default=None, alias="originName")
    destination_name: Any = Field(default=None, alias="destinationName")
    origin_coords: Any = Field(default=None, alias="originCoords")
    destination_coords: Any = Field(default=None, alias="destinationCoords")
    mode: Any = None
    distance: Any = None
    duration: Any = None
    co2_saved: Any = Field(default=None, alias="co2Saved")
    calories: Any = None


class LatLng(BaseModel):
    lat: float
    lng: float


class TripModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    origin_name: str = Field(alias="originName")
    destination_name: str = Field(alias="destinationName")
    origin_coords: Optional[LatLng] = Field(default=None, alias="originCoords")
    destination_coords: Optional[LatLng] = Field(default=None, alias="destinationCoords")
    mode: str
    distance: float
    duration: int
    co2_saved: float = Field(alias="co2Saved")
    calories: int = 0
    date: datetime


class TripSavedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    trip: TripModel
    total_trips: int = Field(alias="totalTrips")
