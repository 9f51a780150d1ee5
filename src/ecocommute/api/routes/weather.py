"""Weather passthrough endpoint."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from ...services.weather.client import WeatherClient, WeatherServiceError
from ..deps import get_current_user_id

router = APIRouter(tags=["weather"])


@router.get("/weather", status_code=status.HTTP_200_OK, dependencies=[Depends(get_current_user_id)])
def read_weather(
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
):
    if lat is None or lon is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Latitude and Longitude are required."},
        )
    try:
        return WeatherClient().current(lat, lon)
    except ValueError as exc:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": str(exc)})
    except WeatherServiceError as exc:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})
