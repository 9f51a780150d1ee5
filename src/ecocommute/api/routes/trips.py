"""Trip history endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...persistence.users import UserRepository
from ...schemas.trips import TripCreate, TripModel, TripSavedResponse
from ...services.trips.service import TripValidationError, clear_trips, list_trips, save_trip
from ..deps import get_current_user_id, get_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


@router.get("", response_model=List[TripModel], status_code=status.HTTP_200_OK)
def get_trips(
    user_id: str = Depends(get_current_user_id),
    repository: UserRepository = Depends(get_repository),
) -> List[TripModel]:
    """Return the caller's trip history, newest first."""
    try:
        return list_trips(repository, user_id)
    except Exception as exc:
        logger.exception(f"Get history error: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch trip history",
        ) from exc


@router.post("", response_model=TripSavedResponse, status_code=status.HTTP_201_CREATED)
def create_trip(
    payload: TripCreate,
    user_id: str = Depends(get_current_user_id),
    repository: UserRepository = Depends(get_repository),
) -> TripSavedResponse:
    try:
        return save_trip(repository, user_id, payload)
    except TripValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Validation failed", "details": exc.details},
        ) from exc
    except Exception as exc:
        logger.exception(f"Error saving trip: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save trip due to server error. Please try again.",
        ) from exc


@router.delete("", status_code=status.HTTP_200_OK)
def delete_trips(
    user_id: str = Depends(get_current_user_id),
    repository: UserRepository = Depends(get_repository),
) -> dict:
    try:
        clear_trips(repository, user_id)
    except Exception as exc:
        logger.exception(f"Clear history error: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to clear history",
        ) from exc
    return {"message": "Trip history cleared successfully"}
