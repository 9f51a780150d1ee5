"""Travel preference endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...persistence.users import UserRepository
from ...schemas.preferences import PreferencesModel, PreferencesUpdate
from ...services.preferences.service import get_preferences, update_preferences
from ..deps import get_current_user_id, get_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesModel, status_code=status.HTTP_200_OK)
def read_preferences(
    user_id: str = Depends(get_current_user_id),
    repository: UserRepository = Depends(get_repository),
) -> PreferencesModel:
    try:
        return get_preferences(repository, user_id)
    except Exception as exc:
        logger.exception(f"Error fetching preferences: {exc}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error") from exc


@router.post("", response_model=PreferencesModel, status_code=status.HTTP_200_OK)
def write_preferences(
    payload: PreferencesUpdate,
    user_id: str = Depends(get_current_user_id),
    repository: UserRepository = Depends(get_repository),
) -> PreferencesModel:
    try:
        return update_preferences(repository, user_id, payload)
    except Exception as exc:
        logger.exception(f"Error updating preferences: {exc}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error") from exc
