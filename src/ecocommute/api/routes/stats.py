"""Carbon savings statistics endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...persistence.users import UserRepository
from ...schemas.stats import StatsResponse
from ...services.preferences.service import monthly_goal
from ...services.stats.service import compute_stats
from ..deps import get_current_user_id, get_repository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=StatsResponse, status_code=status.HTTP_200_OK)
def read_stats(
    user_id: str = Depends(get_current_user_id),
    repository: UserRepository = Depends(get_repository),
) -> StatsResponse:
    try:
        return compute_stats(repository.get_trips(user_id), monthly_goal(repository, user_id))
    except Exception as exc:
        logger.exception(f"Stats error: {exc}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server Error") from exc
