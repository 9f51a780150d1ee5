"""Route planning endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...persistence.users import UserRepository
from ...schemas.routing import CandidateRouteModel, PlanningErrorModel, RoutePlanRequest
from ...services.preferences.service import load_travel_preferences
from ...services.routing.errors import PlanningError
from ...services.routing.service import plan_routes
from ..deps import get_current_user_id, get_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post(
    "/plan",
    response_model=List[CandidateRouteModel],
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": PlanningErrorModel},
        404: {"model": PlanningErrorModel},
        502: {"model": PlanningErrorModel},
    },
)
def plan(
    payload: RoutePlanRequest,
    user_id: str = Depends(get_current_user_id),
    repository: UserRepository = Depends(get_repository),
) -> List[CandidateRouteModel]:
    try:
        preferences = load_travel_preferences(repository, user_id)
        candidates = plan_routes(payload, preferences)
    except PlanningError:
        raise
    except Exception as exc:
        logger.exception(f"Route planning error: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch routes due to server error. Please try again.",
        ) from exc
    return [CandidateRouteModel.from_candidate(candidate) for candidate in candidates]
