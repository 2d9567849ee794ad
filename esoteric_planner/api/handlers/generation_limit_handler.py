"""
Generation Limit Handler

    GET /api/generation-limit → whether the user may generate right now
"""

from fastapi import APIRouter, Depends

from esoteric_planner.api.dependencies.auth import CurrentUser
from esoteric_planner.api.dependencies.services import get_access_service
from esoteric_planner.shared.schemas.user import GenerationLimitResponse
from esoteric_planner.shared.services.access_service import AccessService


router = APIRouter()


@router.get("", response_model=GenerationLimitResponse)
async def get_generation_limit(
    current_user: CurrentUser,
    access_service: AccessService = Depends(get_access_service),
):
    allowance = access_service.get_generation_allowance(current_user)
    return GenerationLimitResponse(
        allowed=allowance.allowed,
        remaining=allowance.remaining,
        reason=allowance.reason,
        generations_used=current_user.generations_used or 0,
        daily_generations_used=current_user.daily_generations_used or 0,
    )
