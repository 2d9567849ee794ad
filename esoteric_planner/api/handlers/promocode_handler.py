"""
Promocode Handler

    POST /api/promocodes/activate → apply a code's bonus days to the current user
"""

from fastapi import APIRouter, Depends

from esoteric_planner.api.dependencies.auth import CurrentUser
from esoteric_planner.api.dependencies.services import get_promocode_service
from esoteric_planner.shared.schemas.admin import (
    PromocodeActivateRequest,
    PromocodeActivateResponse,
)
from esoteric_planner.shared.services.promocode_service import PromocodeService


router = APIRouter()


@router.post("/activate", response_model=PromocodeActivateResponse)
async def activate_promocode(
    data: PromocodeActivateRequest,
    current_user: CurrentUser,
    service: PromocodeService = Depends(get_promocode_service),
):
    """
    Raises:
        400: Code unknown, inactive, expired, exhausted or already used by this user
    """
    promocode, message = await service.activate(current_user, data.code)
    return PromocodeActivateResponse(message=message, bonus_days=promocode.bonus_days)
