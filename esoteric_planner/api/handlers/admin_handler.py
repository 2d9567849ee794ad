"""
Admin Handler

Admin-only dashboard, user management and promocode management.
Every endpoint depends on AdminUser (403 for regular users).
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from esoteric_planner.api.dependencies.auth import AdminUser
from esoteric_planner.api.dependencies.services import get_admin_service, get_promocode_service
from esoteric_planner.shared.schemas.admin import (
    AdminStatsResponse,
    AdminUserResponse,
    ExtendAccessRequest,
    PromocodeCreate,
    PromocodeResponse,
)
from esoteric_planner.shared.services.admin_service import AdminService
from esoteric_planner.shared.services.promocode_service import PromocodeService


router = APIRouter()


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
):
    return await service.get_stats()


# ═══════════════════════════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════════════════════════

@router.get("/users", response_model=list[AdminUserResponse])
async def list_users(
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
):
    return await service.list_users()


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
):
    """
    Delete a user and all of their content.

    Raises:
        400: Admin tried to delete their own account
        404: User not found
    """
    await service.delete_user(admin, user_id)


@router.post("/users/{user_id}/extend", response_model=AdminUserResponse)
async def extend_user_access(
    user_id: UUID,
    data: ExtendAccessRequest,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
):
    return await service.extend_user_access(user_id, data.days, data.tier)


# ═══════════════════════════════════════════════════════════════════════════════
# PROMOCODES
# ═══════════════════════════════════════════════════════════════════════════════

@router.get("/promocodes", response_model=list[PromocodeResponse])
async def list_promocodes(
    admin: AdminUser,
    service: PromocodeService = Depends(get_promocode_service),
):
    return await service.list_all()


@router.post(
    "/promocodes",
    response_model=PromocodeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_promocode(
    data: PromocodeCreate,
    admin: AdminUser,
    service: PromocodeService = Depends(get_promocode_service),
):
    """
    Raises:
        409: Code already exists
    """
    return await service.create(
        data.code,
        bonus_days=data.bonus_days,
        max_uses=data.max_uses,
        expires_at=data.expires_at,
        created_by=admin.id,
    )
