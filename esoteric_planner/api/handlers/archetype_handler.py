"""
Archetype Handler

Archetype quiz results. Scoring happens in the client; the server stores
the outcome so later generations can use the archetype's voice.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from esoteric_planner.api.dependencies.auth import CurrentUser
from esoteric_planner.api.dependencies.services import get_archetype_service
from esoteric_planner.shared.schemas.content import ArchetypeResultCreate, ArchetypeResultResponse
from esoteric_planner.shared.services.library_service import ArchetypeService


router = APIRouter()


@router.get("", response_model=list[ArchetypeResultResponse])
async def list_archetype_results(
    current_user: CurrentUser,
    service: ArchetypeService = Depends(get_archetype_service),
):
    return await service.list_results(current_user)


@router.get("/latest", response_model=Optional[ArchetypeResultResponse])
async def get_latest_archetype_result(
    current_user: CurrentUser,
    service: ArchetypeService = Depends(get_archetype_service),
):
    """Most recent result, or null when the quiz was never taken."""
    return await service.get_latest(current_user)


@router.post(
    "",
    response_model=ArchetypeResultResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_archetype_result(
    data: ArchetypeResultCreate,
    current_user: CurrentUser,
    service: ArchetypeService = Depends(get_archetype_service),
):
    return await service.create_result(current_user, **data.model_dump())
