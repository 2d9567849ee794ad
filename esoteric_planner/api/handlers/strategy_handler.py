"""
Strategy Handler

Content plans: saved strategies and the two-step generation pipeline.

Endpoints:
==========
    GET    /api/strategies                    → List user's strategies
    POST   /api/strategies                    → Save a plan
    POST   /api/strategies/generate-ideas     → Step 1: one idea per day
    POST   /api/strategies/generate-format    → Step 2: expand one idea into a format
    POST   /api/strategies/generate           → One-shot full plan (saved)
    GET    /api/strategies/{id}               → Get one strategy
    DELETE /api/strategies/{id}               → Delete a strategy

Generation endpoints are declared before /{strategy_id} so the literal
paths win the match.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from esoteric_planner.api.dependencies.auth import CurrentUser
from esoteric_planner.api.dependencies.services import get_strategy_service
from esoteric_planner.shared.schemas.strategy import (
    FormatContent,
    GenerateFormatRequest,
    GeneratePlanRequest,
    GenerationRequest,
    IdeasResponse,
    StrategyCreateRequest,
    StrategyResponse,
)
from esoteric_planner.shared.services.strategy_service import StrategyService


router = APIRouter()


@router.get("", response_model=list[StrategyResponse])
async def list_strategies(
    current_user: CurrentUser,
    service: StrategyService = Depends(get_strategy_service),
):
    """List user's strategies, newest first."""
    return await service.list_strategies(current_user)


@router.post(
    "",
    response_model=StrategyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_strategy(
    data: StrategyCreateRequest,
    current_user: CurrentUser,
    service: StrategyService = Depends(get_strategy_service),
):
    """Save a plan. Does not consume a generation."""
    return await service.create_strategy(
        current_user,
        topic=data.topic,
        goal=data.goal,
        days=data.days,
        posts=data.posts,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# GENERATION PIPELINE
# ═══════════════════════════════════════════════════════════════════════════════

@router.post("/generate-ideas", response_model=IdeasResponse)
async def generate_ideas(
    data: GenerationRequest,
    current_user: CurrentUser,
    service: StrategyService = Depends(get_strategy_service),
):
    """
    Generate one idea per day.

    Returns:
        The ideas plus the generation input echoed back as context,
        so the client can request formats for each idea.

    Raises:
        403: Generation limit reached
        502: The model failed or returned unparseable JSON
    """
    ideas = await service.generate_ideas(current_user, data)
    return IdeasResponse(ideas=ideas, context=data)


@router.post("/generate-format", response_model=FormatContent)
async def generate_format(
    data: GenerateFormatRequest,
    current_user: CurrentUser,
    service: StrategyService = Depends(get_strategy_service),
):
    return await service.generate_format(current_user, data)


@router.post(
    "/generate",
    response_model=StrategyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_plan(
    data: GeneratePlanRequest,
    current_user: CurrentUser,
    service: StrategyService = Depends(get_strategy_service),
):
    """
    Generate a full plan with every format in one call and save it.

    Raises:
        403: Generation limit reached
        502: The model failed, answered too briefly or returned unparseable JSON
    """
    return await service.generate_plan(current_user, data)


# ═══════════════════════════════════════════════════════════════════════════════
# SINGLE STRATEGY
# ═══════════════════════════════════════════════════════════════════════════════

@router.get("/{strategy_id}", response_model=StrategyResponse)
async def get_strategy(
    strategy_id: UUID,
    current_user: CurrentUser,
    service: StrategyService = Depends(get_strategy_service),
):
    return await service.get_strategy(current_user, strategy_id)


@router.delete("/{strategy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_strategy(
    strategy_id: UUID,
    current_user: CurrentUser,
    service: StrategyService = Depends(get_strategy_service),
):
    await service.delete_strategy(current_user, strategy_id)
