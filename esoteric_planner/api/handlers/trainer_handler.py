"""
Money Trainer Handler

The expert pastes a client's question and a draft answer; the model
rewrites the draft using curated samples as few-shot examples.

Endpoints:
==========
    GET  /api/trainer/samples    → All curated samples
    POST /api/trainer/samples    → Add a sample (admin)
    GET  /api/trainer/sessions   → User's trainer history
    POST /api/trainer/generate   → Improve a draft (consumes a generation)
"""

from fastapi import APIRouter, Depends, status

from esoteric_planner.api.dependencies.auth import AdminUser, CurrentUser
from esoteric_planner.api.dependencies.services import get_trainer_service
from esoteric_planner.shared.schemas.trainer import (
    TrainerGenerateRequest,
    TrainerGenerateResponse,
    TrainerSampleCreate,
    TrainerSampleResponse,
    TrainerSessionResponse,
)
from esoteric_planner.shared.services.trainer_service import TrainerService


router = APIRouter()


@router.get("/samples", response_model=list[TrainerSampleResponse])
async def list_samples(
    current_user: CurrentUser,
    service: TrainerService = Depends(get_trainer_service),
):
    return await service.list_samples()


@router.post(
    "/samples",
    response_model=TrainerSampleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_sample(
    data: TrainerSampleCreate,
    admin: AdminUser,
    service: TrainerService = Depends(get_trainer_service),
):
    return await service.create_sample(**data.model_dump())


@router.get("/sessions", response_model=list[TrainerSessionResponse])
async def list_sessions(
    current_user: CurrentUser,
    service: TrainerService = Depends(get_trainer_service),
):
    return await service.list_sessions(current_user)


@router.post("/generate", response_model=TrainerGenerateResponse)
async def generate_answer(
    data: TrainerGenerateRequest,
    current_user: CurrentUser,
    service: TrainerService = Depends(get_trainer_service),
):
    """
    Improve the expert's draft answer.

    Raises:
        400: Question or draft missing
        403: Generation limit reached
        502: The model call failed
    """
    session = await service.generate_answer(
        current_user,
        data.client_question,
        data.expert_draft,
        pain_type=data.pain_type,
        offer_type=data.offer_type,
    )
    return TrainerGenerateResponse(
        improved_answer=session.improved_answer,
        session_id=session.id,
    )
