"""
Voice Post Handler

Endpoints:
==========
    GET    /api/voice-posts            → List user's voice posts
    POST   /api/voice-posts            → Save a post
    POST   /api/voice-posts/generate   → Transcript → post (consumes a generation)
    DELETE /api/voice-posts/{id}       → Delete a post
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from esoteric_planner.api.dependencies.auth import CurrentUser
from esoteric_planner.api.dependencies.services import get_voice_post_service
from esoteric_planner.shared.schemas.content import (
    VoicePostCreate,
    VoicePostGenerateRequest,
    VoicePostGenerateResponse,
    VoicePostResponse,
)
from esoteric_planner.shared.services.library_service import VoicePostService


router = APIRouter()


@router.get("", response_model=list[VoicePostResponse])
async def list_voice_posts(
    current_user: CurrentUser,
    service: VoicePostService = Depends(get_voice_post_service),
):
    return await service.list_posts(current_user)


@router.post(
    "",
    response_model=VoicePostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_voice_post(
    data: VoicePostCreate,
    current_user: CurrentUser,
    service: VoicePostService = Depends(get_voice_post_service),
):
    return await service.create_post(
        current_user,
        original_text=data.original_text,
        refined_text=data.refined_text,
        tone=data.tone,
    )


@router.post("/generate", response_model=VoicePostGenerateResponse)
async def generate_voice_post(
    data: VoicePostGenerateRequest,
    current_user: CurrentUser,
    service: VoicePostService = Depends(get_voice_post_service),
):
    """
    Turn a dictated transcript into a post.

    Raises:
        403: Generation limit reached
        502: The model call failed
    """
    post = await service.generate_post(current_user, data.transcript)
    return VoicePostGenerateResponse(post=post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_voice_post(
    post_id: UUID,
    current_user: CurrentUser,
    service: VoicePostService = Depends(get_voice_post_service),
):
    await service.delete_post(current_user, post_id)
