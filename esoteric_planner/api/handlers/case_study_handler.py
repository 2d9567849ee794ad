"""
Case Study Handler

Client reviews turned into case studies.

Endpoints:
==========
    GET    /api/cases?q=          → List / search user's cases
    POST   /api/cases             → Save a case
    POST   /api/cases/generate    → Review → headlines, quote, body
    POST   /api/cases/clean-text  → OCR cleanup of a review screenshot text
    GET    /api/cases/{id}        → Get one case
    DELETE /api/cases/{id}        → Delete a case
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from esoteric_planner.api.dependencies.auth import CurrentUser
from esoteric_planner.api.dependencies.services import get_case_study_service
from esoteric_planner.shared.schemas.content import (
    CaseGenerateRequest,
    CaseStudyCreate,
    CaseStudyResponse,
    CleanTextRequest,
    CleanTextResponse,
    GeneratedCase,
)
from esoteric_planner.shared.services.library_service import CaseStudyService


router = APIRouter()


@router.get("", response_model=list[CaseStudyResponse])
async def list_cases(
    current_user: CurrentUser,
    q: Optional[str] = Query(default=None, description="Search in review, quote and body"),
    service: CaseStudyService = Depends(get_case_study_service),
):
    return await service.list_cases(current_user, q)


@router.post(
    "",
    response_model=CaseStudyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_case(
    data: CaseStudyCreate,
    current_user: CurrentUser,
    service: CaseStudyService = Depends(get_case_study_service),
):
    return await service.create_case(current_user, **data.model_dump())


@router.post("/generate", response_model=GeneratedCase)
async def generate_case(
    data: CaseGenerateRequest,
    current_user: CurrentUser,
    service: CaseStudyService = Depends(get_case_study_service),
):
    """
    Generate headlines, a quote and a body from a review.

    Raises:
        403: Generation limit reached
        502: The model failed or returned unparseable JSON
    """
    return await service.generate_case(
        current_user,
        data.review_text,
        before=data.before,
        action=data.action,
        after=data.after,
        tags=data.tags,
    )


@router.post("/clean-text", response_model=CleanTextResponse)
async def clean_text(data: CleanTextRequest, current_user: CurrentUser):
    return CleanTextResponse(text=CaseStudyService.clean_text(data.text))


@router.get("/{case_id}", response_model=CaseStudyResponse)
async def get_case(
    case_id: UUID,
    current_user: CurrentUser,
    service: CaseStudyService = Depends(get_case_study_service),
):
    return await service.get_case(current_user, case_id)


@router.delete("/{case_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_case(
    case_id: UUID,
    current_user: CurrentUser,
    service: CaseStudyService = Depends(get_case_study_service),
):
    await service.delete_case(current_user, case_id)
