"""
Money Trainer Schemas

Request/response models for the sales-answer trainer.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from esoteric_planner.shared.schemas.common import EntityResponse


class TrainerSampleCreate(BaseModel):
    """Reference answer used as a few-shot example."""

    client_question: str = Field(min_length=1)
    expert_draft: Optional[str] = None
    improved_answer: str = Field(min_length=1)
    coach_feedback: Optional[str] = None
    pain_type: Optional[str] = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list)


class TrainerSampleResponse(EntityResponse):
    client_question: str
    expert_draft: Optional[str] = None
    improved_answer: str
    coach_feedback: Optional[str] = None
    pain_type: Optional[str] = None
    tags: list[str]


class TrainerGenerateRequest(BaseModel):
    client_question: str = Field(min_length=1)
    expert_draft: str = Field(min_length=1)
    pain_type: Optional[str] = Field(default=None, max_length=100)
    offer_type: Optional[str] = Field(default=None, max_length=100)


class TrainerGenerateResponse(BaseModel):
    improved_answer: str
    session_id: UUID


class TrainerSessionResponse(EntityResponse):
    client_question: str
    expert_draft: str
    improved_answer: str
    pain_type: Optional[str] = None
    offer_type: Optional[str] = None
