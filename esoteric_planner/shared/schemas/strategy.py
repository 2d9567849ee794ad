"""
Content Strategy Schemas

Request/response models for content plans and the generation pipeline.

Plan Shape:
===========
    ContentStrategy.posts = [
        ContentPost(
            day=1,
            idea="Почему расклады не сбываются",
            type="Экспертный",
            post=FormatContent(content="...", hashtags=["#таро"]),
            carousel=FormatContent(...),   # slides separated by ---
            reels=FormatContent(...),
            stories=FormatContent(...),
        ),
        ...
    ]
"""

from typing import Optional

from pydantic import BaseModel, Field

from esoteric_planner.shared.models.enums import ContentFormat, ContentGoal, StrategyType
from esoteric_planner.shared.schemas.common import EntityResponse


class FormatContent(BaseModel):
    """One format variant of a planned post."""

    content: str = ""
    hashtags: list[str] = Field(default_factory=list)


class ContentIdea(BaseModel):
    day: int
    idea: str
    type: str = ""


class ContentPost(ContentIdea):
    """A planned day with all four format variants."""

    post: FormatContent = Field(default_factory=FormatContent)
    carousel: FormatContent = Field(default_factory=FormatContent)
    reels: FormatContent = Field(default_factory=FormatContent)
    stories: FormatContent = Field(default_factory=FormatContent)


class ArchetypeInput(BaseModel):
    """Brand archetype injected into generation prompts."""

    name: str = Field(min_length=1)
    description: str = ""
    recommendations: list[str] = Field(default_factory=list)
    trigger_words: Optional[list[str]] = None
    content_style: Optional[list[str]] = None
    tone: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# CRUD
# ═══════════════════════════════════════════════════════════════════════════════


class StrategyCreateRequest(BaseModel):
    """Schema for saving a content plan."""

    topic: str = Field(min_length=1)
    goal: ContentGoal
    days: int = Field(ge=1, le=30)
    posts: list[ContentPost] = Field(default_factory=list)


class StrategyResponse(EntityResponse):
    topic: str
    goal: Optional[str] = None
    days: int
    posts: list[ContentPost]


# ═══════════════════════════════════════════════════════════════════════════════
# GENERATION
# ═══════════════════════════════════════════════════════════════════════════════


class GenerationRequest(BaseModel):
    """
    Input of the ideas step and of the one-shot plan.

    A sale goal without a product sells a consultation.
    """

    goal: ContentGoal
    niche: str = Field(min_length=1, max_length=500)
    days: int = Field(default=7, ge=1, le=30)
    product: Optional[str] = Field(default=None, max_length=500)
    strategy: StrategyType = StrategyType.GENERAL
    archetype: Optional[ArchetypeInput] = None


class GeneratePlanRequest(GenerationRequest):
    """One-shot plan; topic defaults to the niche."""

    topic: Optional[str] = None


class IdeasResponse(BaseModel):
    ideas: list[ContentIdea]
    context: GenerationRequest


class GenerateFormatRequest(BaseModel):
    """Input of the on-demand format step."""

    goal: ContentGoal
    niche: str = Field(min_length=1, max_length=500)
    product: Optional[str] = Field(default=None, max_length=500)
    idea: str = Field(min_length=1)
    type: str = ""
    format: ContentFormat
    archetype: Optional[ArchetypeInput] = None
