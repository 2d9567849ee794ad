"""
Content Library Schemas

Request/response models for archetype results, voice posts and case studies.
"""

from typing import Optional

from pydantic import BaseModel, Field

from esoteric_planner.shared.schemas.common import EntityResponse


# ═══════════════════════════════════════════════════════════════════════════════
# ARCHETYPES
# ═══════════════════════════════════════════════════════════════════════════════


class ArchetypeResultCreate(BaseModel):
    """
    Quiz result computed by the client.

    The server stores it as is; scoring happens in the browser.
    """

    archetype_name: str = Field(min_length=1)
    archetype_description: str = Field(min_length=1)
    answers: list[int] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    brand_colors: Optional[list[str]] = None
    brand_fonts: Optional[list[str]] = None
    content_style: Optional[list[str]] = None
    trigger_words: Optional[list[str]] = None


class ArchetypeResultResponse(EntityResponse):
    archetype_name: str
    archetype_description: str
    answers: list[int]
    recommendations: list[str]
    brand_colors: Optional[list[str]] = None
    brand_fonts: Optional[list[str]] = None
    content_style: Optional[list[str]] = None
    trigger_words: Optional[list[str]] = None


# ═══════════════════════════════════════════════════════════════════════════════
# VOICE POSTS
# ═══════════════════════════════════════════════════════════════════════════════


class VoicePostCreate(BaseModel):
    original_text: str = Field(min_length=1)
    refined_text: Optional[str] = None
    tone: Optional[str] = Field(default=None, max_length=100)


class VoicePostResponse(EntityResponse):
    original_text: str
    refined_text: Optional[str] = None
    tone: Optional[str] = None


class VoicePostGenerateRequest(BaseModel):
    """Transcript of the expert's spoken text."""

    transcript: str = Field(min_length=1)


class VoicePostGenerateResponse(BaseModel):
    post: str


# ═══════════════════════════════════════════════════════════════════════════════
# CASE STUDIES
# ═══════════════════════════════════════════════════════════════════════════════


class CaseStudyCreate(BaseModel):
    review_text: str = Field(min_length=1)
    before: Optional[str] = None
    action: Optional[str] = None
    after: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    generated_headlines: list[str] = Field(default_factory=list)
    generated_quote: Optional[str] = None
    generated_body: Optional[str] = None


class CaseStudyResponse(EntityResponse):
    review_text: str
    before: Optional[str] = None
    action: Optional[str] = None
    after: Optional[str] = None
    tags: list[str]
    generated_headlines: list[str]
    generated_quote: Optional[str] = None
    generated_body: Optional[str] = None


class CaseGenerateRequest(BaseModel):
    """Client review plus the expert's before/action/after notes."""

    review_text: str = Field(min_length=1)
    before: Optional[str] = None
    action: Optional[str] = None
    after: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class GeneratedCase(BaseModel):
    headlines: list[str] = Field(default_factory=list)
    quote: str = ""
    body: str = ""


class CleanTextRequest(BaseModel):
    text: str


class CleanTextResponse(BaseModel):
    text: str
