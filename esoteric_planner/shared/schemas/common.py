"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, populate_by_name)
- Generic Responses: MessageResponse, ErrorResponse
- EntityResponse: id + created_at for every persisted resource

Usage:
======
    from esoteric_planner.shared.schemas.common import BaseSchema, EntityResponse

    class VoicePostResponse(EntityResponse):
        original_text: str

    # In route handler
    return VoicePostResponse.model_validate(post)
"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from esoteric_planner.config.settings import settings


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All response schemas should inherit from this class.
    Provides:
    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class EntityResponse(BaseSchema):
    """Fields shared by every persisted resource."""

    id: UUID
    created_at: datetime


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """Simple message response for success confirmations."""

    message: str
    success: bool = True


class ErrorDetail(BaseModel):
    """Error detail structure in error responses."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response schema.

    All API errors return this format for consistency.

    Example:
        {
            "error": {
                "code": "GENERATION_LIMIT",
                "message": "Free generations are used up",
                "details": {"limit_reached": true, "remaining": 0}
            }
        }
    """

    error: ErrorDetail


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "esoteric-planner"
    version: str = settings.APP_VERSION
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
