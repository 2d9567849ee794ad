"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schemas, error responses, health
- user: Authentication, profile, access and generation limit
- strategy: Content plans and the generation pipeline
- content: Archetype results, voice posts, case studies
- trainer: Money trainer samples and sessions
- admin: Admin dashboard, access extension, promocodes
- payment: Payment links and history

Usage:
======
    from esoteric_planner.shared.schemas.user import LoginRequest, UserResponse
    from esoteric_planner.shared.schemas.common import ErrorResponse
"""

from esoteric_planner.shared.schemas.common import (
    BaseSchema,
    EntityResponse,
    MessageResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from esoteric_planner.shared.schemas.user import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    PasswordResetRequest,
    PasswordResetConfirm,
    ChangePasswordRequest,
    UpdateProfileRequest,
    UserResponse,
    AccessStatusResponse,
    GenerationLimitResponse,
)
from esoteric_planner.shared.schemas.strategy import (
    FormatContent,
    ContentIdea,
    ContentPost,
    ArchetypeInput,
    StrategyCreateRequest,
    StrategyResponse,
    GenerationRequest,
    GeneratePlanRequest,
    IdeasResponse,
    GenerateFormatRequest,
)
from esoteric_planner.shared.schemas.content import (
    ArchetypeResultCreate,
    ArchetypeResultResponse,
    VoicePostCreate,
    VoicePostResponse,
    VoicePostGenerateRequest,
    VoicePostGenerateResponse,
    CaseStudyCreate,
    CaseStudyResponse,
    CaseGenerateRequest,
    GeneratedCase,
    CleanTextRequest,
    CleanTextResponse,
)
from esoteric_planner.shared.schemas.trainer import (
    TrainerSampleCreate,
    TrainerSampleResponse,
    TrainerGenerateRequest,
    TrainerGenerateResponse,
    TrainerSessionResponse,
)
from esoteric_planner.shared.schemas.admin import (
    TierBreakdown,
    AdminStatsResponse,
    AdminUserResponse,
    ExtendAccessRequest,
    PromocodeCreate,
    PromocodeResponse,
    PromocodeActivateRequest,
    PromocodeActivateResponse,
)
from esoteric_planner.shared.schemas.payment import (
    PaymentCreateRequest,
    PaymentCreateResponse,
    PaymentResponse,
    WebhookAckResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "EntityResponse",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # User
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "PasswordResetRequest",
    "PasswordResetConfirm",
    "ChangePasswordRequest",
    "UpdateProfileRequest",
    "UserResponse",
    "AccessStatusResponse",
    "GenerationLimitResponse",
    # Strategy
    "FormatContent",
    "ContentIdea",
    "ContentPost",
    "ArchetypeInput",
    "StrategyCreateRequest",
    "StrategyResponse",
    "GenerationRequest",
    "GeneratePlanRequest",
    "IdeasResponse",
    "GenerateFormatRequest",
    # Content
    "ArchetypeResultCreate",
    "ArchetypeResultResponse",
    "VoicePostCreate",
    "VoicePostResponse",
    "VoicePostGenerateRequest",
    "VoicePostGenerateResponse",
    "CaseStudyCreate",
    "CaseStudyResponse",
    "CaseGenerateRequest",
    "GeneratedCase",
    "CleanTextRequest",
    "CleanTextResponse",
    # Trainer
    "TrainerSampleCreate",
    "TrainerSampleResponse",
    "TrainerGenerateRequest",
    "TrainerGenerateResponse",
    "TrainerSessionResponse",
    # Admin
    "TierBreakdown",
    "AdminStatsResponse",
    "AdminUserResponse",
    "ExtendAccessRequest",
    "PromocodeCreate",
    "PromocodeResponse",
    "PromocodeActivateRequest",
    "PromocodeActivateResponse",
    # Payment
    "PaymentCreateRequest",
    "PaymentCreateResponse",
    "PaymentResponse",
    "WebhookAckResponse",
]
