"""
Admin & Promocode Schemas

Request/response models for admin endpoints and promocode activation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from esoteric_planner.config.settings import settings
from esoteric_planner.shared.models.enums import SubscriptionTier
from esoteric_planner.shared.schemas.common import EntityResponse
from esoteric_planner.shared.schemas.user import UserResponse


class TierBreakdown(BaseModel):
    trial: int = 0
    free: int = 0
    monthly: int = 0
    yearly: int = 0


class AdminStatsResponse(BaseModel):
    """Dashboard numbers for the admin panel."""

    total_users: int
    users_with_access: int
    active_today: int
    active_subscriptions: int
    total_strategies: int
    total_voice_posts: int
    total_cases: int
    tiers: TierBreakdown
    active_trials: int
    expired_trials: int


class AdminUserResponse(UserResponse):
    pass


class ExtendAccessRequest(BaseModel):
    """
    Grant days of access.

    A paid tier extends the subscription, anything else extends the trial.
    Non-positive days are rejected by the service with a 400.
    """

    days: int
    tier: SubscriptionTier = SubscriptionTier.MONTHLY


# ═══════════════════════════════════════════════════════════════════════════════
# PROMOCODES
# ═══════════════════════════════════════════════════════════════════════════════


class PromocodeCreate(BaseModel):
    code: str = Field(min_length=1, max_length=64)
    bonus_days: int = Field(default=settings.PROMOCODE_DEFAULT_BONUS_DAYS, ge=1)
    max_uses: int = Field(default=1, ge=1)
    expires_at: Optional[datetime] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return value.strip().upper()


class PromocodeResponse(EntityResponse):
    code: str
    bonus_days: int
    max_uses: int
    used_count: int
    is_active: bool
    expires_at: Optional[datetime] = None


class PromocodeActivateRequest(BaseModel):
    code: str = Field(min_length=1, max_length=64)


class PromocodeActivateResponse(BaseModel):
    success: bool = True
    message: str
    bonus_days: int
