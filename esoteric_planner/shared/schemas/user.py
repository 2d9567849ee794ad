"""
User Schemas

Request/response models for user, authentication and access endpoints.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from esoteric_planner.config.settings import settings
from esoteric_planner.shared.schemas.common import BaseSchema


class RegisterRequest(BaseModel):
    """
    Schema for user registration.

    No password: a random one is generated and emailed to the user.
    """

    email: EmailStr
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)


class RegisterResponse(BaseModel):
    message: str
    user_id: UUID


class LoginRequest(BaseModel):
    """Schema for user login."""

    email: EmailStr
    password: str = Field(min_length=1)


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetConfirm(BaseModel):
    """Schema for setting a new password with a reset token."""

    email: EmailStr
    token: str = Field(min_length=1)
    new_password: str = Field(
        min_length=settings.MIN_PASSWORD_LENGTH,
        description=f"New password (minimum {settings.MIN_PASSWORD_LENGTH} characters)",
    )


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(
        min_length=settings.MIN_PASSWORD_LENGTH,
        description=f"New password (minimum {settings.MIN_PASSWORD_LENGTH} characters)",
    )


class UpdateProfileRequest(BaseModel):
    nickname: Optional[str] = Field(default=None, max_length=255)


class UserResponse(BaseSchema):
    """Schema for the current user's profile."""

    id: UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nickname: Optional[str] = None
    profile_image_url: Optional[str] = None
    is_admin: bool = False
    subscription_tier: Optional[str] = None
    trial_ends_at: Optional[datetime] = None
    subscription_expires_at: Optional[datetime] = None
    generations_used: int = 0
    generations_limit: int = 0
    daily_generations_used: int = 0
    last_generation_date: Optional[str] = None
    last_login_at: Optional[datetime] = None
    created_at: datetime


class LoginResponse(BaseModel):
    """Schema for authentication response."""

    message: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse


# ═══════════════════════════════════════════════════════════════════════════════
# ACCESS & LIMITS
# ═══════════════════════════════════════════════════════════════════════════════


class AccessStatusResponse(BaseModel):
    """
    Whether the user currently has access to the app.

    days_left is -1 for admins (unlimited).
    """

    has_access: bool
    days_left: Optional[int] = None
    reason: Optional[str] = None


class GenerationLimitResponse(BaseModel):
    """
    Generation quota of the user.

    remaining is -1 when generations are unlimited.
    """

    allowed: bool
    remaining: int
    reason: Optional[str] = None
    generations_used: int
    daily_generations_used: int
