"""
User Entity Model

Represents a registered practitioner (tarot reader, astrologer, ...).

Every piece of generated content belongs to exactly one user through a
user_id foreign key. Access to generation is decided from the
subscription columns below (see AccessService).

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                      │ 550e8400-e29b-41d4-a716-446655440000               │
│ email                   │ "reader@example.com"                               │
│ password_hash           │ "$2b$12$..."                                       │
│ subscription_tier       │ "trial"                                            │
│ trial_ends_at           │ 2025-01-04T10:00:00Z                               │
│ subscription_expires_at │ NULL                                               │
│ generations_used        │ 7                                                  │
│ daily_generations_used  │ 2                                                  │
│ last_generation_date    │ "2025-01-02"                                       │
│ is_admin                │ false                                              │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from esoteric_planner.shared.models.base import Base, TimestampMixin, UUIDType
from esoteric_planner.shared.models.enums import SubscriptionTier


class User(Base, TimestampMixin):
    """
    User model representing a registered application user.

    Attributes:
        id: Unique identifier (UUID v4)
        email: Login email (unique, indexed)
        password_hash: Bcrypt hashed password
        subscription_tier: trial / free / monthly / yearly
        trial_ends_at: End of the trial period
        subscription_expires_at: End of the paid period
        generations_used: Lifetime number of successful generations
        generations_limit: Quota applied to the free tier
        daily_generations_used: Generations on last_generation_date
        last_generation_date: ISO date (YYYY-MM-DD) of the last generation
        is_admin: Grants admin endpoints and unlimited generation
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHENTICATION
    # ═══════════════════════════════════════════════════════════════════════════

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    password_hash: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    first_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nickname: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    profile_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # SUBSCRIPTION
    # ═══════════════════════════════════════════════════════════════════════════

    # Stored as plain string so that legacy NULL / unknown values survive
    subscription_tier: Mapped[Optional[str]] = mapped_column(
        String(20),
        default=SubscriptionTier.TRIAL.value,
        nullable=True,
    )

    trial_ends_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    subscription_expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # GENERATION COUNTERS
    # ═══════════════════════════════════════════════════════════════════════════

    generations_used: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    generations_limit: Mapped[int] = mapped_column(Integer, default=50, nullable=False)
    daily_generations_used: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_generation_date: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def tier(self) -> Optional[SubscriptionTier]:
        """Parsed subscription tier, None when unset or unknown."""
        try:
            return SubscriptionTier(self.subscription_tier) if self.subscription_tier else None
        except ValueError:
            return None

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email}, tier={self.subscription_tier})>"
