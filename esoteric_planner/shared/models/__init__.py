"""
SQLAlchemy Models

This package contains all database models of the application.

Model Hierarchy:
================
    User
       ├── ContentStrategy       (user_id)
       ├── ArchetypeResult       (user_id)
       ├── VoicePost             (user_id)
       ├── CaseStudy             (user_id)
       ├── SalesTrainerSession   (user_id)
       ├── PasswordResetToken    (user_id)
       ├── PromocodeUsage        (user_id) ──▶ Promocode
       └── Payment               (user_id)

    SalesTrainerSample  ← global, curated by admins

Usage:
======
    from esoteric_planner.shared.models import User, ContentStrategy
"""

from esoteric_planner.shared.models.base import (
    Base,
    CreatedAtMixin,
    TimestampMixin,
    JSONType,
    UUIDType,
    utcnow,
    as_utc,
)
from esoteric_planner.shared.models.enums import (
    SubscriptionTier,
    ContentGoal,
    StrategyType,
    ContentFormat,
    PlanType,
    PaymentStatus,
)
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.models.password_reset_token import PasswordResetToken
from esoteric_planner.shared.models.content_strategy import ContentStrategy
from esoteric_planner.shared.models.archetype_result import ArchetypeResult
from esoteric_planner.shared.models.voice_post import VoicePost
from esoteric_planner.shared.models.case_study import CaseStudy
from esoteric_planner.shared.models.sales_trainer import SalesTrainerSample, SalesTrainerSession
from esoteric_planner.shared.models.promocode import Promocode, PromocodeUsage
from esoteric_planner.shared.models.payment import Payment

__all__ = [
    # Base classes and helpers
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "JSONType",
    "UUIDType",
    "utcnow",
    "as_utc",
    # Enums
    "SubscriptionTier",
    "ContentGoal",
    "StrategyType",
    "ContentFormat",
    "PlanType",
    "PaymentStatus",
    # Models
    "User",
    "PasswordResetToken",
    "ContentStrategy",
    "ArchetypeResult",
    "VoicePost",
    "CaseStudy",
    "SalesTrainerSample",
    "SalesTrainerSession",
    "Promocode",
    "PromocodeUsage",
    "Payment",
]
