"""
Enums used across the application.
"""

from enum import Enum


class SubscriptionTier(str, Enum):
    """
    Subscription level of a user.

    TRIAL is granted at registration for settings.TRIAL_DAYS.
    FREE has a lifetime generation quota instead of a time limit.
    MONTHLY and YEARLY are paid and last until subscription_expires_at.
    """

    TRIAL = "trial"
    FREE = "free"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def is_paid(self) -> bool:
        return self in (SubscriptionTier.MONTHLY, SubscriptionTier.YEARLY)


class ContentGoal(str, Enum):
    """What a content plan is meant to achieve."""

    SALE = "sale"
    ENGAGEMENT = "engagement"


class StrategyType(str, Enum):
    """Shape of a content plan."""

    GENERAL = "general"
    LAUNCH = "launch"


class ContentFormat(str, Enum):
    """The four format variants of a planned post."""

    POST = "post"
    CAROUSEL = "carousel"
    REELS = "reels"
    STORIES = "stories"


class PlanType(str, Enum):
    """Paid plans sold through the payment gateway."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class PaymentStatus(str, Enum):
    """Payment state as reported by the gateway."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
