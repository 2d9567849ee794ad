"""
Access Service

Subscription access, generation limits and access extension.

Access Rules:
=============
    admin                                  → access, days_left = -1
    monthly/yearly, expires in the future  → access, days_left = ceil(days until expiry)
    trial_ends_at in the future            → access, days_left = ceil(days until trial end)
    otherwise                              → no access, reason

Generation Rules:
=================
    admin / active paid / active trial     → allowed, remaining = -1 (unlimited)
    free tier                              → allowed while generations_used < generations_limit
    otherwise                              → not allowed, remaining = 0

Generation Accounting:
======================
Generation endpoints call ensure_can_generate() before the LLM call and
record_generation() only after it succeeded, so a failed generation never
consumes the quota. The gate re-reads the user row FOR UPDATE, so parallel
generations of one user run one after another and each sees the counters
the previous one committed:

    await access.ensure_can_generate(user)    # 403 GENERATION_LIMIT if not allowed
    result = await generator.generate_ideas(...)
    await access.record_generation(user)      # exactly once
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
import math
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.core.exceptions import GenerationLimitError, ValidationError
from esoteric_planner.shared.core.logging import get_logger
from esoteric_planner.shared.models.base import as_utc, utcnow
from esoteric_planner.shared.models.enums import SubscriptionTier
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.repositories.user_repository import UserRepository

logger = get_logger(__name__)

TRIAL_OVER_REASON = "Пробный период закончился. Оформите подписку для продолжения работы."
FREE_LIMIT_REASON = "Бесплатные генерации закончились. Оформите подписку для продолжения работы."

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class AccessStatus:
    has_access: bool
    days_left: Optional[int] = None
    reason: Optional[str] = None


@dataclass
class GenerationAllowance:
    allowed: bool
    remaining: int
    reason: Optional[str] = None


def _days_until(moment: datetime, now: datetime) -> int:
    return math.ceil((moment - now).total_seconds() / SECONDS_PER_DAY)


def _active_paid_until(user: User, now: datetime) -> Optional[datetime]:
    """Expiry of a running paid subscription, None when there is none."""
    tier = user.tier
    expires_at = as_utc(user.subscription_expires_at)
    if tier is not None and tier.is_paid and expires_at and expires_at > now:
        return expires_at
    return None


def _active_trial_until(user: User, now: datetime) -> Optional[datetime]:
    trial_ends_at = as_utc(user.trial_ends_at)
    if trial_ends_at and trial_ends_at > now:
        return trial_ends_at
    return None


def has_active_access(user: User, now: Optional[datetime] = None) -> AccessStatus:
    """Whether the user may use the app right now."""
    now = now or utcnow()

    if user.is_admin:
        return AccessStatus(has_access=True, days_left=-1)

    paid_until = _active_paid_until(user, now)
    if paid_until:
        return AccessStatus(has_access=True, days_left=_days_until(paid_until, now))

    trial_until = _active_trial_until(user, now)
    if trial_until:
        return AccessStatus(has_access=True, days_left=_days_until(trial_until, now))

    return AccessStatus(has_access=False, reason=TRIAL_OVER_REASON)


def can_generate(user: User, now: Optional[datetime] = None) -> GenerationAllowance:
    """Whether the user may run one more generation."""
    now = now or utcnow()

    if user.is_admin or _active_paid_until(user, now) or _active_trial_until(user, now):
        return GenerationAllowance(allowed=True, remaining=-1)

    if user.tier == SubscriptionTier.FREE:
        remaining = max((user.generations_limit or 0) - (user.generations_used or 0), 0)
        if remaining > 0:
            return GenerationAllowance(allowed=True, remaining=remaining)
        return GenerationAllowance(allowed=False, remaining=0, reason=FREE_LIMIT_REASON)

    return GenerationAllowance(allowed=False, remaining=0, reason=TRIAL_OVER_REASON)


def extended_until(current: Optional[datetime], days: int, now: datetime) -> datetime:
    """Add days to a running period, or start a new one from now."""
    current = as_utc(current)
    start = current if current and current > now else now
    return start + timedelta(days=days)


class AccessService:
    """
    Service for subscription access and generation accounting.

    Handles:
    - Access status and generation allowance
    - Consuming one generation after a successful LLM call
    - Extending subscriptions and trials
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)

    def get_access_status(self, user: User) -> AccessStatus:
        return has_active_access(user)

    def get_generation_allowance(self, user: User) -> GenerationAllowance:
        return can_generate(user)

    async def ensure_can_generate(self, user: User) -> GenerationAllowance:
        """
        Reject the request before any LLM call when the user may not generate.

        The user row is locked for the rest of the request and refreshed
        with its committed counters before the check.

        Raises:
            GenerationLimitError: 403 with details.limit_reached = true
        """
        locked = await self.users.get(user.id, for_update=True)
        allowance = can_generate(locked or user)
        if not allowance.allowed:
            logger.info("Generation rejected", user_id=str(user.id), reason=allowance.reason)
            raise GenerationLimitError(
                allowance.reason or TRIAL_OVER_REASON,
                remaining=allowance.remaining,
            )
        return allowance

    async def ensure_can_expand(self, user: User) -> None:
        """
        Gate for on-demand format generation, which consumes nothing.

        Free-tier users keep expanding ideas they already paid for even after
        their last generation; expired trials are rejected.
        """
        if user.tier == SubscriptionTier.FREE:
            return
        await self.ensure_can_generate(user)

    async def record_generation(self, user: User, today: Optional[date] = None) -> User:
        """
        Consume one generation.

        The daily counter restarts at 1 on the first generation of a new day.
        """
        today_iso = (today or utcnow().date()).isoformat()

        await self.users.increment_generations(user.id, today_iso)
        await self.session.refresh(user)
        logger.info(
            "Generation recorded",
            user_id=str(user.id),
            generations_used=user.generations_used,
        )
        return user

    async def extend_access(
        self,
        user: User,
        days: int,
        tier: Optional[SubscriptionTier] = None,
    ) -> User:
        """
        Extend access by a number of days.

        A paid tier extends the subscription from max(expiry, now) and sets
        the tier. Anything else extends the trial from max(trial end, now).

        Raises:
            ValidationError: If days is not positive
        """
        if days <= 0:
            raise ValidationError("Количество дней должно быть положительным")

        now = utcnow()

        if tier is not None and tier.is_paid:
            user = await self.users.apply(
                user,
                subscription_tier=tier.value,
                subscription_expires_at=extended_until(user.subscription_expires_at, days, now),
            )
        else:
            user = await self.users.apply(
                user,
                subscription_tier=SubscriptionTier.TRIAL.value,
                trial_ends_at=extended_until(user.trial_ends_at, days, now),
            )

        logger.info(
            "Access extended",
            user_id=str(user.id),
            days=days,
            tier=user.subscription_tier,
        )
        return user
