"""
User Repository

Database operations specific to the User model.
Extends BaseRepository with user-specific query methods.

Common Operations:
==================
- get_by_email()         → Find user by email address (case-insensitive)
- email_exists()         → Check if email is already registered
- list_all()             → All users, newest first (admin)
- count_with_access()    → Users that currently may use the app (admin stats)
- count_by_tier()        → Users per subscription tier (admin stats)
- increment_generations() → Atomic counter update after a generation
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import and_, case, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from esoteric_planner.shared.models.enums import SubscriptionTier
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.repositories.base import BaseRepository


PAID_TIERS = (SubscriptionTier.MONTHLY.value, SubscriptionTier.YEARLY.value)


class UserRepository(BaseRepository[User]):
    """
    Repository for User database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Email lookup is case-insensitive.

        SQL Generated:
            SELECT * FROM users WHERE lower(email) = 'reader@example.com'
        """
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if email is already registered."""
        user = await self.get_by_email(email)
        return user is not None

    async def list_all(self) -> list[User]:
        """All users, newest first."""
        return await self.list(order_by="created_at", order_desc=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # STATISTICS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _count_where(self, *conditions) -> int:
        result = await self.session.execute(
            select(sql_count()).select_from(User).where(*conditions)
        )
        return result.scalar() or 0

    async def count_with_access(self, now: datetime) -> int:
        """
        Users with access right now: admins, active trials, active paid plans.
        """
        return await self._count_where(
            or_(
                User.is_admin.is_(True),
                and_(User.trial_ends_at.is_not(None), User.trial_ends_at > now),
                and_(
                    User.subscription_tier.in_(PAID_TIERS),
                    User.subscription_expires_at.is_not(None),
                    User.subscription_expires_at > now,
                ),
            )
        )

    async def count_active_since(self, since: datetime) -> int:
        """Users that logged in at or after `since`."""
        return await self._count_where(User.last_login_at >= since)

    async def count_active_paid(self, now: datetime) -> int:
        """Users on a paid tier whose subscription has not expired."""
        return await self._count_where(
            User.subscription_tier.in_(PAID_TIERS),
            User.subscription_expires_at > now,
        )

    async def count_trials(self, now: datetime, *, active: bool) -> int:
        """
        Users whose trial is still running (or has run out), whatever their
        current tier. Users without a trial end date are not counted.
        """
        if active:
            return await self._count_where(User.trial_ends_at > now)
        return await self._count_where(
            User.trial_ends_at.is_not(None),
            User.trial_ends_at <= now,
        )

    async def count_by_tier(self) -> dict[str, int]:
        """
        Users per subscription tier.

        NULL and unknown tiers are counted as free.

        Returns:
            {"trial": 3, "free": 1, "monthly": 2, "yearly": 0}
        """
        result = await self.session.execute(
            select(User.subscription_tier, sql_count()).group_by(User.subscription_tier)
        )

        breakdown = {tier.value: 0 for tier in SubscriptionTier}
        for tier, total in result.all():
            key = tier if tier in breakdown else SubscriptionTier.FREE.value
            breakdown[key] += total
        return breakdown

    # ═══════════════════════════════════════════════════════════════════════════
    # COUNTERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def increment_generations(self, user_id: UUID, today: str) -> None:
        """
        Count one generation in a single UPDATE.

        The counters are incremented by the database, so concurrent requests
        of one user never overwrite each other's increments.

        SQL Generated:
            UPDATE users SET
                generations_used = generations_used + 1,
                daily_generations_used = CASE WHEN last_generation_date = :today
                                              THEN daily_generations_used + 1 ELSE 1 END,
                last_generation_date = :today
            WHERE id = :user_id
        """
        await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(
                generations_used=User.generations_used + 1,
                daily_generations_used=case(
                    (User.last_generation_date == today, User.daily_generations_used + 1),
                    else_=1,
                ),
                last_generation_date=today,
            )
            .execution_options(synchronize_session=False)
        )
