"""
Promocode Service

Redeeming promocodes for bonus days, and the admin side of managing them.

Activation Checks (in order, each a 400 with a reason):
=======================================================
    not found → inactive → expired → exhausted (used_count >= max_uses) → already used by this user

Bonus Days:
===========
    paid tier          → subscription_expires_at = max(expiry, now) + bonus_days
    anyone else        → tier = monthly, subscription_expires_at = max(trial_ends_at, now) + bonus_days
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.core.exceptions import DuplicateResourceError, ValidationError
from esoteric_planner.shared.core.logging import get_logger
from esoteric_planner.shared.models.base import as_utc, utcnow
from esoteric_planner.shared.models.enums import SubscriptionTier
from esoteric_planner.shared.models.promocode import Promocode
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.repositories.promocode_repository import PromocodeRepository
from esoteric_planner.shared.repositories.user_repository import UserRepository
from esoteric_planner.shared.services.access_service import extended_until
from esoteric_planner.shared.utils.text import days_word

logger = get_logger(__name__)


def normalize_code(code: str) -> str:
    return code.strip().upper()


class PromocodeService:
    """
    Service for promocode business logic.

    Attributes:
        session: Database session
        repo: PromocodeRepository instance
        users: UserRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = PromocodeRepository(session)
        self.users = UserRepository(session)

    async def activate(self, user: User, code: str) -> tuple[Promocode, str]:
        """
        Redeem a promocode for the user.

        Returns:
            Tuple of (promocode, success_message)

        Raises:
            ValidationError: With the reason the code cannot be redeemed
        """
        normalized = normalize_code(code)
        promocode = await self.repo.get_by_code(normalized, for_update=True)

        if promocode is None:
            raise ValidationError("Промокод не найден")
        if not promocode.is_active:
            raise ValidationError("Промокод неактивен")

        now = utcnow()
        expires_at = as_utc(promocode.expires_at)
        if expires_at and expires_at < now:
            raise ValidationError("Срок действия промокода истёк")
        if promocode.max_uses and (promocode.used_count or 0) >= promocode.max_uses:
            raise ValidationError("Промокод исчерпан")
        if await self.repo.is_used_by(promocode.id, user.id):
            raise ValidationError("Вы уже использовали этот промокод")

        if await self.repo.record_usage(promocode, user.id) is None:
            raise ValidationError("Промокод исчерпан")

        await self.users.get(user.id, for_update=True)
        bonus_days = promocode.bonus_days
        tier = user.tier

        if tier is not None and tier.is_paid:
            await self.users.apply(
                user,
                subscription_expires_at=extended_until(user.subscription_expires_at, bonus_days, now),
            )
        else:
            await self.users.apply(
                user,
                subscription_tier=SubscriptionTier.MONTHLY.value,
                subscription_expires_at=extended_until(user.trial_ends_at, bonus_days, now),
            )

        logger.info(
            "Promocode activated",
            user_id=str(user.id),
            code=promocode.code,
            bonus_days=bonus_days,
        )
        message = f"Промокод активирован! Добавлено {bonus_days} {days_word(bonus_days)}"
        return promocode, message

    # ═══════════════════════════════════════════════════════════════════════════
    # ADMIN
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(
        self,
        code: str,
        bonus_days: int,
        max_uses: int = 1,
        expires_at: Optional[datetime] = None,
        created_by: Optional[UUID] = None,
    ) -> Promocode:
        """
        Create a promocode. The code is stored upper-cased.

        Raises:
            DuplicateResourceError: If the code already exists
        """
        normalized = normalize_code(code)
        if await self.repo.get_by_code(normalized):
            raise DuplicateResourceError(f"Promocode {normalized} already exists")

        promocode = await self.repo.create(
            code=normalized,
            bonus_days=bonus_days,
            max_uses=max_uses,
            expires_at=expires_at,
        )
        logger.info(
            "Promocode created",
            code=normalized,
            bonus_days=bonus_days,
            created_by=str(created_by) if created_by else None,
        )
        return promocode

    async def list_all(self) -> list[Promocode]:
        """All promocodes, newest first."""
        return await self.repo.list()
