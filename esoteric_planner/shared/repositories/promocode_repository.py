"""
Promocode Repository

Lookups by normalized code and per-user usage bookkeeping.

used_count is only ever raised by a conditional UPDATE, so a code can not be
redeemed more often than max_uses even when activations run in parallel:

    UPDATE promocodes SET used_count = used_count + 1
    WHERE id = :id AND (max_uses = 0 OR used_count < max_uses)
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from esoteric_planner.shared.models.promocode import Promocode, PromocodeUsage
from esoteric_planner.shared.repositories.base import BaseRepository


class PromocodeRepository(BaseRepository[Promocode]):
    """Repository for promocodes and their usages."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Promocode, session)

    async def get_by_code(self, code: str, *, for_update: bool = False) -> Optional[Promocode]:
        """Get a promocode by its (already normalized) code."""
        query = select(Promocode).where(Promocode.code == code)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def is_used_by(self, promocode_id: UUID, user_id: UUID) -> bool:
        """Whether the user has already redeemed this promocode."""
        result = await self.session.execute(
            select(sql_count())
            .select_from(PromocodeUsage)
            .where(
                PromocodeUsage.promocode_id == promocode_id,
                PromocodeUsage.user_id == user_id,
            )
        )
        return (result.scalar() or 0) > 0

    async def record_usage(self, promocode: Promocode, user_id: UUID) -> Optional[PromocodeUsage]:
        """
        Bump used_count and store the redemption.

        Returns:
            The usage, or None when the code ran out of uses in the meantime
        """
        result = await self.session.execute(
            update(Promocode)
            .where(
                Promocode.id == promocode.id,
                or_(Promocode.max_uses == 0, Promocode.used_count < Promocode.max_uses),
            )
            .values(used_count=Promocode.used_count + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None

        usage = PromocodeUsage(promocode_id=promocode.id, user_id=user_id)
        self.session.add(usage)
        await self.session.flush()
        await self.session.refresh(promocode)
        return usage

    async def delete_usages_for_user(self, user_id: UUID) -> None:
        """Remove the user's redemptions (admin user removal)."""
        usages = await self.session.execute(
            select(PromocodeUsage).where(PromocodeUsage.user_id == user_id)
        )
        for usage in usages.scalars().all():
            await self.session.delete(usage)
        await self.session.flush()
