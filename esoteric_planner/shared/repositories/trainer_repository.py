"""
Sales Trainer Repositories
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.models.sales_trainer import SalesTrainerSample, SalesTrainerSession
from esoteric_planner.shared.repositories.base import BaseRepository, OwnedRepository


class SalesTrainerSampleRepository(BaseRepository[SalesTrainerSample]):
    """Global few-shot samples curated by admins."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(SalesTrainerSample, session)

    async def list_by_pain_type(self, pain_type: str, limit: int = 3) -> list[SalesTrainerSample]:
        """Newest samples for one pain type."""
        result = await self.session.execute(
            select(SalesTrainerSample)
            .where(SalesTrainerSample.pain_type == pain_type)
            .order_by(SalesTrainerSample.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())


class SalesTrainerSessionRepository(OwnedRepository[SalesTrainerSession]):
    """The user's trainer history."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(SalesTrainerSession, session)
