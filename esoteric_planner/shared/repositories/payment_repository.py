"""
Payment Repository
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.models.payment import Payment
from esoteric_planner.shared.repositories.base import OwnedRepository


class PaymentRepository(OwnedRepository[Payment]):
    """Repository for gateway payments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Payment, session)

    async def get_by_order_id(self, order_id: str, *, for_update: bool = False) -> Optional[Payment]:
        """
        Get a payment by the order id shared with the gateway.

        for_update locks the row, so two notifications for one order are
        applied one after another and the second sees the first one's status.
        """
        query = select(Payment).where(Payment.order_id == order_id)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
