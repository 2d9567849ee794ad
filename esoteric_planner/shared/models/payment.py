"""
Payment Model

One row per order sent to the payment gateway. The row is created as
"pending" when the payment link is issued and updated by the webhook.
"""

from typing import Any, Optional
import uuid

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from esoteric_planner.shared.models.base import Base, JSONType, TimestampMixin, UUIDType
from esoteric_planner.shared.models.enums import PaymentStatus


class Payment(Base, TimestampMixin):
    """
    Payment for a subscription plan.

    Attributes:
        order_id: Our order identifier, echoed back by the gateway
        amount: Amount as sent to the gateway ("990.00")
        plan_type: monthly or yearly
        status: pending / success / failed
        provider_data: Last webhook payload, for support investigations
    """

    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    order_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    amount: Mapped[str] = mapped_column(String(32), nullable=False)
    plan_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default=PaymentStatus.PENDING.value,
        nullable=False,
    )

    provider_data: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    def __repr__(self) -> str:
        return f"<Payment(order_id={self.order_id}, status={self.status})>"
