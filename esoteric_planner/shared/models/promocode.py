"""
Promocode Models

    Promocode        ← code, bonus days, usage cap, expiry
    PromocodeUsage   ← one row per (promocode, user); a user redeems a code once

Codes are stored upper-cased; activation normalizes the input the same way.
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from esoteric_planner.shared.models.base import Base, CreatedAtMixin, UUIDType


class Promocode(Base, CreatedAtMixin):
    """
    Promotional code granting bonus subscription days.

    Attributes:
        code: Upper-cased unique code
        bonus_days: Days of access granted on activation
        max_uses: Total activations allowed across all users
        used_count: Activations so far
        is_active: Manual kill switch
        expires_at: Optional expiry
    """

    __tablename__ = "promocodes"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4,
    )

    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    bonus_days: Mapped[int] = mapped_column(Integer, default=30, nullable=False)
    max_uses: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    used_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Promocode(code={self.code}, used={self.used_count}/{self.max_uses})>"


class PromocodeUsage(Base, CreatedAtMixin):
    """Record of a user redeeming a promocode."""

    __tablename__ = "promocode_usages"
    __table_args__ = (
        UniqueConstraint("promocode_id", "user_id", name="uq_promocode_usage_user"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        primary_key=True,
        default=uuid.uuid4,
    )

    promocode_id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        ForeignKey("promocodes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<PromocodeUsage(promocode_id={self.promocode_id}, user_id={self.user_id})>"
