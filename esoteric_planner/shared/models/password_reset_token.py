"""
Password Reset Token Model

A single-use, short-lived token that lets a user set a new password.

Only a bcrypt hash of the token is stored; the plain token exists in the
emailed link only. A token is valid while expires_at is in the future and
used_at is NULL.
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from esoteric_planner.shared.models.base import Base, CreatedAtMixin, UUIDType


class PasswordResetToken(Base, CreatedAtMixin):
    """
    Password reset token.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owner of the token
        token_hash: Bcrypt hash of the emailed token
        expires_at: Moment after which the token is rejected
        used_at: Set once the token has been consumed
    """

    __tablename__ = "password_reset_tokens"

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

    token_hash: Mapped[str] = mapped_column(Text, nullable=False)

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    used_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<PasswordResetToken(id={self.id}, user_id={self.user_id})>"
