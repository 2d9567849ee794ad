"""
Password Reset Token Repository
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.models.password_reset_token import PasswordResetToken
from esoteric_planner.shared.repositories.base import OwnedRepository


class PasswordResetTokenRepository(OwnedRepository[PasswordResetToken]):
    """Repository for password reset tokens."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(PasswordResetToken, session)

    async def get_latest_valid(self, user_id: UUID, now: datetime) -> Optional[PasswordResetToken]:
        """
        Newest token of the user that is neither expired nor used.

        SQL Generated:
            SELECT * FROM password_reset_tokens
            WHERE user_id = :user_id AND expires_at > :now AND used_at IS NULL
            ORDER BY created_at DESC LIMIT 1
        """
        result = await self.session.execute(
            select(PasswordResetToken)
            .where(
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.expires_at > now,
                PasswordResetToken.used_at.is_(None),
            )
            .order_by(PasswordResetToken.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
