"""
Admin Service

Dashboard statistics, user management and manual access extension.

User Removal:
=============
Models carry no ORM relationships, so removing a user deletes the owned
rows explicitly, children first:

    promocode usages → payments → trainer sessions → case studies →
    voice posts → archetype results → strategies → reset tokens → user
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.core.exceptions import UserNotFoundError, ValidationError
from esoteric_planner.shared.core.logging import get_logger
from esoteric_planner.shared.models.base import utcnow
from esoteric_planner.shared.models.enums import SubscriptionTier
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.repositories.content_repository import (
    ArchetypeResultRepository,
    CaseStudyRepository,
    ContentStrategyRepository,
    VoicePostRepository,
)
from esoteric_planner.shared.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from esoteric_planner.shared.repositories.payment_repository import PaymentRepository
from esoteric_planner.shared.repositories.promocode_repository import PromocodeRepository
from esoteric_planner.shared.repositories.trainer_repository import SalesTrainerSessionRepository
from esoteric_planner.shared.repositories.user_repository import UserRepository
from esoteric_planner.shared.schemas.admin import AdminStatsResponse, TierBreakdown
from esoteric_planner.shared.services.access_service import AccessService

logger = get_logger(__name__)


class AdminService:
    """
    Service for the admin panel.

    Attributes:
        users: UserRepository instance
        access: AccessService for extending access
        owned_repos: Repositories of every per-user table, in deletion order
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.access = AccessService(session)
        self.promocodes = PromocodeRepository(session)
        self.strategies = ContentStrategyRepository(session)
        self.voice_posts = VoicePostRepository(session)
        self.cases = CaseStudyRepository(session)
        self.owned_repos = [
            PaymentRepository(session),
            SalesTrainerSessionRepository(session),
            self.cases,
            self.voice_posts,
            ArchetypeResultRepository(session),
            self.strategies,
            PasswordResetTokenRepository(session),
        ]

    async def get_stats(self) -> AdminStatsResponse:
        now = utcnow()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)

        return AdminStatsResponse(
            total_users=await self.users.count(),
            users_with_access=await self.users.count_with_access(now),
            active_today=await self.users.count_active_since(start_of_day),
            active_subscriptions=await self.users.count_active_paid(now),
            total_strategies=await self.strategies.count(),
            total_voice_posts=await self.voice_posts.count(),
            total_cases=await self.cases.count(),
            tiers=TierBreakdown(**await self.users.count_by_tier()),
            active_trials=await self.users.count_trials(now, active=True),
            expired_trials=await self.users.count_trials(now, active=False),
        )

    async def list_users(self) -> list[User]:
        return await self.users.list_all()

    async def _get_user(self, user_id: UUID) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    async def delete_user(self, admin: User, user_id: UUID) -> None:
        """
        Delete a user and everything they own.

        Raises:
            ValidationError: If the admin tries to delete themselves
            UserNotFoundError: If the user does not exist
        """
        if admin.id == user_id:
            raise ValidationError("Нельзя удалить собственный аккаунт")

        user = await self._get_user(user_id)

        await self.promocodes.delete_usages_for_user(user.id)
        deleted_rows = 0
        for repo in self.owned_repos:
            deleted_rows += await repo.delete_all_for_user(user.id)
        await self.users.delete(user.id)

        logger.info(
            "User deleted",
            user_id=str(user_id),
            admin_id=str(admin.id),
            deleted_rows=deleted_rows,
        )

    async def extend_user_access(
        self,
        user_id: UUID,
        days: int,
        tier: Optional[SubscriptionTier] = None,
    ) -> User:
        user = await self._get_user(user_id)
        return await self.access.extend_access(user, days, tier)
