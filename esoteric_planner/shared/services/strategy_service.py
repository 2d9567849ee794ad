"""
Strategy Service

Content plans: owner-scoped CRUD and the two-step generation pipeline.

Generation Accounting:
======================
    generate_ideas()   check limit → LLM → record 1 generation
    generate_format()  gate only, no generation consumed (the idea was paid for)
    generate_plan()    check limit → LLM → save strategy → record 1 generation
    create_strategy()  no generation consumed
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.core.exceptions import NotFoundError
from esoteric_planner.shared.core.logging import get_logger
from esoteric_planner.shared.models.content_strategy import ContentStrategy
from esoteric_planner.shared.models.enums import ContentGoal
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.repositories.content_repository import ContentStrategyRepository
from esoteric_planner.shared.schemas.strategy import (
    ContentIdea,
    ContentPost,
    FormatContent,
    GenerateFormatRequest,
    GeneratePlanRequest,
    GenerationRequest,
)
from esoteric_planner.shared.services.access_service import AccessService
from esoteric_planner.shared.services.content_generator import ContentGenerator

logger = get_logger(__name__)


class StrategyService:
    """
    Service for content plans.

    Attributes:
        session: Database session
        repo: ContentStrategyRepository instance
        access: AccessService for generation accounting
        generator: ContentGenerator (only needed by generation methods)
    """

    def __init__(self, session: AsyncSession, generator: Optional[ContentGenerator] = None) -> None:
        self.session = session
        self.repo = ContentStrategyRepository(session)
        self.access = AccessService(session)
        self.generator = generator

    # ═══════════════════════════════════════════════════════════════════════════
    # CRUD
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_strategies(self, user: User) -> list[ContentStrategy]:
        return await self.repo.list_for_user(user.id)

    async def get_strategy(self, user: User, strategy_id: UUID) -> ContentStrategy:
        """
        Raises:
            NotFoundError: If missing or owned by another user
        """
        strategy = await self.repo.get_for_user(strategy_id, user.id)
        if strategy is None:
            raise NotFoundError("Strategy", str(strategy_id))
        return strategy

    async def create_strategy(
        self,
        user: User,
        topic: str,
        goal: ContentGoal,
        days: int,
        posts: list[ContentPost],
    ) -> ContentStrategy:
        """Persist a plan. Saving never consumes a generation."""
        strategy = await self.repo.create(
            user_id=user.id,
            topic=topic,
            goal=ContentGoal(goal).value,
            days=days,
            posts=[post.model_dump() for post in posts],
        )
        logger.info("Strategy created", user_id=str(user.id), strategy_id=str(strategy.id))
        return strategy

    async def delete_strategy(self, user: User, strategy_id: UUID) -> None:
        """
        Raises:
            NotFoundError: If missing or owned by another user
        """
        if not await self.repo.delete_for_user(strategy_id, user.id):
            raise NotFoundError("Strategy", str(strategy_id))
        logger.info("Strategy deleted", user_id=str(user.id), strategy_id=str(strategy_id))

    # ═══════════════════════════════════════════════════════════════════════════
    # GENERATION
    # ═══════════════════════════════════════════════════════════════════════════

    def _require_generator(self) -> ContentGenerator:
        if self.generator is None:
            raise RuntimeError("StrategyService was created without a ContentGenerator")
        return self.generator

    async def generate_ideas(self, user: User, request: GenerationRequest) -> list[ContentIdea]:
        """Step 1. Consumes one generation on success."""
        generator = self._require_generator()
        await self.access.ensure_can_generate(user)

        ideas = await generator.generate_ideas(
            request.goal,
            request.niche,
            request.days,
            product=request.product,
            archetype=request.archetype,
        )

        await self.access.record_generation(user)
        return ideas

    async def generate_format(self, user: User, request: GenerateFormatRequest) -> FormatContent:
        """Step 2. Consumes nothing."""
        generator = self._require_generator()
        await self.access.ensure_can_expand(user)

        return await generator.generate_format(
            request.goal,
            request.niche,
            request.idea,
            request.type,
            request.format,
            product=request.product,
            archetype=request.archetype,
        )

    async def generate_plan(self, user: User, request: GeneratePlanRequest) -> ContentStrategy:
        """
        One-shot plan, saved as a strategy. Consumes one generation on success.
        """
        generator = self._require_generator()
        await self.access.ensure_can_generate(user)

        posts = await generator.generate_plan(
            request.goal,
            request.niche,
            request.days,
            product=request.product,
            strategy=request.strategy,
            archetype=request.archetype,
        )

        strategy = await self.create_strategy(
            user,
            topic=request.topic or request.niche,
            goal=request.goal,
            days=request.days,
            posts=posts,
        )
        await self.access.record_generation(user)
        return strategy
