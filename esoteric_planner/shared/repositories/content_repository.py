"""
Content Repositories

Repositories for the user-owned content produced by the app.

    ContentStrategyRepository   ← content plans
    ArchetypeResultRepository   ← brand archetype quiz results
    VoicePostRepository         ← posts from voice notes
    CaseStudyRepository         ← case studies (with text search)

All of them inherit owner-scoped get/list/delete from OwnedRepository.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.models.archetype_result import ArchetypeResult
from esoteric_planner.shared.models.case_study import CaseStudy
from esoteric_planner.shared.models.content_strategy import ContentStrategy
from esoteric_planner.shared.models.voice_post import VoicePost
from esoteric_planner.shared.repositories.base import OwnedRepository


class ContentStrategyRepository(OwnedRepository[ContentStrategy]):
    """Repository for content plans."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ContentStrategy, session)


class ArchetypeResultRepository(OwnedRepository[ArchetypeResult]):
    """Repository for archetype quiz results."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ArchetypeResult, session)

    async def get_latest_for_user(self, user_id: UUID) -> Optional[ArchetypeResult]:
        """The most recent quiz result of the user, None if the quiz was never taken."""
        results = await self.list_for_user(user_id, limit=1)
        return results[0] if results else None


class VoicePostRepository(OwnedRepository[VoicePost]):
    """Repository for voice posts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(VoicePost, session)


class CaseStudyRepository(OwnedRepository[CaseStudy]):
    """Repository for case studies."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(CaseStudy, session)

    async def search_for_user(self, user_id: UUID, query: str) -> list[CaseStudy]:
        """
        Case-insensitive substring search over the review and generated texts.

        % and _ in the query match literally.

        SQL Generated:
            SELECT * FROM case_studies
            WHERE user_id = :user_id
              AND (lower(review_text) LIKE '%q%' ESCAPE '/' OR ...quote... OR ...body...)
            ORDER BY created_at DESC
        """
        result = await self.session.execute(
            select(CaseStudy)
            .where(
                CaseStudy.user_id == user_id,
                or_(
                    CaseStudy.review_text.icontains(query, autoescape=True),
                    CaseStudy.generated_quote.icontains(query, autoescape=True),
                    CaseStudy.generated_body.icontains(query, autoescape=True),
                ),
            )
            .order_by(CaseStudy.created_at.desc())
        )
        return list(result.scalars().all())
