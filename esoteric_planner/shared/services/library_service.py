"""
Library Services

The user's saved material next to content plans: archetype quiz results,
voice posts and case studies. Every read and delete is owner-scoped.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.core.exceptions import NotFoundError
from esoteric_planner.shared.core.logging import get_logger
from esoteric_planner.shared.models.archetype_result import ArchetypeResult
from esoteric_planner.shared.models.case_study import CaseStudy
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.models.voice_post import VoicePost
from esoteric_planner.shared.repositories.content_repository import (
    ArchetypeResultRepository,
    CaseStudyRepository,
    VoicePostRepository,
)
from esoteric_planner.shared.schemas.content import GeneratedCase
from esoteric_planner.shared.services.access_service import AccessService
from esoteric_planner.shared.services.content_generator import ContentGenerator
from esoteric_planner.shared.utils.text import clean_ocr_text

logger = get_logger(__name__)


class ArchetypeService:
    """Stores archetype quiz results computed by the client."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = ArchetypeResultRepository(session)

    async def list_results(self, user: User) -> list[ArchetypeResult]:
        return await self.repo.list_for_user(user.id)

    async def get_latest(self, user: User) -> Optional[ArchetypeResult]:
        return await self.repo.get_latest_for_user(user.id)

    async def create_result(self, user: User, **fields: Any) -> ArchetypeResult:
        result = await self.repo.create(user_id=user.id, **fields)
        logger.info(
            "Archetype result saved",
            user_id=str(user.id),
            archetype=result.archetype_name,
        )
        return result


class VoicePostService:
    """
    Voice posts: the expert's dictated text and its refined version.

    Attributes:
        repo: VoicePostRepository instance
        access: AccessService for generation accounting
        generator: ContentGenerator (only needed by generate_post)
    """

    def __init__(self, session: AsyncSession, generator: Optional[ContentGenerator] = None) -> None:
        self.session = session
        self.repo = VoicePostRepository(session)
        self.access = AccessService(session)
        self.generator = generator

    async def list_posts(self, user: User) -> list[VoicePost]:
        return await self.repo.list_for_user(user.id)

    async def create_post(
        self,
        user: User,
        original_text: str,
        refined_text: Optional[str] = None,
        tone: Optional[str] = None,
    ) -> VoicePost:
        post = await self.repo.create(
            user_id=user.id,
            original_text=original_text,
            refined_text=refined_text,
            tone=tone,
        )
        logger.info("Voice post saved", user_id=str(user.id), post_id=str(post.id))
        return post

    async def delete_post(self, user: User, post_id: UUID) -> None:
        """
        Raises:
            NotFoundError: If missing or owned by another user
        """
        if not await self.repo.delete_for_user(post_id, user.id):
            raise NotFoundError("Voice post", str(post_id))

    async def generate_post(self, user: User, transcript: str) -> str:
        """Turn a transcript into a publishable post. Consumes one generation."""
        if self.generator is None:
            raise RuntimeError("VoicePostService was created without a ContentGenerator")

        await self.access.ensure_can_generate(user)
        post = await self.generator.generate_voice_post(transcript)
        await self.access.record_generation(user)
        return post


class CaseStudyService:
    """
    Case studies built from client reviews.

    Search:
    =======
        list_cases(user, query="ТАРО")
            → case-insensitive substring match over review text,
              generated quote and generated body, scoped to the user
    """

    def __init__(self, session: AsyncSession, generator: Optional[ContentGenerator] = None) -> None:
        self.session = session
        self.repo = CaseStudyRepository(session)
        self.access = AccessService(session)
        self.generator = generator

    async def list_cases(self, user: User, query: Optional[str] = None) -> list[CaseStudy]:
        if query and query.strip():
            return await self.repo.search_for_user(user.id, query.strip())
        return await self.repo.list_for_user(user.id)

    async def get_case(self, user: User, case_id: UUID) -> CaseStudy:
        """
        Raises:
            NotFoundError: If missing or owned by another user
        """
        case = await self.repo.get_for_user(case_id, user.id)
        if case is None:
            raise NotFoundError("Case", str(case_id))
        return case

    async def create_case(self, user: User, **fields: Any) -> CaseStudy:
        case = await self.repo.create(user_id=user.id, **fields)
        logger.info("Case saved", user_id=str(user.id), case_id=str(case.id))
        return case

    async def delete_case(self, user: User, case_id: UUID) -> None:
        if not await self.repo.delete_for_user(case_id, user.id):
            raise NotFoundError("Case", str(case_id))

    async def generate_case(
        self,
        user: User,
        review_text: str,
        before: Optional[str] = None,
        action: Optional[str] = None,
        after: Optional[str] = None,
        tags: Optional[list[str]] = None,
    ) -> GeneratedCase:
        """Generate headlines, quote and body. Consumes one generation."""
        if self.generator is None:
            raise RuntimeError("CaseStudyService was created without a ContentGenerator")

        await self.access.ensure_can_generate(user)
        generated = await self.generator.generate_case(
            review_text,
            before=before,
            action=action,
            after=after,
            tags=tags or [],
        )
        await self.access.record_generation(user)
        return generated

    @staticmethod
    def clean_text(text: str) -> str:
        """OCR clean-up of a review screenshot."""
        return clean_ocr_text(text)
