"""
Trainer Service

The money trainer: improves an expert's draft answer to a client using
reference samples as few-shot examples.

Sample Selection:
=================
    pain_type given and samples exist for it → up to 3 newest of that pain type
    otherwise                                → up to 3 newest samples overall
"""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.shared.core.exceptions import ValidationError
from esoteric_planner.shared.core.logging import get_logger
from esoteric_planner.shared.models.sales_trainer import SalesTrainerSample, SalesTrainerSession
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.repositories.trainer_repository import (
    SalesTrainerSampleRepository,
    SalesTrainerSessionRepository,
)
from esoteric_planner.shared.services.access_service import AccessService
from esoteric_planner.shared.services.content_generator import ContentGenerator

logger = get_logger(__name__)

FEW_SHOT_SAMPLES = 3


class TrainerService:
    def __init__(self, session: AsyncSession, generator: Optional[ContentGenerator] = None) -> None:
        self.session = session
        self.samples = SalesTrainerSampleRepository(session)
        self.sessions = SalesTrainerSessionRepository(session)
        self.access = AccessService(session)
        self.generator = generator

    async def list_samples(self) -> list[SalesTrainerSample]:
        return await self.samples.list()

    async def create_sample(self, **fields: Any) -> SalesTrainerSample:
        sample = await self.samples.create(**fields)
        logger.info("Trainer sample created", sample_id=str(sample.id), pain_type=sample.pain_type)
        return sample

    async def list_sessions(self, user: User) -> list[SalesTrainerSession]:
        return await self.sessions.list_for_user(user.id)

    async def select_samples(self, pain_type: Optional[str]) -> list[SalesTrainerSample]:
        """Few-shot samples for a pain type, falling back to the newest ones."""
        if pain_type:
            matching = await self.samples.list_by_pain_type(pain_type, limit=FEW_SHOT_SAMPLES)
            if matching:
                return matching
        return await self.samples.list(limit=FEW_SHOT_SAMPLES)

    async def generate_answer(
        self,
        user: User,
        client_question: str,
        expert_draft: str,
        pain_type: Optional[str] = None,
        offer_type: Optional[str] = None,
    ) -> SalesTrainerSession:
        """
        Improve the draft, save the session and consume one generation.

        Raises:
            ValidationError: If the question or the draft is empty
        """
        if self.generator is None:
            raise RuntimeError("TrainerService was created without a ContentGenerator")

        client_question = (client_question or "").strip()
        expert_draft = (expert_draft or "").strip()
        if not client_question or not expert_draft:
            raise ValidationError("Вопрос клиента и черновик ответа обязательны")

        await self.access.ensure_can_generate(user)

        samples = await self.select_samples(pain_type)
        improved_answer = await self.generator.generate_trainer_answer(
            client_question,
            expert_draft,
            samples=samples,
            pain_type=pain_type,
            offer_type=offer_type,
        )

        session = await self.sessions.create(
            user_id=user.id,
            client_question=client_question,
            expert_draft=expert_draft,
            improved_answer=improved_answer,
            pain_type=pain_type,
            offer_type=offer_type,
        )
        await self.access.record_generation(user)

        logger.info(
            "Trainer answer generated",
            user_id=str(user.id),
            session_id=str(session.id),
            samples=len(samples),
        )
        return session
