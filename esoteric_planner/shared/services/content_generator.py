"""
Content Generator

Every AI generation of the app: prompt → LLM → repaired JSON → typed result.

Pipeline:
=========
    ┌────────────────┐    ┌─────────────┐    ┌──────────────────┐    ┌──────────────┐
    │ prompts.build_*│───▶│ LLMAdapter  │───▶│ json_repair      │───▶│ Pydantic     │
    │ (system, user) │    │ .complete() │    │ .parse_json_*()  │    │ validation   │
    └────────────────┘    └─────────────┘    └──────────────────┘    └──────────────┘

Token Budgets:
==============
    ideas            1500 tokens
    single format    2000 tokens
    full plan        8000 tokens (answers under 100 chars are rejected)
    case study       2000 tokens, temperature 0.8
    trainer answer   1500 tokens
    voice post       2000 tokens

Unusable model output is raised as ExternalServiceError("LLM"). The
generator never touches the database or the generation quota: callers
record the generation after a successful call.
"""

from typing import Any, Optional, Sequence, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from esoteric_planner.shared.adapters.llm_adapter import LLMAdapter
from esoteric_planner.shared.core.exceptions import ExternalServiceError
from esoteric_planner.shared.core.logging import get_logger
from esoteric_planner.shared.models.enums import ContentFormat, ContentGoal, StrategyType
from esoteric_planner.shared.models.sales_trainer import SalesTrainerSample
from esoteric_planner.shared.schemas.content import GeneratedCase
from esoteric_planner.shared.schemas.strategy import (
    ArchetypeInput,
    ContentIdea,
    ContentPost,
    FormatContent,
)
from esoteric_planner.shared.services import prompts
from esoteric_planner.shared.utils.json_repair import (
    JSONRepairError,
    parse_json_array,
    parse_json_object,
)

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

IDEAS_MAX_TOKENS = 1500
FORMAT_MAX_TOKENS = 2000
PLAN_MAX_TOKENS = 8000
CASE_MAX_TOKENS = 2000
TRAINER_MAX_TOKENS = 1500
VOICE_MAX_TOKENS = 2000

PLAN_MIN_RESPONSE_LENGTH = 100

TRAINER_FALLBACK = "Не удалось сгенерировать ответ"
VOICE_FALLBACK = "Не удалось сгенерировать пост"


def _validate_items(items: list[Any], schema: type[SchemaT]) -> list[SchemaT]:
    try:
        return [schema.model_validate(item) for item in items]
    except PydanticValidationError as e:
        raise ExternalServiceError(
            "LLM",
            "AI response has an unexpected structure",
            details={"errors": e.error_count()},
        ) from e


class ContentGenerator:
    """
    Generation service on top of the LLM adapter.

    Example:
        generator = ContentGenerator(get_llm_adapter())
        ideas = await generator.generate_ideas(ContentGoal.SALE, "Таролог", days=7)
    """

    def __init__(self, llm: LLMAdapter) -> None:
        self.llm = llm

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT PLAN
    # ═══════════════════════════════════════════════════════════════════════════

    async def generate_ideas(
        self,
        goal: ContentGoal,
        niche: str,
        days: int,
        product: Optional[str] = None,
        archetype: Optional[ArchetypeInput] = None,
    ) -> list[ContentIdea]:
        """Step 1: one idea per day."""
        system_prompt, user_prompt = prompts.build_ideas_prompt(
            ContentGoal(goal), niche, days, product, archetype
        )
        result = await self.llm.complete(
            system_prompt,
            user_prompt,
            temperature=0.7,
            max_tokens=IDEAS_MAX_TOKENS,
        )

        try:
            items = parse_json_array(result.content)
        except JSONRepairError as e:
            raise ExternalServiceError("LLM", str(e)) from e

        ideas = _validate_items(items, ContentIdea)
        logger.info("Ideas generated", count=len(ideas), elapsed_ms=result.elapsed_ms)
        return ideas

    async def generate_format(
        self,
        goal: ContentGoal,
        niche: str,
        idea: str,
        content_type: str,
        content_format: ContentFormat,
        product: Optional[str] = None,
        archetype: Optional[ArchetypeInput] = None,
    ) -> FormatContent:
        """Step 2: one format variant for one idea."""
        system_prompt, user_prompt = prompts.build_format_prompt(
            ContentGoal(goal),
            niche,
            idea,
            content_type,
            ContentFormat(content_format),
            product,
            archetype,
        )
        result = await self.llm.complete(
            system_prompt,
            user_prompt,
            temperature=0.7,
            max_tokens=FORMAT_MAX_TOKENS,
        )

        try:
            data = parse_json_object(result.content)
        except JSONRepairError as e:
            raise ExternalServiceError("LLM", str(e)) from e

        content = _validate_items([data], FormatContent)[0]
        logger.info(
            "Format generated",
            format=ContentFormat(content_format).value,
            elapsed_ms=result.elapsed_ms,
        )
        return content

    async def generate_plan(
        self,
        goal: ContentGoal,
        niche: str,
        days: int,
        product: Optional[str] = None,
        strategy: StrategyType = StrategyType.GENERAL,
        archetype: Optional[ArchetypeInput] = None,
    ) -> list[ContentPost]:
        """
        One-shot plan with all four formats for every day.

        Raises:
            ExternalServiceError: If the answer is too short or cannot be parsed
        """
        system_prompt, user_prompt = prompts.build_plan_prompt(
            ContentGoal(goal),
            niche,
            days,
            product,
            StrategyType(strategy),
            archetype,
        )
        result = await self.llm.complete(
            system_prompt,
            user_prompt,
            temperature=0.7,
            max_tokens=PLAN_MAX_TOKENS,
        )

        if len(result.content) < PLAN_MIN_RESPONSE_LENGTH:
            logger.error("Plan response too short", length=len(result.content))
            raise ExternalServiceError("LLM", "AI returned empty or too short response")

        try:
            items = parse_json_array(result.content)
        except JSONRepairError as e:
            raise ExternalServiceError("LLM", str(e)) from e

        posts = _validate_items(items, ContentPost)
        logger.info("Plan generated", days=len(posts), elapsed_ms=result.elapsed_ms)
        return posts

    # ═══════════════════════════════════════════════════════════════════════════
    # CASE STUDIES
    # ═══════════════════════════════════════════════════════════════════════════

    async def generate_case(
        self,
        review_text: str,
        before: Optional[str] = None,
        action: Optional[str] = None,
        after: Optional[str] = None,
        tags: Sequence[str] = (),
    ) -> GeneratedCase:
        """Headlines, quote and body built from a client review."""
        system_prompt, user_prompt = prompts.build_case_prompt(
            review_text, before, action, after, tags
        )
        result = await self.llm.complete(
            system_prompt,
            user_prompt,
            temperature=0.8,
            max_tokens=CASE_MAX_TOKENS,
        )

        try:
            data = parse_json_object(result.content)
        except JSONRepairError as e:
            raise ExternalServiceError("LLM", f"Ошибка генерации: {e}") from e

        headlines = data.get("headlines") or []
        if not isinstance(headlines, list):
            headlines = [str(headlines)]

        return GeneratedCase(
            headlines=[str(headline) for headline in headlines],
            quote=str(data.get("quote") or ""),
            body=str(data.get("body") or ""),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # FREE-TEXT GENERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def generate_trainer_answer(
        self,
        client_question: str,
        expert_draft: str,
        samples: Sequence[SalesTrainerSample] = (),
        pain_type: Optional[str] = None,
        offer_type: Optional[str] = None,
    ) -> str:
        system_prompt, user_prompt = prompts.build_trainer_prompt(
            client_question, expert_draft, samples, pain_type, offer_type
        )
        result = await self.llm.complete(
            system_prompt,
            user_prompt,
            temperature=0.7,
            max_tokens=TRAINER_MAX_TOKENS,
        )
        return result.content.strip() or TRAINER_FALLBACK

    async def generate_voice_post(self, transcript: str) -> str:
        system_prompt, user_prompt = prompts.build_voice_post_prompt(transcript)
        result = await self.llm.complete(
            system_prompt,
            user_prompt,
            temperature=0.7,
            max_tokens=VOICE_MAX_TOKENS,
        )
        return result.content.strip() or VOICE_FALLBACK
