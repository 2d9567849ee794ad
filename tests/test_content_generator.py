import json

import pytest

from esoteric_planner.shared.core.exceptions import ExternalServiceError
from esoteric_planner.shared.models.enums import ContentFormat, ContentGoal
from esoteric_planner.shared.services.content_generator import (
    PLAN_MAX_TOKENS,
    TRAINER_FALLBACK,
    VOICE_FALLBACK,
    ContentGenerator,
)

from tests.conftest import FakeLLM


def plan_day(day: int) -> dict:
    variant = {"content": "Текст поста про карты и судьбу", "hashtags": ["#таро"]}
    return {
        "day": day,
        "idea": f"Идея {day}",
        "type": "Экспертный",
        "post": variant,
        "carousel": variant,
        "reels": variant,
        "stories": variant,
    }


@pytest.fixture
def llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def generator(llm) -> ContentGenerator:
    return ContentGenerator(llm)


async def test_generate_ideas_parses_fenced_array(generator, llm):
    llm.queue('```json\n[{"day": 1, "idea": "Луна и деньги", "type": "Экспертный"}]\n```')

    ideas = await generator.generate_ideas(ContentGoal.SALE, "Таролог", days=1)

    assert [idea.idea for idea in ideas] == ["Луна и деньги"]
    assert llm.calls[0]["max_tokens"] == 1500


async def test_generate_ideas_with_wrong_shape_is_external_error(generator, llm):
    llm.queue('[{"title": "нет поля day"}]')

    with pytest.raises(ExternalServiceError) as exc_info:
        await generator.generate_ideas(ContentGoal.SALE, "Таролог", days=1)
    assert exc_info.value.status_code == 502


async def test_generate_ideas_without_json_is_external_error(generator, llm):
    llm.queue("Извините, я не могу")

    with pytest.raises(ExternalServiceError):
        await generator.generate_ideas(ContentGoal.ENGAGEMENT, "Таролог", days=3)


async def test_generate_format_repairs_hashtags(generator, llm):
    llm.queue('{"content": "Слайд 1\\n---\\nСлайд 2", "hashtags": [#таро, #луна]}')

    content = await generator.generate_format(
        ContentGoal.SALE, "Таролог", "Идея", "Экспертный", ContentFormat.CAROUSEL
    )

    assert content.hashtags == ["#таро", "#луна"]
    assert content.content.startswith("Слайд 1")


async def test_generate_plan_returns_all_formats(generator, llm):
    llm.queue(json.dumps([plan_day(1), plan_day(2)], ensure_ascii=False))

    posts = await generator.generate_plan(ContentGoal.SALE, "Таролог", days=2)

    assert [post.day for post in posts] == [1, 2]
    assert posts[1].stories.hashtags == ["#таро"]
    assert llm.calls[0]["max_tokens"] == PLAN_MAX_TOKENS


async def test_generate_plan_rejects_short_answer(generator, llm):
    llm.queue('[{"day": 1, "idea": "x"}]')

    with pytest.raises(ExternalServiceError, match="too short"):
        await generator.generate_plan(ContentGoal.SALE, "Таролог", days=1)


async def test_generate_case_normalizes_fields(generator, llm):
    llm.queue('{"headlines": "Один заголовок", "quote": "Спасибо!", "body": null}')

    case = await generator.generate_case("Отзыв клиента")

    assert case.headlines == ["Один заголовок"]
    assert case.quote == "Спасибо!"
    assert case.body == ""
    assert llm.calls[0]["temperature"] == 0.8


async def test_generate_case_with_bad_json_is_external_error(generator, llm):
    llm.queue("не JSON")

    with pytest.raises(ExternalServiceError, match="Ошибка генерации"):
        await generator.generate_case("Отзыв клиента")


async def test_blank_free_text_answers_fall_back(generator, llm):
    llm.queue("   ", "")

    assert await generator.generate_trainer_answer("Вопрос", "Черновик") == TRAINER_FALLBACK
    assert await generator.generate_voice_post("речь") == VOICE_FALLBACK


async def test_free_text_answers_are_stripped(generator, llm):
    llm.queue("  Готовый пост  ")

    assert await generator.generate_voice_post("речь") == "Готовый пост"
