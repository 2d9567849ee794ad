import json

import httpx
import pytest

from esoteric_planner.shared.adapters.llm_adapter import LLMAdapter
from esoteric_planner.shared.core.exceptions import ConfigurationError, ExternalServiceError

BASE_URL = "https://llm.example.com/v1"


def completion_body(content: str) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1760745600,
        "model": "deepseek-chat",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 34, "total_tokens": 46},
    }


def build_adapter(handler, api_key: str = "deepseek-key") -> LLMAdapter:
    return LLMAdapter(
        api_key=api_key,
        base_url=BASE_URL,
        model="deepseek-chat",
        transport=httpx.MockTransport(handler),
    )


async def test_complete_sends_both_prompts_and_returns_text():
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=completion_body("Готовый пост"))

    adapter = build_adapter(handler)
    result = await adapter.complete("system text", "user text", temperature=0.8, max_tokens=1500)

    assert result.content == "Готовый пост"
    assert result.model == "deepseek-chat"
    assert result.usage_prompt_tokens == 12
    assert result.usage_completion_tokens == 34

    request = requests[0]
    assert str(request.url) == f"{BASE_URL}/chat/completions"
    assert request.headers["Authorization"] == "Bearer deepseek-key"
    body = json.loads(request.content)
    assert body["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "user text"},
    ]
    assert body["temperature"] == 0.8
    assert body["max_tokens"] == 1500


async def test_missing_api_key_raises_configuration_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected without a key")

    adapter = build_adapter(handler, api_key="")

    with pytest.raises(ConfigurationError) as exc_info:
        await adapter.complete("system", "user")
    assert exc_info.value.status_code == 503
    assert exc_info.value.details == {"setting": "DEEPSEEK_API_KEY"}


async def test_api_error_becomes_external_service_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"error": {"message": "bad request", "type": "invalid_request_error"}},
        )

    adapter = build_adapter(handler)

    with pytest.raises(ExternalServiceError) as exc_info:
        await adapter.complete("system", "user")
    assert exc_info.value.status_code == 502
    assert exc_info.value.details["service"] == "LLM"


async def test_empty_choice_content_becomes_empty_string():
    def handler(request: httpx.Request) -> httpx.Response:
        body = completion_body("")
        body["choices"][0]["message"]["content"] = None
        return httpx.Response(200, json=body)

    result = await build_adapter(handler).complete("system", "user")

    assert result.content == ""
