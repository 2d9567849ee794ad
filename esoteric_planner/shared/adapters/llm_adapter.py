"""
LLM adapter - DeepSeek chat completions through the OpenAI SDK.

DeepSeek exposes an OpenAI-compatible API, so the official `openai`
client is pointed at settings.DEEPSEEK_BASE_URL.

Provides:
- complete(): one system + user prompt round trip
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx
from openai import APIConnectionError, APIError, AsyncOpenAI, RateLimitError

from ...config.settings import settings
from ..core.exceptions import ConfigurationError, ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    """Result of LLM completion."""

    content: str
    model: str
    usage_prompt_tokens: int
    usage_completion_tokens: int
    elapsed_ms: int = 0


class LLMAdapter:
    """
    Adapter for DeepSeek chat completions.

    Handles:
    - Lazy client creation (the key is only required when generating)
    - Mapping provider errors to ExternalServiceError
    """

    DEFAULT_MAX_TOKENS = 2000

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize LLM adapter.

        Args:
            api_key: DeepSeek API key. If not provided, uses settings.
            base_url: API base URL. If not provided, uses settings.
            model: Chat model name. If not provided, uses settings.
            transport: httpx transport for the underlying HTTP client
        """
        self.api_key = api_key if api_key is not None else settings.DEEPSEEK_API_KEY
        self.base_url = base_url or settings.DEEPSEEK_BASE_URL
        self.model = model or settings.LLM_MODEL
        self._transport = transport
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-loaded async OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("DEEPSEEK_API_KEY")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=settings.LLM_TIMEOUT_SECONDS,
                http_client=httpx.AsyncClient(transport=self._transport) if self._transport else None,
            )
        return self._client

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> CompletionResult:
        """
        Generate a chat completion.

        Args:
            system_prompt: System instruction
            user_prompt: User message
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response

        Returns:
            CompletionResult with generated text ("" if the model sent nothing)

        Raises:
            ConfigurationError: If the API key is missing
            ExternalServiceError: If the API call fails
        """
        started = time.monotonic()
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens or self.DEFAULT_MAX_TOKENS,
            )
        except RateLimitError as e:
            logger.warning("LLM rate limit hit: %s", e)
            raise ExternalServiceError("LLM", "AI service is overloaded, try again later") from e
        except APIConnectionError as e:
            logger.error("LLM connection error: %s", e)
            raise ExternalServiceError("LLM", "AI service is unreachable") from e
        except APIError as e:
            logger.error("LLM API error: %s", e)
            raise ExternalServiceError("LLM", f"AI service error: {e}") from e

        elapsed_ms = int((time.monotonic() - started) * 1000)
        content = response.choices[0].message.content if response.choices else None
        usage = response.usage

        logger.info("LLM responded in %d ms, %d chars", elapsed_ms, len(content or ""))

        return CompletionResult(
            content=content or "",
            model=response.model,
            usage_prompt_tokens=usage.prompt_tokens if usage else 0,
            usage_completion_tokens=usage.completion_tokens if usage else 0,
            elapsed_ms=elapsed_ms,
        )


# Singleton instance for convenience
_llm_adapter: Optional[LLMAdapter] = None


def get_llm_adapter() -> LLMAdapter:
    """Get or create LLM adapter singleton."""
    global _llm_adapter
    if _llm_adapter is None:
        _llm_adapter = LLMAdapter()
    return _llm_adapter
