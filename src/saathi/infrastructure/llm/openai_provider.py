"""
OpenAI Oracle Backend

Alternative to Gemini, selected with SAATHI_ORACLE_PROVIDER=openai.
Uses chat completions in JSON mode so the assessment parses directly.
"""

import time
from typing import Optional

from openai import APIError, AsyncOpenAI, RateLimitError as OpenAIRateLimitError

from saathi.config import get_settings
from saathi.config.logging_config import get_logger
from saathi.config.settings import OpenAISettings
from saathi.infrastructure.llm.provider import (
    ContentFilterError,
    LLMProvider,
    LLMProviderError,
    LLMResponse,
    RateLimitError,
)
from saathi.services.prompt.assessment_prompt import BuiltPrompt

logger = get_logger(__name__)

PLACEHOLDER_KEYS = frozenset({"sk-CHANGE_ME", "CHANGE_ME"})


class OpenAIProvider(LLMProvider):
    """
    OpenAI chat-completions oracle.

    The SDK's own retry loop is disabled (max_retries=0); one call per
    consultation, bounded by the reconciler's timeout.
    """

    def __init__(
        self,
        settings: Optional[OpenAISettings] = None,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        settings = settings or get_settings().openai

        self._api_key = api_key or settings.api_key.get_secret_value()
        self._model = model or settings.model
        self._max_tokens = settings.max_tokens
        self._client: Optional[AsyncOpenAI] = None

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._model

    def is_configured(self) -> bool:
        return bool(self._api_key) and self._api_key not in PLACEHOLDER_KEYS

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, max_retries=0)
        return self._client

    async def generate(
        self,
        prompt: BuiltPrompt,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        if not self.is_configured():
            raise LLMProviderError("OpenAI API key not configured", provider=self.provider_name)

        model_name = model or self._model
        request = {
            "model": model_name,
            "messages": prompt.to_messages(),
            "max_tokens": max_tokens or prompt.max_tokens or self._max_tokens,
            "temperature": temperature if temperature is not None else prompt.temperature,
        }
        if prompt.expects_json:
            request["response_format"] = {"type": "json_object"}

        started = time.monotonic()
        try:
            completion = await self.client.chat.completions.create(**request)
        except OpenAIRateLimitError as e:
            logger.warning("OpenAI rate limited", model=model_name)
            raise RateLimitError(provider=self.provider_name, retry_after_seconds=60) from e
        except APIError as e:
            raise LLMProviderError(
                f"OpenAI API error: {e}",
                provider=self.provider_name,
                original_error=e,
            ) from e
        latency_ms = int((time.monotonic() - started) * 1000)

        choice = completion.choices[0]
        if choice.finish_reason == "content_filter":
            raise ContentFilterError(provider=self.provider_name, filter_reason="content_filter")

        usage = completion.usage
        logger.debug(
            "OpenAI assessment received",
            model=model_name,
            latency_ms=latency_ms,
            usage_total=usage.total_tokens if usage else 0,
        )

        return LLMResponse(
            content=choice.message.content or "",
            provider=self.provider_name,
            model=model_name,
            finish_reason=choice.finish_reason or "stop",
            latency_ms=latency_ms,
            usage={
                "prompt_tokens": usage.prompt_tokens,
                "completion_tokens": usage.completion_tokens,
                "total_tokens": usage.total_tokens,
            } if usage else {},
            raw_response=completion,
        )

    async def health_check(self) -> bool:
        if not self.is_configured():
            return False
        try:
            await self.client.models.list()
        except APIError as e:
            logger.warning("OpenAI health check failed", error_type=type(e).__name__)
            return False
        return True
