"""
Gemini Oracle Backend

Default provider. Flash models answer the assessment prompt in JSON
mode well inside the oracle timeout.
"""

import time
from typing import Any, Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig, HarmBlockThreshold, HarmCategory

from saathi.config import get_settings
from saathi.config.logging_config import get_logger
from saathi.config.settings import GeminiSettings
from saathi.infrastructure.llm.provider import (
    ContentFilterError,
    LLMProvider,
    LLMProviderError,
    LLMResponse,
    RateLimitError,
)
from saathi.services.prompt.assessment_prompt import BuiltPrompt

logger = get_logger(__name__)

PLACEHOLDER_KEYS = frozenset({"CHANGE_ME"})

# Self-harm talk is the subject under assessment, so dangerous-content
# blocking is limited to the highest band.
ASSESSMENT_SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
}


def _response_text(response: Any) -> tuple[str, str]:
    """Return (text, finish_reason) from the first candidate."""
    if not response.candidates:
        return "", "STOP"
    candidate = response.candidates[0]
    parts = candidate.content.parts if candidate.content else []
    text = "".join(part.text or "" for part in parts)
    return text, str(getattr(candidate, "finish_reason", "STOP"))


def _token_usage(response: Any) -> dict[str, int]:
    metadata = getattr(response, "usage_metadata", None)
    return {
        "prompt_tokens": getattr(metadata, "prompt_token_count", 0) or 0,
        "completion_tokens": getattr(metadata, "candidates_token_count", 0) or 0,
        "total_tokens": getattr(metadata, "total_token_count", 0) or 0,
    }


class GeminiProvider(LLMProvider):
    """
    Gemini oracle.

    A model object is built per call because the system instruction
    belongs to the model in google-generativeai.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        settings = settings or get_settings().gemini

        self._api_key = api_key or settings.api_key.get_secret_value()
        self._model = model or settings.model
        self._max_tokens = settings.max_tokens

        if self.is_configured():
            genai.configure(api_key=self._api_key)

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return self._model

    def is_configured(self) -> bool:
        return bool(self._api_key) and self._api_key not in PLACEHOLDER_KEYS

    async def generate(
        self,
        prompt: BuiltPrompt,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        if not self.is_configured():
            raise LLMProviderError("Gemini API key not configured", provider=self.provider_name)

        model_name = model or self._model
        assessor = genai.GenerativeModel(
            model_name=model_name,
            safety_settings=ASSESSMENT_SAFETY_SETTINGS,
            system_instruction=prompt.system_prompt,
        )
        config = GenerationConfig(
            max_output_tokens=max_tokens or prompt.max_tokens or self._max_tokens,
            temperature=temperature if temperature is not None else prompt.temperature,
            response_mime_type="application/json" if prompt.expects_json else "text/plain",
        )

        started = time.monotonic()
        try:
            response = await assessor.generate_content_async(
                prompt.user_message,
                generation_config=config,
            )
        except Exception as e:
            raise self._translate_error(e) from e
        latency_ms = int((time.monotonic() - started) * 1000)

        block_reason = getattr(response.prompt_feedback, "block_reason", None)
        if block_reason:
            logger.warning("Gemini blocked the transcript", reason=str(block_reason))
            raise ContentFilterError(provider=self.provider_name, filter_reason=str(block_reason))

        content, finish_reason = _response_text(response)
        if "SAFETY" in finish_reason:
            raise ContentFilterError(provider=self.provider_name, filter_reason=finish_reason)

        logger.debug(
            "Gemini assessment received",
            model=model_name,
            latency_ms=latency_ms,
            content_length=len(content),
        )

        return LLMResponse(
            content=content,
            provider=self.provider_name,
            model=model_name,
            finish_reason=finish_reason,
            latency_ms=latency_ms,
            usage=_token_usage(response),
            raw_response=response,
        )

    def _translate_error(self, error: Exception) -> LLMProviderError:
        message = str(error).lower()

        if "429" in message or "quota" in message or "rate" in message:
            logger.warning("Gemini rate limited", error_type=type(error).__name__)
            return RateLimitError(provider=self.provider_name, retry_after_seconds=30)
        if "safety" in message or "blocked" in message:
            return ContentFilterError(provider=self.provider_name, filter_reason=str(error))

        return LLMProviderError(
            f"Gemini API error: {error}",
            provider=self.provider_name,
            original_error=error,
        )

    async def health_check(self) -> bool:
        if not self.is_configured():
            return False
        try:
            next(iter(genai.list_models()), None)
        except Exception as e:
            logger.warning("Gemini health check failed", error_type=type(e).__name__)
            return False
        return True
