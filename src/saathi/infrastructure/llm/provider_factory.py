"""
Oracle provider selection.

SAATHI_ORACLE_PROVIDER picks the backend (gemini or openai). Backends
are imported lazily so an unused SDK is never loaded.
"""

from enum import StrEnum
from typing import Callable, Optional

from saathi.config import Settings, get_settings
from saathi.config.logging_config import get_logger
from saathi.infrastructure.llm.provider import LLMProvider

logger = get_logger(__name__)


class LLMProviderType(StrEnum):
    GEMINI = "gemini"
    OPENAI = "openai"


def _gemini(settings: Settings) -> LLMProvider:
    from saathi.infrastructure.llm.gemini_provider import GeminiProvider
    return GeminiProvider(settings.gemini)


def _openai(settings: Settings) -> LLMProvider:
    from saathi.infrastructure.llm.openai_provider import OpenAIProvider
    return OpenAIProvider(settings.openai)


_BUILDERS: dict[LLMProviderType, Callable[[Settings], LLMProvider]] = {
    LLMProviderType.GEMINI: _gemini,
    LLMProviderType.OPENAI: _openai,
}


def get_llm_provider(
    provider_type: Optional[LLMProviderType | str] = None,
    settings: Optional[Settings] = None,
) -> LLMProvider:
    """
    Build the configured oracle provider.

    The returned provider may be unconfigured (no API key); the
    reconciler then skips the oracle step.

    Raises:
        ValueError: If provider_type names no known backend
    """
    settings = settings or get_settings()
    try:
        kind = LLMProviderType(provider_type or settings.oracle.provider)
    except ValueError:
        raise ValueError(f"Unknown provider type: {provider_type}") from None

    provider = _BUILDERS[kind](settings)
    logger.info(
        "Oracle provider initialized",
        provider=kind.value,
        configured=provider.is_configured(),
    )
    return provider
