"""Oracle backends: the provider interface, its errors and the selector."""

from saathi.infrastructure.llm.provider import (
    ContentFilterError,
    LLMProvider,
    LLMProviderError,
    LLMResponse,
    RateLimitError,
)
from saathi.infrastructure.llm.provider_factory import LLMProviderType, get_llm_provider

__all__ = [
    "ContentFilterError",
    "LLMProvider",
    "LLMProviderError",
    "LLMProviderType",
    "LLMResponse",
    "RateLimitError",
    "get_llm_provider",
]
