"""
Oracle Provider Interface

Contract every oracle backend implements. The reconciler only sees
this interface, so backends are swappable through configuration and
tests can supply scripted fakes.

Providers make exactly one attempt per call and raise
LLMProviderError subclasses on failure. Timeouts are applied by the
caller, not here.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from saathi.services.prompt.assessment_prompt import BuiltPrompt


@dataclass
class LLMResponse:
    """
    Text returned by an oracle backend.

    Attributes:
        content: Generated text, expected to hold the JSON assessment
        provider: Backend name
        model: Model identifier that answered
        finish_reason: Backend-reported stop reason
        latency_ms: Wall time of the backend call
        usage: Token counts as reported by the backend
        raw_response: SDK response object, never serialized
    """

    content: str
    provider: str = ""
    model: str = ""
    finish_reason: str = "stop"
    latency_ms: int = 0
    usage: dict[str, int] = field(default_factory=dict)
    raw_response: Optional[Any] = field(default=None, repr=False)

    @property
    def total_tokens(self) -> int:
        return self.usage.get("total_tokens", 0)


class LLMProvider(ABC):
    """Abstract oracle backend."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short backend name used in logs, metrics and judgments."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when a call does not override it."""

    @abstractmethod
    def is_configured(self) -> bool:
        """
        Whether a credential is present.

        An unconfigured provider is never called; the oracle step is
        skipped instead.
        """

    @abstractmethod
    async def generate(
        self,
        prompt: BuiltPrompt,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        """
        Run one completion for an assessment prompt.

        Raises:
            LLMProviderError: On any backend failure
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """Cheap reachability probe; False when unconfigured."""


class LLMProviderError(Exception):
    """Backend call failed."""

    def __init__(
        self,
        message: str,
        provider: str,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.original_error = original_error


class RateLimitError(LLMProviderError):
    """Backend rejected the call for quota or rate reasons."""

    def __init__(self, provider: str, retry_after_seconds: Optional[int] = None) -> None:
        super().__init__(f"Rate limit exceeded for {provider}", provider=provider)
        self.retry_after_seconds = retry_after_seconds


class ContentFilterError(LLMProviderError):
    """Backend safety filter blocked the prompt or the answer."""

    def __init__(self, provider: str, filter_reason: str = "") -> None:
        super().__init__(f"Content filtered by {provider}: {filter_reason}", provider=provider)
        self.filter_reason = filter_reason
