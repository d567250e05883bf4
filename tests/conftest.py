"""Tests configuration and fixtures."""

import asyncio
from typing import Optional

import pytest
from pydantic import SecretStr

from saathi.config import Settings
from saathi.config.settings import GeminiSettings, OpenAISettings, OracleSettings
from saathi.infrastructure.llm.provider import LLMProvider, LLMResponse
from saathi.services.classification.classifier_config import ClassifierConfig
from saathi.services.classification.classification_engine import RiskClassifier
from saathi.services.oracle.oracle_reconciler import OracleReconciler
from saathi.services.prompt.assessment_prompt import BuiltPrompt


class FakeOracleProvider(LLMProvider):
    """Scripted oracle backend; no network."""

    def __init__(
        self,
        content: str = "",
        *,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        configured: bool = True,
    ) -> None:
        self.content = content
        self.error = error
        self.delay = delay
        self.configured = configured
        self.calls = 0
        self.prompts: list[BuiltPrompt] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def default_model(self) -> str:
        return "fake-model"

    def is_configured(self) -> bool:
        return self.configured

    async def generate(
        self,
        prompt: BuiltPrompt,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        self.calls += 1
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, provider=self.provider_name)

    async def health_check(self) -> bool:
        return self.configured


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no oracle credentials."""
    return Settings(
        env="development",
        gemini=GeminiSettings(api_key=SecretStr("")),
        openai=OpenAISettings(api_key=SecretStr("")),
        oracle=OracleSettings(enabled=True, provider="gemini"),
    )


@pytest.fixture
def default_config() -> ClassifierConfig:
    return ClassifierConfig.default()


@pytest.fixture
def lexical_classifier(default_config: ClassifierConfig) -> RiskClassifier:
    """Classifier without an oracle."""
    return RiskClassifier(default_config)


@pytest.fixture
def oracle_settings() -> OracleSettings:
    return OracleSettings(enabled=True, timeout_seconds=1.0, min_transcript_chars=10)


@pytest.fixture
def make_oracle_classifier(default_config: ClassifierConfig, oracle_settings: OracleSettings):
    """Factory: classifier whose oracle is the given fake provider."""
    def _make(provider: Optional[LLMProvider]) -> RiskClassifier:
        return RiskClassifier(
            default_config,
            reconciler=OracleReconciler(provider, oracle_settings),
        )
    return _make


@pytest.fixture
def make_fake_provider():
    """Factory for scripted oracle providers."""
    def _make(content: str = "", **kwargs) -> FakeOracleProvider:
        return FakeOracleProvider(content, **kwargs)
    return _make
