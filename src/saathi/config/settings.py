"""
Saathi Application Settings

Every tunable of the classifier and its oracle, read from SAATHI_*
environment variables or a .env file.

API keys are SecretStr and must stay out of logs.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    """Google Gemini oracle configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SAATHI_GEMINI_",
        populate_by_name=True,
    )

    # The call glue exports the bare GEMINI_API_KEY / GOOGLE_API_KEY names
    api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices(
            "SAATHI_GEMINI_API_KEY",
            "GEMINI_API_KEY",
            "GOOGLE_API_KEY",
        ),
        description="Gemini API key",
    )
    model: str = Field(default="gemini-1.5-flash", description="Model identifier")
    max_tokens: int = Field(default=1024, ge=100, le=8192)
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)


class OpenAISettings(BaseSettings):
    """OpenAI oracle configuration."""

    model_config = SettingsConfigDict(env_prefix="SAATHI_OPENAI_")

    api_key: SecretStr = Field(default=SecretStr(""), description="OpenAI API key")
    model: str = Field(default="gpt-4o-mini", description="Model identifier")
    max_tokens: int = Field(default=1024, ge=100, le=4096)
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)


class OracleSettings(BaseSettings):
    """Auxiliary LLM classifier (oracle) configuration."""

    model_config = SettingsConfigDict(env_prefix="SAATHI_ORACLE_")

    enabled: bool = Field(default=True, description="Kill switch for the oracle")
    provider: Literal["gemini", "openai"] = Field(
        default="gemini",
        description="Oracle backend",
    )
    timeout_seconds: float = Field(
        default=15.0,
        gt=0.0,
        le=60.0,
        description="Hard timeout for a single oracle call",
    )
    min_transcript_chars: int = Field(
        default=10,
        ge=1,
        description="Stripped transcripts shorter than this skip the oracle",
    )


class ClassifierSettings(BaseSettings):
    """
    Lexical classifier weights and tendency thresholds.

    CLINICAL_REVIEW_REQUIRED: Weights and thresholds are a tunable
    policy. Defaults follow the latest production tuning.
    """

    model_config = SettingsConfigDict(env_prefix="SAATHI_CLASSIFIER_")

    weight_critical_severe: int = Field(default=8, ge=1)
    weight_severe_plan: int = Field(default=6, ge=1)
    weight_high: int = Field(default=3, ge=1)
    weight_medium: int = Field(default=2, ge=1)
    weight_low: int = Field(default=1, ge=1)
    weight_immediate_pattern: int = Field(default=10, ge=1)

    threshold_low: int = Field(default=1, ge=1)
    threshold_medium: int = Field(default=4, ge=1)
    threshold_high: int = Field(default=6, ge=1)
    threshold_severe: int = Field(default=10, ge=1)

    @model_validator(mode="after")
    def validate_threshold_order(self) -> "ClassifierSettings":
        """Thresholds must be non-decreasing from LOW to SEVERE."""
        ordered = [
            self.threshold_low,
            self.threshold_medium,
            self.threshold_high,
            self.threshold_severe,
        ]
        if ordered != sorted(ordered):
            raise ValueError(
                f"Classifier thresholds must be non-decreasing, got {ordered}"
            )
        return self


class Settings(BaseSettings):
    """
    Root settings object; nested groups carry their own prefixes.

    Usage:
        settings = get_settings()
        timeout = settings.oracle.timeout_seconds
    """

    model_config = SettingsConfigDict(
        env_prefix="SAATHI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    host: str = Field(default="0.0.0.0", description="Bind address for saathi-api")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port for saathi-api")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # Groups
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    oracle: OracleSettings = Field(default_factory=OracleSettings)
    classifier: ClassifierSettings = Field(default_factory=ClassifierSettings)

    def is_production(self) -> bool:
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings, read once. Tests build Settings directly."""
    return Settings()
