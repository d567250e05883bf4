"""
Unit Tests for Logging Processors

Transcripts never reach a log sink and credentials are masked.
"""

from saathi import __version__
from saathi.config import Settings
from saathi.config.logging_config import (
    build_processors,
    drop_transcript_text,
    mask_secrets,
    service_context,
)


class TestPrivacyProcessors:
    """Transcript removal and secret masking."""

    def test_transcript_keys_dropped(self) -> None:
        event = {
            "event": "Transcript classified",
            "transcript": "I want to kill myself",
            "prompt": "full prompt",
            "transcript_length": 21,
        }

        result = drop_transcript_text(None, "info", event)

        assert result == {"event": "Transcript classified", "transcript_length": 21}

    def test_secrets_masked_recursively(self) -> None:
        event = {
            "event": "Provider configured",
            "api_key": "sk-live",
            "headers": {"Authorization": "Bearer abc", "accept": "json"},
            "provider": "gemini",
        }

        result = mask_secrets(None, "info", event)

        assert result["api_key"] == "[REDACTED]"
        assert result["headers"] == {"Authorization": "[REDACTED]", "accept": "json"}
        assert result["provider"] == "gemini"

    def test_service_context(self) -> None:
        stamp = service_context("staging")

        result = stamp(None, "info", {"event": "x"})

        assert result["service"] == "saathi-risk-classifier"
        assert result["version"] == __version__
        assert result["env"] == "staging"


class TestProcessorChain:
    """Renderer choice per environment."""

    def test_privacy_processors_precede_renderer(self) -> None:
        processors = build_processors(Settings(env="production"))
        names = [getattr(p, "__name__", type(p).__name__) for p in processors]

        assert names.index("drop_transcript_text") < len(names) - 1
        assert names.index("mask_secrets") < len(names) - 1
        assert names[-1] == "JSONRenderer"

    def test_development_uses_console(self) -> None:
        processors = build_processors(Settings(env="development"))
        assert type(processors[-1]).__name__ == "ConsoleRenderer"
