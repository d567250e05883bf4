"""
Unit Tests for Classifier Configuration

Malformed vocabulary, weights or thresholds must fail at construction.
"""

import re

import pytest
from pydantic import ValidationError

from saathi.config.settings import ClassifierSettings
from saathi.domain.enums.risk_level import RiskLevel, TierName
from saathi.services.classification import vocabulary
from saathi.services.classification.classifier_config import (
    ClassifierConfig,
    ConfigurationError,
    TendencyThresholds,
)


def _weights(**overrides: int) -> dict[TierName, int]:
    weights = dict(vocabulary.DEFAULT_TIER_WEIGHTS)
    for name, value in overrides.items():
        weights[TierName(name)] = value
    return weights


def _terms(**overrides: tuple[str, ...]) -> dict[TierName, tuple[str, ...]]:
    terms = dict(vocabulary.TIER_TERMS)
    for name, value in overrides.items():
        terms[TierName(name)] = value
    return terms


class TestDefaultConfig:
    """Tests for the shipped configuration."""

    def test_default_is_valid(self, default_config: ClassifierConfig) -> None:
        assert [tier.name for tier in default_config.tiers] == list(TierName)
        assert [tier.weight for tier in default_config.tiers] == [8, 6, 3, 2, 1]
        assert {p.weight for p in default_config.patterns} == {10}
        assert default_config.thresholds == TendencyThresholds(low=1, medium=4, high=6, severe=10)

    def test_tier_lookup(self, default_config: ClassifierConfig) -> None:
        assert default_config.tier(TierName.HIGH).weight == 3
        assert "hopeless" in default_config.tier(TierName.HIGH).terms

    def test_pattern_identifiers(self, default_config: ClassifierConfig) -> None:
        identifiers = [p.identifier for p in default_config.patterns]
        assert "immediate_risk_pattern:tonight_intent" in identifiers
        assert all(i.startswith("immediate_risk_pattern:") for i in identifiers)

    def test_vocabulary_is_lowercase(self) -> None:
        for terms in vocabulary.TIER_TERMS.values():
            assert all(term == term.lower() for term in terms)

    def test_from_settings_defaults(self) -> None:
        config = ClassifierConfig.from_settings(ClassifierSettings())
        assert config == ClassifierConfig.default()

    def test_from_settings_overrides(self) -> None:
        config = ClassifierConfig.from_settings(ClassifierSettings(
            threshold_medium=3,
            threshold_severe=12,
            weight_immediate_pattern=12,
        ))
        assert config.thresholds.minimum_score(RiskLevel.SEVERE) == 12
        assert config.thresholds.minimum_score(RiskLevel.MEDIUM) == 3
        assert {p.weight for p in config.patterns} == {12}


class TestTierValidation:
    """Tests for tier table invariants."""

    def test_missing_tier(self) -> None:
        with pytest.raises(ConfigurationError, match="Missing tier"):
            ClassifierConfig.build(tier_terms={TierName.CRITICAL_SEVERE: ("suicide",)})

    def test_weights_must_strictly_decrease(self) -> None:
        with pytest.raises(ConfigurationError, match="strictly decrease"):
            ClassifierConfig.build(tier_weights=_weights(medium=3))

    def test_weights_must_be_positive(self) -> None:
        with pytest.raises(ConfigurationError):
            ClassifierConfig.build(tier_weights=_weights(low=0))

    def test_empty_tier(self) -> None:
        with pytest.raises(ConfigurationError, match="no terms"):
            ClassifierConfig.build(tier_terms=_terms(medium=()))

    def test_uppercase_term(self) -> None:
        with pytest.raises(ConfigurationError, match="lowercase"):
            ClassifierConfig.build(tier_terms=_terms(low=("Stressed",)))

    def test_duplicate_term(self) -> None:
        with pytest.raises(ConfigurationError, match="duplicated"):
            ClassifierConfig.build(tier_terms=_terms(low=("sad", "sad")))

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ClassifierConfig.build(tier_terms=_terms(low=("",)))


class TestPatternValidation:
    """Tests for immediate-risk pattern invariants."""

    def test_pattern_must_outweigh_critical_terms(self) -> None:
        with pytest.raises(ConfigurationError, match="must exceed"):
            ClassifierConfig.build(pattern_weight=8)

    def test_duplicate_pattern_name(self) -> None:
        pattern = re.compile(r"\bnever again\b")
        with pytest.raises(ConfigurationError, match="duplicated"):
            ClassifierConfig.build(patterns=(("again", pattern), ("again", pattern)))


class TestThresholdValidation:
    """Tests for tendency threshold invariants."""

    def test_thresholds_must_not_decrease(self) -> None:
        with pytest.raises(ConfigurationError, match="non-decreasing"):
            ClassifierConfig.build(thresholds=TendencyThresholds(low=1, medium=6, high=4, severe=10))

    def test_thresholds_must_be_positive(self) -> None:
        with pytest.raises(ConfigurationError):
            ClassifierConfig.build(thresholds=TendencyThresholds(low=0, medium=4, high=6, severe=10))

    def test_critical_term_must_reach_high(self) -> None:
        """Test that one critical term alone cannot fall below HIGH."""
        with pytest.raises(ConfigurationError, match="must reach HIGH"):
            ClassifierConfig.build(thresholds=TendencyThresholds(low=1, medium=4, high=9, severe=10))

    def test_pattern_must_reach_severe(self) -> None:
        """Test that one pattern match alone cannot fall below SEVERE."""
        with pytest.raises(ConfigurationError, match="must reach SEVERE"):
            ClassifierConfig.build(thresholds=TendencyThresholds(low=1, medium=4, high=6, severe=12))

    def test_alternate_tuning_accepted(self) -> None:
        config = ClassifierConfig.build(
            pattern_weight=12,
            thresholds=TendencyThresholds(low=1, medium=3, high=6, severe=12),
        )
        assert config.thresholds.severe == 12


class TestClassifierSettings:
    """Tests for environment-level validation."""

    def test_threshold_order_enforced(self) -> None:
        with pytest.raises(ValidationError):
            ClassifierSettings(threshold_medium=7, threshold_high=6)

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAATHI_CLASSIFIER_THRESHOLD_SEVERE", "12")
        monkeypatch.setenv("SAATHI_CLASSIFIER_WEIGHT_IMMEDIATE_PATTERN", "12")

        settings = ClassifierSettings()

        assert settings.threshold_severe == 12
        assert ClassifierConfig.from_settings(settings).thresholds.severe == 12
