"""
Classifier Configuration

Immutable configuration object injected into the classifier:
vocabulary tiers, immediate-risk patterns and tendency thresholds.

ARCHITECTURE: Built once at startup and never mutated. Validation
runs at construction time so a malformed table fails before any
transcript is classified.
"""

import re
from dataclasses import dataclass
from typing import Optional

from saathi.config.settings import ClassifierSettings
from saathi.domain.enums.risk_level import RiskLevel, TierName
from saathi.services.classification import vocabulary


class ConfigurationError(ValueError):
    """Raised when classifier configuration is malformed."""


@dataclass(frozen=True)
class TermTier:
    """
    A weighted bucket of risk vocabulary.

    Attributes:
        name: Tier identifier
        weight: Score added per distinct matching term
        terms: Lowercase phrases, matched as substrings
    """

    name: TierName
    weight: int
    terms: tuple[str, ...]


@dataclass(frozen=True)
class ImmediateRiskPattern:
    """
    A regex for constructions fixed phrases miss.

    Always reported as CRITICAL_SEVERE evidence.
    """

    name: str
    pattern: re.Pattern
    weight: int

    @property
    def identifier(self) -> str:
        """Synthetic evidence term for this pattern."""
        return f"immediate_risk_pattern:{self.name}"


@dataclass(frozen=True)
class TendencyThresholds:
    """
    Score thresholds for each risk level.

    CLINICAL_VALIDATION_REQUIRED: These values are a tunable policy.
    Earlier tunings used SEVERE at 6 and 12; keep them configurable.
    """

    low: int = 1
    medium: int = 4
    high: int = 6
    severe: int = 10

    def minimum_score(self, level: RiskLevel) -> int:
        """Smallest score that classifies as the given level."""
        return {
            RiskLevel.NONE: 0,
            RiskLevel.LOW: self.low,
            RiskLevel.MEDIUM: self.medium,
            RiskLevel.HIGH: self.high,
            RiskLevel.SEVERE: self.severe,
        }[level]


@dataclass(frozen=True)
class ClassifierConfig:
    """
    Complete lexical classifier configuration.

    Usage:
        config = ClassifierConfig.default()
        config = ClassifierConfig.from_settings(settings.classifier)

    Raises:
        ConfigurationError: On construction, if any invariant fails
    """

    tiers: tuple[TermTier, ...]
    patterns: tuple[ImmediateRiskPattern, ...]
    thresholds: TendencyThresholds = TendencyThresholds()

    def __post_init__(self) -> None:
        self._validate_tiers()
        self._validate_patterns()
        self._validate_thresholds()

    @classmethod
    def default(cls) -> "ClassifierConfig":
        """Shipped vocabulary with default weights and thresholds."""
        return cls.build()

    @classmethod
    def from_settings(cls, settings: ClassifierSettings) -> "ClassifierConfig":
        """Shipped vocabulary with configured weights and thresholds."""
        return cls.build(
            tier_weights={
                TierName.CRITICAL_SEVERE: settings.weight_critical_severe,
                TierName.SEVERE_PLAN: settings.weight_severe_plan,
                TierName.HIGH: settings.weight_high,
                TierName.MEDIUM: settings.weight_medium,
                TierName.LOW: settings.weight_low,
            },
            pattern_weight=settings.weight_immediate_pattern,
            thresholds=TendencyThresholds(
                low=settings.threshold_low,
                medium=settings.threshold_medium,
                high=settings.threshold_high,
                severe=settings.threshold_severe,
            ),
        )

    @classmethod
    def build(
        cls,
        tier_weights: Optional[dict[TierName, int]] = None,
        pattern_weight: Optional[int] = None,
        thresholds: Optional[TendencyThresholds] = None,
        tier_terms: Optional[dict[TierName, tuple[str, ...]]] = None,
        patterns: Optional[tuple[tuple[str, re.Pattern], ...]] = None,
    ) -> "ClassifierConfig":
        """
        Assemble a configuration from plain tables.

        Any argument left as None falls back to the shipped vocabulary
        and defaults. Useful for tests with a swapped tier table.
        """
        weights = tier_weights or vocabulary.DEFAULT_TIER_WEIGHTS
        terms = tier_terms or vocabulary.TIER_TERMS
        pattern_defs = patterns if patterns is not None else vocabulary.IMMEDIATE_RISK_PATTERNS
        weight = pattern_weight if pattern_weight is not None else vocabulary.DEFAULT_PATTERN_WEIGHT

        missing = [name.value for name in TierName if name not in weights or name not in terms]
        if missing:
            raise ConfigurationError(f"Missing tier definitions: {missing}")

        return cls(
            tiers=tuple(
                TermTier(name=name, weight=weights[name], terms=tuple(terms[name]))
                for name in TierName
            ),
            patterns=tuple(
                ImmediateRiskPattern(name=name, pattern=pattern, weight=weight)
                for name, pattern in pattern_defs
            ),
            thresholds=thresholds or TendencyThresholds(),
        )

    def tier(self, name: TierName) -> TermTier:
        for tier in self.tiers:
            if tier.name == name:
                return tier
        raise KeyError(name)

    def _validate_tiers(self) -> None:
        names = [tier.name for tier in self.tiers]
        if names != list(TierName):
            raise ConfigurationError(
                f"Tiers must be exactly {[t.value for t in TierName]} in order, "
                f"got {[n.value for n in names]}"
            )

        previous: Optional[TermTier] = None
        for tier in self.tiers:
            if tier.weight <= 0:
                raise ConfigurationError(f"Tier {tier.name} weight must be positive")
            if previous is not None and tier.weight >= previous.weight:
                raise ConfigurationError(
                    f"Tier weights must strictly decrease: "
                    f"{previous.name}={previous.weight}, {tier.name}={tier.weight}"
                )
            if not tier.terms:
                raise ConfigurationError(f"Tier {tier.name} has no terms")

            seen: set[str] = set()
            for term in tier.terms:
                if not term or not term.strip():
                    raise ConfigurationError(f"Tier {tier.name} contains an empty term")
                if term != term.lower():
                    raise ConfigurationError(
                        f"Tier {tier.name} term {term!r} must be lowercase"
                    )
                if term in seen:
                    raise ConfigurationError(
                        f"Tier {tier.name} term {term!r} is duplicated"
                    )
                seen.add(term)
            previous = tier

    def _validate_patterns(self) -> None:
        critical = self.tier(TierName.CRITICAL_SEVERE).weight
        names: set[str] = set()
        for pattern in self.patterns:
            if pattern.weight <= critical:
                raise ConfigurationError(
                    f"Pattern {pattern.name} weight {pattern.weight} must exceed "
                    f"the critical term weight {critical}"
                )
            if pattern.name in names:
                raise ConfigurationError(f"Pattern {pattern.name} is duplicated")
            names.add(pattern.name)

    def _validate_thresholds(self) -> None:
        t = self.thresholds
        ordered = [t.low, t.medium, t.high, t.severe]
        if t.low <= 0 or ordered != sorted(ordered):
            raise ConfigurationError(
                f"Thresholds must be positive and non-decreasing, got {ordered}"
            )

        critical = self.tier(TierName.CRITICAL_SEVERE).weight
        if critical < t.high:
            raise ConfigurationError(
                f"A single critical term ({critical}) must reach HIGH ({t.high})"
            )
        for pattern in self.patterns:
            if pattern.weight < t.severe:
                raise ConfigurationError(
                    f"A single {pattern.name} match ({pattern.weight}) "
                    f"must reach SEVERE ({t.severe})"
                )
