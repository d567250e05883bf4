"""
Risk Level and Counselling Enumerations

Defines the ordinal scales the classifier reports on.

SAFETY_NOTE: The ordering of RiskLevel is load-bearing. Oracle
reconciliation compares levels; it never checks equality only.
"""

from enum import IntEnum, StrEnum
from typing import Optional


class RiskLevel(IntEnum):
    """
    Risk tendency of a transcript.

    Strict total order NONE < LOW < MEDIUM < HIGH < SEVERE.
    The external label ("no", "low", ...) is what dashboards and
    stored conversation records expect.
    """

    NONE = 0
    """No risk indicators detected."""

    LOW = 1
    """Mild distress. Supportive listening is enough."""

    MEDIUM = 2
    """Moderate concern. Professional counselling advised."""

    HIGH = 3
    """High risk. Urgent counselling, monitor closely."""

    SEVERE = 4
    """
    Severe risk. Immediate intervention required.

    SAFETY_NOTE: Always implies the immediate-intervention flag.
    """

    @property
    def label(self) -> str:
        """External label used in the serialized result."""
        return _RISK_LABELS[self]

    @classmethod
    def from_label(cls, value: object) -> Optional["RiskLevel"]:
        """
        Parse an external or oracle-supplied label.

        Accepts the canonical labels plus common synonyms
        ("none", "moderate", "critical"). Returns None when the
        value is not recognizable.
        """
        if not isinstance(value, str):
            return None
        return _RISK_SYNONYMS.get(value.strip().lower())


class CounsellingRecommendation(IntEnum):
    """
    Counselling recommendation, ordered NONE < ADVISED < REQUIRED.

    Always derived from RiskLevel on the lexical path.
    """

    NONE = 0
    ADVISED = 1
    REQUIRED = 2

    @property
    def label(self) -> str:
        """External label used in the serialized result."""
        return _COUNSELLING_LABELS[self]

    @classmethod
    def from_label(cls, value: object) -> Optional["CounsellingRecommendation"]:
        """Parse an external or oracle-supplied label, None if unknown."""
        if isinstance(value, bool):
            return cls.REQUIRED if value else cls.NONE
        if not isinstance(value, str):
            return None
        return _COUNSELLING_SYNONYMS.get(value.strip().lower())

    @classmethod
    def for_risk_level(cls, level: RiskLevel) -> "CounsellingRecommendation":
        """
        Map risk level to counselling recommendation.

        SEVERE|HIGH -> REQUIRED, MEDIUM -> ADVISED, LOW|NONE -> NONE.
        """
        mapping = {
            RiskLevel.NONE: cls.NONE,
            RiskLevel.LOW: cls.NONE,
            RiskLevel.MEDIUM: cls.ADVISED,
            RiskLevel.HIGH: cls.REQUIRED,
            RiskLevel.SEVERE: cls.REQUIRED,
        }
        return mapping[level]


class TierName(StrEnum):
    """Vocabulary tiers, listed from heaviest to lightest weight."""

    CRITICAL_SEVERE = "critical_severe"
    """Explicit suicidal statements."""

    SEVERE_PLAN = "severe_plan"
    """Methods, means and preparation."""

    HIGH = "high"
    """Hopelessness and farewell language."""

    MEDIUM = "medium"
    """Depressive and anxiety symptoms."""

    LOW = "low"
    """Everyday stress and frustration."""


class ConfidenceLevel(StrEnum):
    """Self-reported confidence of the oracle."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_label(cls, value: object) -> Optional["ConfidenceLevel"]:
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


_RISK_LABELS: dict[RiskLevel, str] = {
    RiskLevel.NONE: "no",
    RiskLevel.LOW: "low",
    RiskLevel.MEDIUM: "medium",
    RiskLevel.HIGH: "high",
    RiskLevel.SEVERE: "severe",
}

_RISK_SYNONYMS: dict[str, RiskLevel] = {
    "no": RiskLevel.NONE,
    "none": RiskLevel.NONE,
    "low": RiskLevel.LOW,
    "mild": RiskLevel.LOW,
    "medium": RiskLevel.MEDIUM,
    "moderate": RiskLevel.MEDIUM,
    "high": RiskLevel.HIGH,
    "severe": RiskLevel.SEVERE,
    "critical": RiskLevel.SEVERE,
}

_COUNSELLING_LABELS: dict[CounsellingRecommendation, str] = {
    CounsellingRecommendation.NONE: "no",
    CounsellingRecommendation.ADVISED: "advised",
    CounsellingRecommendation.REQUIRED: "yes",
}

_COUNSELLING_SYNONYMS: dict[str, CounsellingRecommendation] = {
    "no": CounsellingRecommendation.NONE,
    "none": CounsellingRecommendation.NONE,
    "advised": CounsellingRecommendation.ADVISED,
    "recommended": CounsellingRecommendation.ADVISED,
    "yes": CounsellingRecommendation.REQUIRED,
    "required": CounsellingRecommendation.REQUIRED,
}
