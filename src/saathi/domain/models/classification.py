"""
Classification Models

Output contract of the risk classifier.

ARCHITECTURE: A ClassificationResult is built once, atomically, at the
end of a classification call and is immutable afterwards. Callers own
their instance; nothing is cached or shared.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from saathi.domain.enums.risk_level import (
    ConfidenceLevel,
    CounsellingRecommendation,
    RiskLevel,
    TierName,
)


@dataclass(frozen=True)
class EvidenceEntry:
    """
    A single matched term or pattern.

    Attributes:
        term: Matched phrase, or a synthetic pattern identifier
        category: Tier the match belongs to
    """

    term: str
    category: TierName

    def to_dict(self) -> dict:
        return {"term": self.term, "category": self.category.value}


@dataclass(frozen=True)
class OracleJudgment:
    """
    Parsed judgment from the auxiliary LLM classifier.

    Constructed fresh per call from the oracle response. May be absent
    from a result without that being an error.

    Attributes:
        risk_level: Oracle risk level
        counselling_needed: Oracle counselling recommendation
        immediate_intervention: Whether the oracle asserted imminent danger
        assessment_summary: Free-text summary
        confidence_level: Self-reported confidence, if given
        concerning_phrases: Phrases the oracle flagged
        language_used: Hindi / English / Mixed, if given
        emotional_state: Short description, if given
        support_recommendations: Suggested support, if given
        provider: Oracle backend that produced the judgment
        raw: Parsed payload as received, kept for audit
    """

    risk_level: RiskLevel
    counselling_needed: CounsellingRecommendation = CounsellingRecommendation.NONE
    immediate_intervention: bool = False
    assessment_summary: str = ""
    confidence_level: Optional[ConfidenceLevel] = None
    concerning_phrases: tuple[str, ...] = ()
    language_used: Optional[str] = None
    emotional_state: Optional[str] = None
    support_recommendations: Optional[str] = None
    provider: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> dict:
        """Serialize with the field names the oracle itself emits."""
        return {
            "risk_level": self.risk_level.label,
            "counseling_needed": self.counselling_needed.label,
            "immediate_intervention": "yes" if self.immediate_intervention else "no",
            "assessment_summary": self.assessment_summary,
            "confidence_level": self.confidence_level.value if self.confidence_level else None,
            "concerning_phrases": list(self.concerning_phrases),
            "language_used": self.language_used,
            "emotional_state": self.emotional_state,
            "support_recommendations": self.support_recommendations,
            "provider": self.provider,
        }


@dataclass(frozen=True)
class ClassificationResult:
    """
    Result of classifying one transcript.

    SAFETY_NOTE: immediate_intervention is derived, never stored. It is
    true iff the level is SEVERE, any evidence is CRITICAL_SEVERE, or
    the oracle asserted immediate intervention.

    Attributes:
        risk_level: Final risk tendency
        counselling_recommendation: Final counselling recommendation
        score: Non-negative score consistent with risk_level
        evidence: Matched terms and patterns, in scan order
        review: Human-readable summary
        oracle_judgment: Oracle judgment, when one was obtained
    """

    risk_level: RiskLevel
    counselling_recommendation: CounsellingRecommendation
    score: int
    evidence: tuple[EvidenceEntry, ...] = ()
    review: str = ""
    oracle_judgment: Optional[OracleJudgment] = None

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValueError(f"score must be non-negative, got {self.score}")

    @property
    def immediate_intervention(self) -> bool:
        if self.risk_level == RiskLevel.SEVERE:
            return True
        if any(e.category == TierName.CRITICAL_SEVERE for e in self.evidence):
            return True
        return bool(self.oracle_judgment and self.oracle_judgment.immediate_intervention)

    def to_dict(self) -> dict:
        """Serialize to the flat JSON shape consumed by storage and dashboards."""
        return {
            "tendency": self.risk_level.label,
            "needsCounselling": self.counselling_recommendation.label,
            "score": self.score,
            "detectedTerms": [e.to_dict() for e in self.evidence],
            "immediateIntervention": self.immediate_intervention,
            "review": self.review,
            "geminiAnalysis": self.oracle_judgment.to_dict() if self.oracle_judgment else None,
        }
