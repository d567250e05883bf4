"""
Review Synthesizer

Fixed-template summaries shown to counsellors next to the result.
"""

from typing import Sequence

from saathi.domain.enums.risk_level import RiskLevel
from saathi.domain.models.classification import EvidenceEntry


REVIEW_TEMPLATES: dict[RiskLevel, str] = {
    RiskLevel.SEVERE: (
        "🚨 SEVERE RISK DETECTED - Immediate intervention required. "
        "Score: {score}. Terms: {terms}. Consider emergency services."
    ),
    RiskLevel.HIGH: (
        "⚠️ HIGH RISK - Urgent counseling recommended. Score: {score}. "
        "Terms: {terms}. Monitor closely and provide immediate support resources."
    ),
    RiskLevel.MEDIUM: (
        "⚡ MODERATE CONCERN - Professional counseling advised. Score: {score}. "
        "Provide mental health resources and follow up."
    ),
    RiskLevel.LOW: (
        "💭 MILD DISTRESS - Supportive listening recommended. Score: {score}. "
        "Emotional support and coping strategies helpful."
    ),
    RiskLevel.NONE: (
        "No significant risk indicators detected. "
        "Maintain supportive, empathetic tone."
    ),
}


def synthesize_review(
    level: RiskLevel,
    score: int,
    evidence: Sequence[EvidenceEntry],
) -> str:
    """
    Render the review for a risk level.

    Args:
        level: Final risk level
        score: Final score
        evidence: Matched evidence; terms are listed for HIGH and SEVERE

    Returns:
        Review string
    """
    terms = ", ".join(entry.term for entry in evidence) or "none matched"
    return REVIEW_TEMPLATES[level].format(score=score, terms=terms)
