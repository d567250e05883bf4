"""Score-to-tendency and tendency-to-counselling mappings."""

from saathi.domain.enums.risk_level import CounsellingRecommendation, RiskLevel
from saathi.services.classification.classifier_config import TendencyThresholds


def classify_tendency(score: int, thresholds: TendencyThresholds) -> RiskLevel:
    """
    Map a score to a risk level.

    Monotonic non-decreasing in score for any valid thresholds.
    """
    if score >= thresholds.severe:
        return RiskLevel.SEVERE
    if score >= thresholds.high:
        return RiskLevel.HIGH
    if score >= thresholds.medium:
        return RiskLevel.MEDIUM
    if score >= thresholds.low:
        return RiskLevel.LOW
    return RiskLevel.NONE


def recommend_counselling(level: RiskLevel) -> CounsellingRecommendation:
    """Counselling is always derived from the risk level."""
    return CounsellingRecommendation.for_risk_level(level)


def minimum_score_for(level: RiskLevel, thresholds: TendencyThresholds) -> int:
    """Smallest score consistent with a level; used after escalation."""
    return thresholds.minimum_score(level)
