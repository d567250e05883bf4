"""Domain enums package."""

from saathi.domain.enums.risk_level import (
    ConfidenceLevel,
    CounsellingRecommendation,
    RiskLevel,
    TierName,
)

__all__ = ["RiskLevel", "CounsellingRecommendation", "TierName", "ConfidenceLevel"]
