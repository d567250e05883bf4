"""
Saathi Domain Layer

Risk scales and the classification output contract.
These models are independent of providers and transport.
"""

from saathi.domain.enums.risk_level import (
    ConfidenceLevel,
    CounsellingRecommendation,
    RiskLevel,
    TierName,
)
from saathi.domain.models.classification import (
    ClassificationResult,
    EvidenceEntry,
    OracleJudgment,
)

__all__ = [
    # Enums
    "RiskLevel",
    "CounsellingRecommendation",
    "TierName",
    "ConfidenceLevel",
    # Models
    "ClassificationResult",
    "EvidenceEntry",
    "OracleJudgment",
]
