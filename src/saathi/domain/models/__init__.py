"""Domain models package."""

from saathi.domain.models.classification import (
    ClassificationResult,
    EvidenceEntry,
    OracleJudgment,
)

__all__ = ["ClassificationResult", "EvidenceEntry", "OracleJudgment"]
