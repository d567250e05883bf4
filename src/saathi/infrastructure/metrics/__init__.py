"""Metrics infrastructure package."""

from saathi.infrastructure.metrics.prometheus_metrics import (
    # Classification metrics
    CLASSIFICATIONS_TOTAL,
    IMMEDIATE_INTERVENTIONS_TOTAL,
    EVIDENCE_MATCHES_TOTAL,
    # Oracle metrics
    ORACLE_OUTCOMES_TOTAL,
    ORACLE_LATENCY,
    ORACLE_ESCALATIONS_TOTAL,
    # Helpers
    track_classification,
    track_oracle_outcome,
    track_escalation,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "CLASSIFICATIONS_TOTAL",
    "IMMEDIATE_INTERVENTIONS_TOTAL",
    "EVIDENCE_MATCHES_TOTAL",
    "ORACLE_OUTCOMES_TOTAL",
    "ORACLE_LATENCY",
    "ORACLE_ESCALATIONS_TOTAL",
    "track_classification",
    "track_oracle_outcome",
    "track_escalation",
    "update_system_info",
    "metrics_router",
]
