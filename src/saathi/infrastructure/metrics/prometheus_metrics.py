"""
Prometheus Metrics

Classifier observability. Exposes metrics at /metrics for scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
"""

from fastapi import APIRouter, Response
from prometheus_client import (
    Counter,
    Histogram,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST,
    REGISTRY,
)

from saathi import __version__

# =============================================================================
# CLASSIFICATION METRICS
# =============================================================================

CLASSIFICATIONS_TOTAL = Counter(
    "saathi_classifications_total",
    "Transcripts classified by final tendency",
    ["tendency"],  # no, low, medium, high, severe
)

IMMEDIATE_INTERVENTIONS_TOTAL = Counter(
    "saathi_immediate_interventions_total",
    "Classifications flagged for immediate intervention",
)

EVIDENCE_MATCHES_TOTAL = Counter(
    "saathi_evidence_matches_total",
    "Evidence entries produced by tier",
    ["category"],
)

# =============================================================================
# ORACLE METRICS
# =============================================================================

ORACLE_OUTCOMES_TOTAL = Counter(
    "saathi_oracle_outcomes_total",
    "Oracle consultation outcomes",
    ["outcome"],  # success, unparsable, timeout, error, skipped_*
)

ORACLE_LATENCY = Histogram(
    "saathi_oracle_latency_seconds",
    "Oracle response latency",
    ["provider"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 15.0],
)

ORACLE_ESCALATIONS_TOTAL = Counter(
    "saathi_oracle_escalations_total",
    "Tendency escalations applied from oracle judgments",
    ["from_level", "to_level"],
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "saathi_system",
    "Saathi classifier information",
)

SYSTEM_INFO.info({"version": __version__, "environment": "unknown"})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_classification(tendency: str, immediate_intervention: bool, categories: list[str]) -> None:
    """Record a completed classification."""
    CLASSIFICATIONS_TOTAL.labels(tendency=tendency).inc()
    if immediate_intervention:
        IMMEDIATE_INTERVENTIONS_TOTAL.inc()
    for category in categories:
        EVIDENCE_MATCHES_TOTAL.labels(category=category).inc()


def track_oracle_outcome(outcome: str, provider: str = "", latency_seconds: float | None = None) -> None:
    """Record an oracle consultation outcome and, when called, its latency."""
    ORACLE_OUTCOMES_TOTAL.labels(outcome=outcome).inc()
    if latency_seconds is not None and provider:
        ORACLE_LATENCY.labels(provider=provider).observe(latency_seconds)


def track_escalation(from_level: str, to_level: str) -> None:
    """Record an oracle-driven escalation."""
    ORACLE_ESCALATIONS_TOTAL.labels(from_level=from_level, to_level=to_level).inc()


def update_system_info(environment: str, version: str = __version__) -> None:
    """Publish the running environment once settings are loaded."""
    SYSTEM_INFO.info({"version": version, "environment": environment})


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """Prometheus text exposition of the default registry."""
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)
