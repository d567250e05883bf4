"""
Health Endpoints

Liveness and readiness probes for the load balancer and orchestrator.
Readiness reports oracle availability but does not depend on it:
lexical-only classification is a fully valid serving state.
"""

from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from saathi import __version__
from saathi.config import get_settings
from saathi.services.classification.classification_engine import RiskClassifier

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Classifier readiness with oracle status."""

    ready: bool
    components: dict[str, bool]
    oracle_provider: Optional[str] = None


def _status(request: Request, status: str) -> HealthResponse:
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return HealthResponse(status=status, version=__version__, environment=settings.env)


@router.get("", response_model=HealthResponse, summary="Health check")
async def health_check(request: Request) -> HealthResponse:
    return _status(request, "healthy")


@router.get("/live", response_model=HealthResponse, summary="Liveness probe")
async def liveness_check(request: Request) -> HealthResponse:
    return _status(request, "alive")


@router.get("/ready", response_model=ReadinessResponse, summary="Readiness probe")
async def readiness_check(request: Request) -> ReadinessResponse:
    """Ready once the startup lifespan has built the classifier."""
    classifier: Optional[RiskClassifier] = getattr(request.app.state, "classifier", None)
    oracle_available = classifier is not None and classifier.oracle_available

    return ReadinessResponse(
        ready=classifier is not None,
        components={
            "classifier": classifier is not None,
            "oracle_available": oracle_available,
        },
        oracle_provider=classifier.oracle_provider if oracle_available else None,
    )
