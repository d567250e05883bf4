"""
Classification Endpoint

POST a complete transcript, receive the risk assessment in the flat
shape stored with conversation records and rendered by dashboards.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from saathi.services.classification.classification_engine import RiskClassifier

router = APIRouter()


class ClassifyRequest(BaseModel):
    """Transcript to classify. Missing or empty text is valid input."""

    transcript: Optional[str] = Field(default=None, description="Complete call transcript")
    call_id: Optional[str] = Field(default=None, description="Opaque call identifier, echoed back")


class DetectedTerm(BaseModel):
    term: str
    category: str


class ClassificationResponse(BaseModel):
    """Classification result in the external JSON contract."""

    tendency: str
    needsCounselling: str
    score: int = Field(ge=0)
    detectedTerms: list[DetectedTerm]
    immediateIntervention: bool
    review: str
    geminiAnalysis: Optional[dict] = None
    callId: Optional[str] = None


def get_risk_classifier(request: Request) -> RiskClassifier:
    """Classifier built during application startup."""
    return request.app.state.classifier


@router.post(
    "",
    response_model=ClassificationResponse,
    summary="Classify transcript",
    description="Lexical risk classification with optional oracle escalation",
)
async def classify_transcript(
    body: ClassifyRequest,
    classifier: RiskClassifier = Depends(get_risk_classifier),
) -> ClassificationResponse:
    result = await classifier.classify(body.transcript)
    return ClassificationResponse(**result.to_dict(), callId=body.call_id)
