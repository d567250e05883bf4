"""
Oracle Reconciler

Consults the auxiliary LLM classifier (oracle) and reconciles its
judgment with the lexical result.

SAFETY CRITICAL: The oracle may only escalate. A lower oracle level
never lowers the lexical tendency, so an external false negative
cannot hide a dangerous transcript. Oracle false positives are
accepted.

Every oracle failure (missing credential, timeout, provider error,
unparsable output) degrades to "no judgment". Nothing here raises
into the classifier except task cancellation.
"""

import asyncio
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from saathi.config.logging_config import get_logger
from saathi.config.settings import OracleSettings
from saathi.domain.enums.risk_level import CounsellingRecommendation, RiskLevel
from saathi.domain.models.classification import OracleJudgment
from saathi.infrastructure.llm.provider import LLMProvider
from saathi.infrastructure.metrics import track_escalation, track_oracle_outcome
from saathi.services.classification.classifier_config import TendencyThresholds
from saathi.services.classification.tendency import minimum_score_for, recommend_counselling
from saathi.services.oracle.response_parser import parse_oracle_response
from saathi.services.prompt.assessment_prompt import build_assessment_prompt

logger = get_logger(__name__)


class OracleOutcome(StrEnum):
    """How an oracle consultation ended."""

    SUCCESS = "success"
    UNPARSABLE = "unparsable"
    TIMEOUT = "timeout"
    ERROR = "error"
    SKIPPED_DISABLED = "skipped_disabled"
    SKIPPED_UNCONFIGURED = "skipped_unconfigured"
    SKIPPED_SHORT = "skipped_short"


@dataclass(frozen=True)
class OracleConsultation:
    """Result of one consultation attempt."""

    outcome: OracleOutcome
    judgment: Optional[OracleJudgment] = None
    latency_ms: int = 0
    error: Optional[str] = None


@dataclass(frozen=True)
class ReconciledAssessment:
    """Tendency, counselling and score after reconciliation."""

    risk_level: RiskLevel
    counselling: CounsellingRecommendation
    score: int
    escalated: bool = False


def reconcile(
    risk_level: RiskLevel,
    score: int,
    judgment: Optional[OracleJudgment],
    thresholds: TendencyThresholds,
) -> ReconciledAssessment:
    """
    Apply the escalate-only precedence rule.

    - Oracle level strictly higher: adopt it, and raise the score to
      the minimum score of that level so score and level agree.
    - Otherwise the lexical level and score stand.
    - Counselling is the higher of the derived recommendation and the
      oracle's own recommendation.

    Args:
        risk_level: Lexical risk level
        score: Lexical score
        judgment: Oracle judgment, if any
        thresholds: Tendency thresholds

    Returns:
        ReconciledAssessment
    """
    if judgment is None:
        return ReconciledAssessment(
            risk_level=risk_level,
            counselling=recommend_counselling(risk_level),
            score=score,
        )

    final_level = risk_level
    final_score = score
    escalated = judgment.risk_level > risk_level
    if escalated:
        final_level = judgment.risk_level
        final_score = max(score, minimum_score_for(final_level, thresholds))

    counselling = max(recommend_counselling(final_level), judgment.counselling_needed)

    return ReconciledAssessment(
        risk_level=final_level,
        counselling=CounsellingRecommendation(counselling),
        score=final_score,
        escalated=escalated,
    )


class OracleReconciler:
    """
    Supervised oracle invocation.

    Features:
    - Skips silently when disabled, unconfigured, or input is too short
    - Hard timeout around the provider call
    - No retries
    - Structured logging without transcript text

    Usage:
        reconciler = OracleReconciler(provider, settings.oracle)
        consultation = await reconciler.consult(transcript)
    """

    def __init__(
        self,
        provider: Optional[LLMProvider],
        settings: Optional[OracleSettings] = None,
        *,
        max_tokens: int = 1024,
        temperature: float = 0.2,
    ) -> None:
        self._provider = provider
        self._settings = settings or OracleSettings()
        self._max_tokens = max_tokens
        self._temperature = temperature

    @property
    def provider_name(self) -> str:
        return self._provider.provider_name if self._provider else ""

    @property
    def is_available(self) -> bool:
        """Whether consultations can reach a provider at all."""
        return (
            self._settings.enabled
            and self._provider is not None
            and self._provider.is_configured()
        )

    async def consult(self, transcript: Optional[str]) -> OracleConsultation:
        """
        Ask the oracle for a judgment.

        Args:
            transcript: Full transcript text

        Returns:
            OracleConsultation; its judgment is None unless outcome is SUCCESS
        """
        skip = self._skip_reason(transcript)
        if skip is not None:
            logger.debug("Oracle skipped", outcome=skip.value)
            track_oracle_outcome(skip.value)
            return OracleConsultation(outcome=skip)

        prompt = build_assessment_prompt(
            transcript,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        start_time = time.monotonic()

        try:
            response = await asyncio.wait_for(
                self._provider.generate(prompt),
                timeout=self._settings.timeout_seconds,
            )
        except asyncio.TimeoutError:
            latency = time.monotonic() - start_time
            logger.warning(
                "Oracle timeout - using lexical result",
                provider=self.provider_name,
                timeout=self._settings.timeout_seconds,
            )
            track_oracle_outcome(OracleOutcome.TIMEOUT.value, self.provider_name, latency)
            return OracleConsultation(
                outcome=OracleOutcome.TIMEOUT,
                latency_ms=int(latency * 1000),
                error="Timeout",
            )
        except Exception as e:
            latency = time.monotonic() - start_time
            logger.warning(
                "Oracle error - using lexical result",
                provider=self.provider_name,
                error_type=type(e).__name__,
                error=str(e),
            )
            track_oracle_outcome(OracleOutcome.ERROR.value, self.provider_name, latency)
            return OracleConsultation(
                outcome=OracleOutcome.ERROR,
                latency_ms=int(latency * 1000),
                error=str(e),
            )

        latency = time.monotonic() - start_time
        try:
            judgment = parse_oracle_response(response.content, provider=self.provider_name)
        except Exception as e:
            logger.warning(
                "Oracle response could not be normalized",
                provider=self.provider_name,
                error_type=type(e).__name__,
            )
            judgment = None

        if judgment is None:
            logger.warning(
                "Oracle response unparsable - using lexical result",
                provider=self.provider_name,
                content_length=len(response.content or ""),
            )
            track_oracle_outcome(OracleOutcome.UNPARSABLE.value, self.provider_name, latency)
            return OracleConsultation(
                outcome=OracleOutcome.UNPARSABLE,
                latency_ms=int(latency * 1000),
                error="No judgment in oracle response",
            )

        logger.info(
            "Oracle judgment received",
            provider=self.provider_name,
            risk_level=judgment.risk_level.label,
            immediate_intervention=judgment.immediate_intervention,
            latency_ms=int(latency * 1000),
        )
        track_oracle_outcome(OracleOutcome.SUCCESS.value, self.provider_name, latency)
        return OracleConsultation(
            outcome=OracleOutcome.SUCCESS,
            judgment=judgment,
            latency_ms=int(latency * 1000),
        )

    def reconcile(
        self,
        risk_level: RiskLevel,
        score: int,
        judgment: Optional[OracleJudgment],
        thresholds: TendencyThresholds,
    ) -> ReconciledAssessment:
        """Reconcile and record any escalation."""
        result = reconcile(risk_level, score, judgment, thresholds)
        if result.escalated:
            logger.info(
                "Oracle escalated tendency",
                from_level=risk_level.label,
                to_level=result.risk_level.label,
            )
            track_escalation(risk_level.label, result.risk_level.label)
        return result

    def _skip_reason(self, transcript: Optional[str]) -> Optional[OracleOutcome]:
        if not self._settings.enabled:
            return OracleOutcome.SKIPPED_DISABLED
        if self._provider is None or not self._provider.is_configured():
            return OracleOutcome.SKIPPED_UNCONFIGURED
        if not transcript or len(transcript.strip()) < self._settings.min_transcript_chars:
            return OracleOutcome.SKIPPED_SHORT
        return None
