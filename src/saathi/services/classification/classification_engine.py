"""
Classification Engine

Transcript -> lexical score -> tendency -> counselling ->
(optional) oracle reconciliation -> review -> ClassificationResult.

SAFETY-CRITICAL: classify() is total. For any string, including the
empty string and None, it returns a valid result and never raises.
All fallibility lives in the optional oracle step and is absorbed
there.

ARCHITECTURE: The engine holds only read-only configuration. Many
classifications may run concurrently on one instance; they share no
lock and no mutable state. The result is assembled in a single step
at the end, so a cancelled call publishes nothing.
"""

from typing import Optional

from saathi.config import Settings, get_settings
from saathi.config.logging_config import get_logger
from saathi.domain.models.classification import ClassificationResult
from saathi.infrastructure.metrics import track_classification
from saathi.services.classification.classifier_config import ClassifierConfig
from saathi.services.classification.lexical_scorer import LexicalScore, LexicalScorer
from saathi.services.classification.review import synthesize_review
from saathi.services.classification.tendency import classify_tendency, recommend_counselling
from saathi.services.oracle.oracle_reconciler import OracleReconciler

logger = get_logger(__name__)


class RiskClassifier:
    """
    Conversation risk classifier.

    Usage:
        classifier = RiskClassifier(ClassifierConfig.default())
        result = await classifier.classify(transcript)

        # with an oracle
        classifier = RiskClassifier(config, reconciler=OracleReconciler(provider, settings.oracle))
    """

    def __init__(
        self,
        config: ClassifierConfig,
        reconciler: Optional[OracleReconciler] = None,
    ) -> None:
        """
        Initialize classifier.

        Args:
            config: Validated classifier configuration
            reconciler: Optional oracle reconciler; None means lexical only
        """
        self._config = config
        self._scorer = LexicalScorer(config)
        self._reconciler = reconciler

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    @property
    def oracle_available(self) -> bool:
        return self._reconciler is not None and self._reconciler.is_available

    @property
    def oracle_provider(self) -> Optional[str]:
        return self._reconciler.provider_name if self._reconciler is not None else None

    def score(self, transcript: Optional[str]) -> LexicalScore:
        """Run the lexical scan only."""
        return self._scorer.score(transcript)

    def classify_lexical(self, transcript: Optional[str]) -> ClassificationResult:
        """
        Classify without consulting the oracle.

        Deterministic: identical input gives an identical result.
        """
        lexical = self._scorer.score(transcript)
        risk_level = classify_tendency(lexical.total, self._config.thresholds)

        return ClassificationResult(
            risk_level=risk_level,
            counselling_recommendation=recommend_counselling(risk_level),
            score=lexical.total,
            evidence=lexical.evidence,
            review=synthesize_review(risk_level, lexical.total, lexical.evidence),
        )

    async def classify(self, transcript: Optional[str]) -> ClassificationResult:
        """
        Classify a complete transcript.

        Args:
            transcript: Transcript text; None and "" are valid input

        Returns:
            ClassificationResult
        """
        lexical = self._scorer.score(transcript)
        risk_level = classify_tendency(lexical.total, self._config.thresholds)
        counselling = recommend_counselling(risk_level)
        score = lexical.total
        judgment = None

        if self._reconciler is not None:
            consultation = await self._reconciler.consult(transcript)
            judgment = consultation.judgment
            reconciled = self._reconciler.reconcile(
                risk_level,
                score,
                judgment,
                self._config.thresholds,
            )
            risk_level = reconciled.risk_level
            counselling = reconciled.counselling
            score = reconciled.score

        result = ClassificationResult(
            risk_level=risk_level,
            counselling_recommendation=counselling,
            score=score,
            evidence=lexical.evidence,
            review=synthesize_review(risk_level, score, lexical.evidence),
            oracle_judgment=judgment,
        )

        logger.info(
            "Transcript classified",
            transcript_length=len(transcript or ""),
            score=result.score,
            tendency=result.risk_level.label,
            counselling=result.counselling_recommendation.label,
            evidence_count=len(result.evidence),
            immediate_intervention=result.immediate_intervention,
            oracle_judgment=judgment is not None,
        )
        track_classification(
            result.risk_level.label,
            result.immediate_intervention,
            [entry.category.value for entry in result.evidence],
        )

        return result


def create_classifier(settings: Optional[Settings] = None) -> RiskClassifier:
    """
    Build a classifier from settings.

    Raises:
        ConfigurationError: If weights or thresholds are malformed
    """
    from saathi.infrastructure.llm import get_llm_provider

    settings = settings or get_settings()
    config = ClassifierConfig.from_settings(settings.classifier)

    reconciler = None
    if settings.oracle.enabled:
        provider_settings = getattr(settings, settings.oracle.provider)
        reconciler = OracleReconciler(
            get_llm_provider(settings=settings),
            settings.oracle,
            max_tokens=provider_settings.max_tokens,
            temperature=provider_settings.temperature,
        )

    return RiskClassifier(config, reconciler=reconciler)


_default_classifier: Optional[RiskClassifier] = None


def get_classifier() -> RiskClassifier:
    """Get the process-wide classifier, building it on first use."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = create_classifier()
    return _default_classifier


async def classify(transcript: Optional[str]) -> ClassificationResult:
    """Classify a transcript with the process-wide classifier."""
    return await get_classifier().classify(transcript)
