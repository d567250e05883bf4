"""
Lexical Scorer

Weighted phrase and pattern matching over a transcript.

ARCHITECTURE: Pure function of (transcript, config). No early exit:
every tier and every pattern is evaluated so weak signals compound.
Each distinct term counts at most once per call, regardless of how
often it occurs.
"""

from dataclasses import dataclass, field
from typing import Optional

from saathi.domain.enums.risk_level import TierName
from saathi.domain.models.classification import EvidenceEntry
from saathi.services.classification.classifier_config import ClassifierConfig


@dataclass(frozen=True)
class LexicalScore:
    """
    Output of the lexical scan.

    Attributes:
        total: Sum of weights of every match
        evidence: One entry per matching term or pattern, in scan order
    """

    total: int = 0
    evidence: tuple[EvidenceEntry, ...] = field(default_factory=tuple)


class LexicalScorer:
    """
    Scores transcripts against the configured vocabulary.

    Usage:
        scorer = LexicalScorer(ClassifierConfig.default())
        result = scorer.score("I feel hopeless")
    """

    def __init__(self, config: ClassifierConfig) -> None:
        self._config = config

    def score(self, transcript: Optional[str]) -> LexicalScore:
        """
        Scan a transcript.

        Args:
            transcript: Raw transcript text; None or empty is allowed

        Returns:
            LexicalScore with total and evidence
        """
        if not transcript:
            return LexicalScore()

        text = transcript.lower()
        total = 0
        evidence: list[EvidenceEntry] = []

        for tier in self._config.tiers:
            for term in tier.terms:
                if term in text:
                    total += tier.weight
                    evidence.append(EvidenceEntry(term=term, category=tier.name))

        for pattern in self._config.patterns:
            if pattern.pattern.search(text):
                total += pattern.weight
                evidence.append(EvidenceEntry(
                    term=pattern.identifier,
                    category=TierName.CRITICAL_SEVERE,
                ))

        return LexicalScore(total=total, evidence=tuple(evidence))
