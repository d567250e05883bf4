"""
Unit Tests for Lexical Scorer

Tests weighted phrase and pattern matching.
"""

import re

import pytest

from saathi.domain.enums.risk_level import TierName
from saathi.domain.models.classification import EvidenceEntry
from saathi.services.classification.classifier_config import ClassifierConfig
from saathi.services.classification.lexical_scorer import LexicalScore, LexicalScorer


@pytest.fixture
def scorer(default_config: ClassifierConfig) -> LexicalScorer:
    return LexicalScorer(default_config)


class TestEmptyInput:
    """Empty and missing transcripts score zero."""

    @pytest.mark.parametrize("transcript", ["", None])
    def test_empty_transcript(self, scorer: LexicalScorer, transcript) -> None:
        """Test that empty input yields an empty score."""
        result = scorer.score(transcript)
        assert result == LexicalScore()
        assert result.total == 0
        assert result.evidence == ()

    def test_neutral_transcript(self, scorer: LexicalScorer) -> None:
        result = scorer.score("Thank you, I feel better now after talking.")
        assert result.total == 0
        assert result.evidence == ()


class TestTermMatching:
    """Tests for tiered vocabulary matching."""

    def test_critical_and_high_terms(self, scorer: LexicalScorer) -> None:
        """Test explicit intent plus hopelessness."""
        result = scorer.score("I want to kill myself. I have no reason to live.")

        assert result.total == 11
        assert result.evidence == (
            EvidenceEntry("kill myself", TierName.CRITICAL_SEVERE),
            EvidenceEntry("no reason to live", TierName.HIGH),
        )

    def test_case_insensitive(self, scorer: LexicalScorer) -> None:
        result = scorer.score("I feel HOPELESS")
        assert result.total == 3
        assert result.evidence == (EvidenceEntry("hopeless", TierName.HIGH),)

    def test_repeated_term_counts_once(self, scorer: LexicalScorer) -> None:
        """Test that a repeated term adds its weight a single time."""
        result = scorer.score("sad sad sad")
        assert result.total == 1
        assert [e.term for e in result.evidence] == ["sad"]

    def test_weak_signals_compound(self, scorer: LexicalScorer) -> None:
        """Test that every tier is scanned and weights add up."""
        result = scorer.score("I feel hopeless and depressed and lonely")

        assert result.total == 3 + 2 + 1
        assert [e.category for e in result.evidence] == [
            TierName.HIGH,
            TierName.MEDIUM,
            TierName.LOW,
        ]

    def test_hindi_terms(self, scorer: LexicalScorer) -> None:
        """Test transliterated Hindi phrases."""
        result = scorer.score("Main marna chahta hun. Koi raah nahi hai.")

        assert result.total == 11
        assert [e.term for e in result.evidence] == ["marna chahta hun", "koi raah nahi"]

    def test_hindi_low_terms(self, scorer: LexicalScorer) -> None:
        result = scorer.score("Thoda tension hai office ka. Gussa aa raha hai. Dimag kharab hai.")
        assert result.total == 3
        assert {e.category for e in result.evidence} == {TierName.LOW}

    def test_substring_matching(self, scorer: LexicalScorer) -> None:
        """Test that short phrases match inside longer words."""
        result = scorer.score("a wave of sadness")
        assert EvidenceEntry("sad", TierName.LOW) in result.evidence

    def test_plan_terms(self, scorer: LexicalScorer) -> None:
        result = scorer.score("I bought a rope yesterday. I am going to end it tonight. Goodbye forever.")

        assert result.total == 6 + 3 + 3
        assert [e.term for e in result.evidence] == [
            "bought a rope",
            "i am going to",
            "goodbye forever",
        ]


class TestImmediateRiskPatterns:
    """Tests for syntactic immediate-risk constructions."""

    def test_tonight_intent(self, scorer: LexicalScorer) -> None:
        result = scorer.score("Tonight I will do it")

        assert result.total == 10
        assert result.evidence == (
            EvidenceEntry("immediate_risk_pattern:tonight_intent", TierName.CRITICAL_SEVERE),
        )

    def test_first_person_self_harm(self, scorer: LexicalScorer) -> None:
        """Test construction with no fixed phrase in the vocabulary."""
        result = scorer.score("I'll hurt myself")

        assert result.total == 10
        assert result.evidence[-1].term == "immediate_risk_pattern:first_person_self_harm"

    def test_pattern_counted_once(self, scorer: LexicalScorer) -> None:
        result = scorer.score("tonight i go, tonight i go, tonight i go")
        pattern_hits = [e for e in result.evidence if e.term.startswith("immediate_risk_pattern:")]
        assert len(pattern_hits) == 1


class TestSwappedConfiguration:
    """Scorer is driven entirely by its configuration."""

    def test_custom_tier_table(self) -> None:
        config = ClassifierConfig.build(
            tier_terms={
                TierName.CRITICAL_SEVERE: ("alpha",),
                TierName.SEVERE_PLAN: ("bravo",),
                TierName.HIGH: ("charlie",),
                TierName.MEDIUM: ("delta",),
                TierName.LOW: ("echo",),
            },
            patterns=(),
        )
        scorer = LexicalScorer(config)

        result = scorer.score("Alpha and echo")

        assert result.total == 8 + 1
        assert [e.term for e in result.evidence] == ["alpha", "echo"]
        assert scorer.score("I want to kill myself").total == 0

    def test_custom_pattern(self) -> None:
        config = ClassifierConfig.build(
            patterns=(("final_hour", re.compile(r"\bfinal\s+hour\b")),),
        )
        result = LexicalScorer(config).score("This is the final hour")

        assert result.total == 10
        assert result.evidence == (
            EvidenceEntry("immediate_risk_pattern:final_hour", TierName.CRITICAL_SEVERE),
        )
