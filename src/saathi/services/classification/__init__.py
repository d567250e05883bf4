"""
Classification services package.

Lexical scoring, tendency mapping, review synthesis. The engine lives in
saathi.services.classification.classification_engine.
"""

from saathi.services.classification.classifier_config import (
    ClassifierConfig,
    ConfigurationError,
    ImmediateRiskPattern,
    TendencyThresholds,
    TermTier,
)
from saathi.services.classification.lexical_scorer import LexicalScore, LexicalScorer
from saathi.services.classification.tendency import (
    classify_tendency,
    minimum_score_for,
    recommend_counselling,
)
from saathi.services.classification.review import synthesize_review

__all__ = [
    # Configuration
    "ClassifierConfig",
    "ConfigurationError",
    "ImmediateRiskPattern",
    "TendencyThresholds",
    "TermTier",
    # Scoring
    "LexicalScore",
    "LexicalScorer",
    "classify_tendency",
    "minimum_score_for",
    "recommend_counselling",
    "synthesize_review",
]
