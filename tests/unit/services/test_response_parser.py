"""
Unit Tests for Oracle Response Parser

Tests each parse strategy and the full chain.
"""

import json

import pytest

from saathi.domain.enums.risk_level import (
    ConfidenceLevel,
    CounsellingRecommendation,
    RiskLevel,
)
from saathi.services.oracle.response_parser import (
    judgment_from_payload,
    parse_direct_json,
    parse_embedded_json,
    parse_oracle_response,
    parse_regex_fields,
)


FULL_RESPONSE = json.dumps({
    "risk_level": "severe",
    "counseling_needed": "yes",
    "immediate_intervention": "yes",
    "assessment_summary": "Caller states intent and a timeframe.",
    "confidence_level": "high",
    "concerning_phrases": ["kill myself", "tonight"],
    "language_used": "Mixed",
    "emotional_state": "Despairing",
    "support_recommendations": "Stay on the line; contact emergency services.",
})


class TestParseDirectJson:
    """Tests for whole-response JSON."""

    def test_object(self) -> None:
        assert parse_direct_json('  {"risk_level": "high"}\n') == {"risk_level": "high"}

    def test_not_json(self) -> None:
        assert parse_direct_json("The caller seems fine.") is None

    def test_non_object_json(self) -> None:
        assert parse_direct_json("[1, 2, 3]") is None


class TestParseEmbeddedJson:
    """Tests for JSON surrounded by prose or fences."""

    def test_markdown_fence(self) -> None:
        text = 'Here is my assessment:\n```json\n{"risk_level": "severe", "note": "a } brace"}\n```'
        assert parse_embedded_json(text) == {"risk_level": "severe", "note": "a } brace"}

    def test_nested_object(self) -> None:
        text = 'Result: {"risk_level": "low", "meta": {"source": "call"}} done'
        payload = parse_embedded_json(text)
        assert payload["meta"] == {"source": "call"}

    def test_skips_invalid_candidate(self) -> None:
        """Test that a non-JSON brace group does not stop the search."""
        text = '{not json} then {"risk_level": "low"}'
        assert parse_embedded_json(text) == {"risk_level": "low"}

    def test_no_braces(self) -> None:
        assert parse_embedded_json("no structure here") is None

    def test_unbalanced(self) -> None:
        assert parse_embedded_json('{"risk_level": "high"') is None


class TestParseRegexFields:
    """Tests for best-effort field scraping."""

    def test_key_value_lines(self) -> None:
        text = "Risk level: HIGH\nCounseling needed: yes\nImmediate intervention: no"
        payload = parse_regex_fields(text)

        assert payload["risk_level"] == "HIGH"
        assert payload["counseling_needed"] == "yes"
        assert payload["immediate_intervention"] == "no"
        assert payload["parse_strategy"] == "regex"

    def test_summary_fallback_truncated(self) -> None:
        text = "Risk level: medium. " + "x" * 300
        payload = parse_regex_fields(text)

        assert payload["assessment_summary"].endswith("...")
        assert len(payload["assessment_summary"]) == 203

    def test_explicit_summary(self) -> None:
        text = "risk_level = low\nassessment_summary: Mild work stress"
        assert parse_regex_fields(text)["assessment_summary"] == "Mild work stress"

    def test_nothing_found(self) -> None:
        assert parse_regex_fields("I cannot help with that request.") is None


class TestParseOracleResponse:
    """Tests for the full strategy chain."""

    def test_full_json(self) -> None:
        judgment = parse_oracle_response(FULL_RESPONSE, provider="gemini")

        assert judgment.risk_level == RiskLevel.SEVERE
        assert judgment.counselling_needed == CounsellingRecommendation.REQUIRED
        assert judgment.immediate_intervention is True
        assert judgment.confidence_level == ConfidenceLevel.HIGH
        assert judgment.concerning_phrases == ("kill myself", "tonight")
        assert judgment.language_used == "Mixed"
        assert judgment.provider == "gemini"
        assert judgment.raw["risk_level"] == "severe"

    def test_fenced_json(self) -> None:
        judgment = parse_oracle_response(f"```json\n{FULL_RESPONSE}\n```")
        assert judgment.risk_level == RiskLevel.SEVERE

    def test_free_text(self) -> None:
        judgment = parse_oracle_response("**Risk level**: moderate\n**Counselling needed**: advised")

        assert judgment.risk_level == RiskLevel.MEDIUM
        assert judgment.counselling_needed == CounsellingRecommendation.ADVISED
        assert judgment.immediate_intervention is False

    @pytest.mark.parametrize("text", [None, "", "   ", "Sorry, I can't assess this."])
    def test_no_judgment(self, text) -> None:
        assert parse_oracle_response(text) is None

    def test_unrecognized_risk_level(self) -> None:
        """Test that a payload without a usable level yields no judgment."""
        assert parse_oracle_response('{"risk_level": "unknown", "counseling_needed": "yes"}') is None

    def test_missing_risk_level(self) -> None:
        assert parse_oracle_response('{"counseling_needed": "yes"}') is None

    @pytest.mark.parametrize("phrases", [5, True, 2.5, {"phrase": "goodbye"}, None])
    def test_non_list_phrases_ignored(self, phrases) -> None:
        text = json.dumps({"risk_level": "high", "concerning_phrases": phrases})

        judgment = parse_oracle_response(text)

        assert judgment.risk_level == RiskLevel.HIGH
        assert judgment.concerning_phrases == ()

    @pytest.mark.parametrize(
        "payload",
        [
            {"risk_level": {"level": "high"}},
            {"risk_level": ["severe"]},
            {"risk_level": 4},
        ],
    )
    def test_non_string_risk_level(self, payload: dict) -> None:
        assert parse_oracle_response(json.dumps(payload)) is None

    def test_wrongly_typed_optional_fields(self) -> None:
        judgment = parse_oracle_response(json.dumps({
            "risk_level": "medium",
            "counseling_needed": 7,
            "confidence_level": ["high"],
            "assessment_summary": {"text": "nested"},
            "language_used": 3,
        }))

        assert judgment.risk_level == RiskLevel.MEDIUM
        assert judgment.counselling_needed == CounsellingRecommendation.NONE
        assert judgment.confidence_level is None
        assert judgment.language_used == "3"


class TestJudgmentFromPayload:
    """Tests for payload normalization."""

    def test_synonyms_and_boolean_flags(self) -> None:
        judgment = judgment_from_payload({
            "risk_level": "Moderate",
            "counselling_needed": "recommended",
            "immediate_intervention": True,
        })

        assert judgment.risk_level == RiskLevel.MEDIUM
        assert judgment.counselling_needed == CounsellingRecommendation.ADVISED
        assert judgment.immediate_intervention is True

    def test_defaults(self) -> None:
        judgment = judgment_from_payload({"risk_level": "low"})

        assert judgment.counselling_needed == CounsellingRecommendation.NONE
        assert judgment.immediate_intervention is False
        assert judgment.confidence_level is None
        assert judgment.concerning_phrases == ()
        assert judgment.assessment_summary == ""

    @pytest.mark.parametrize(
        "flag, expected",
        [(1, True), (2, True), (-1, True), (0, False), (0.0, False), ("1", True), (None, False)],
    )
    def test_numeric_intervention_flag(self, flag, expected: bool) -> None:
        judgment = judgment_from_payload({"risk_level": "high", "immediate_intervention": flag})
        assert judgment.immediate_intervention is expected

    def test_single_phrase_string(self) -> None:
        judgment = judgment_from_payload({"risk_level": "high", "concerning_phrases": "goodbye"})
        assert judgment.concerning_phrases == ("goodbye",)

    def test_to_dict_uses_oracle_field_names(self) -> None:
        judgment = parse_oracle_response(FULL_RESPONSE, provider="openai")
        data = judgment.to_dict()

        assert data["risk_level"] == "severe"
        assert data["counseling_needed"] == "yes"
        assert data["immediate_intervention"] == "yes"
        assert data["confidence_level"] == "high"
        assert data["provider"] == "openai"
