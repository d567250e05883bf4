"""
Oracle Response Parser

Turns free-text oracle output into an OracleJudgment.

Strategy chain, first success wins:
1. parse_direct_json    - the whole response is a JSON object
2. parse_embedded_json  - first balanced {...} that parses as JSON
3. parse_regex_fields   - best-effort key/value scraping
4. give up              - no judgment

None of the strategies raise. A response without a recognizable
risk level yields no judgment.
"""

import json
import re
from typing import Any, Callable, Optional

from saathi.domain.enums.risk_level import (
    ConfidenceLevel,
    CounsellingRecommendation,
    RiskLevel,
)
from saathi.domain.models.classification import OracleJudgment

ParseStrategy = Callable[[str], Optional[dict[str, Any]]]

_TRUE_FLAGS = frozenset({"yes", "true", "y", "1"})

_FIELD_PATTERNS: dict[str, re.Pattern] = {
    "risk_level": re.compile(
        r"risk[_\s]*level[\"'*]*\s*[:=\-]?\s*[\"'*]*(\w+)", re.IGNORECASE
    ),
    "counseling_needed": re.compile(
        r"counsell?ing[_\s]*needed[\"'*]*\s*[:=\-]?\s*[\"'*]*(\w+)", re.IGNORECASE
    ),
    "immediate_intervention": re.compile(
        r"immediate[_\s]*intervention[\"'*]*\s*[:=\-]?\s*[\"'*]*(\w+)", re.IGNORECASE
    ),
    "confidence_level": re.compile(
        r"confidence[_\s]*level[\"'*]*\s*[:=\-]?\s*[\"'*]*(\w+)", re.IGNORECASE
    ),
    "assessment_summary": re.compile(
        r"assessment[_\s]*summary[\"'*]*\s*[:=\-]?\s*[\"'*]*([^\"\n]+)", re.IGNORECASE
    ),
}

SUMMARY_FALLBACK_CHARS = 200


def parse_direct_json(text: str) -> Optional[dict[str, Any]]:
    """Parse the whole response as a JSON object."""
    try:
        payload = json.loads(text.strip())
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    return payload if isinstance(payload, dict) else None


def parse_embedded_json(text: str) -> Optional[dict[str, Any]]:
    """
    Find the first balanced {...} substring that parses as a JSON object.

    Handles prose or markdown fences around the object. Braces inside
    JSON strings are ignored while balancing.
    """
    start = text.find("{")
    while start != -1:
        end = _find_balanced_end(text, start)
        if end is None:
            return None
        try:
            payload = json.loads(text[start:end + 1])
        except (json.JSONDecodeError, ValueError):
            payload = None
        if isinstance(payload, dict):
            return payload
        start = text.find("{", start + 1)
    return None


def parse_regex_fields(text: str) -> Optional[dict[str, Any]]:
    """Scrape known fields from unstructured text."""
    payload: dict[str, Any] = {}
    for key, pattern in _FIELD_PATTERNS.items():
        match = pattern.search(text)
        if match:
            payload[key] = match.group(1).strip()

    if not payload:
        return None

    if "assessment_summary" not in payload:
        summary = text.strip()
        if len(summary) > SUMMARY_FALLBACK_CHARS:
            summary = summary[:SUMMARY_FALLBACK_CHARS] + "..."
        payload["assessment_summary"] = summary
    payload["parse_strategy"] = "regex"
    return payload


PARSE_STRATEGIES: tuple[ParseStrategy, ...] = (
    parse_direct_json,
    parse_embedded_json,
    parse_regex_fields,
)


def parse_oracle_response(text: Optional[str], provider: str = "") -> Optional[OracleJudgment]:
    """
    Run the strategy chain over an oracle response.

    Args:
        text: Raw response text
        provider: Oracle backend name, recorded on the judgment

    Returns:
        OracleJudgment, or None when no strategy yields a risk level
    """
    if not text or not text.strip():
        return None

    for strategy in PARSE_STRATEGIES:
        payload = strategy(text)
        if payload is None:
            continue
        judgment = judgment_from_payload(payload, provider=provider)
        if judgment is not None:
            return judgment
    return None


def judgment_from_payload(payload: dict[str, Any], provider: str = "") -> Optional[OracleJudgment]:
    """Normalize a parsed payload into an OracleJudgment."""
    risk_level = RiskLevel.from_label(payload.get("risk_level"))
    if risk_level is None:
        return None

    counselling = CounsellingRecommendation.from_label(
        payload.get("counseling_needed", payload.get("counselling_needed"))
    )

    phrases = _as_phrase_list(payload.get("concerning_phrases"))

    return OracleJudgment(
        risk_level=risk_level,
        counselling_needed=counselling or CounsellingRecommendation.NONE,
        immediate_intervention=_parse_flag(payload.get("immediate_intervention")),
        assessment_summary=_optional_str(payload.get("assessment_summary")) or "",
        confidence_level=ConfidenceLevel.from_label(payload.get("confidence_level")),
        concerning_phrases=tuple(str(p) for p in phrases if isinstance(p, (str, int, float))),
        language_used=_optional_str(payload.get("language_used")),
        emotional_state=_optional_str(payload.get("emotional_state")),
        support_recommendations=_optional_str(payload.get("support_recommendations")),
        provider=provider,
        raw=dict(payload),
    )


def _find_balanced_end(text: str, start: int) -> Optional[int]:
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def _parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_FLAGS
    return False


def _as_phrase_list(value: Any) -> list[Any]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
