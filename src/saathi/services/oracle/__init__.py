"""Oracle services package - optional LLM second opinion."""

from saathi.services.oracle.response_parser import (
    parse_direct_json,
    parse_embedded_json,
    parse_oracle_response,
    parse_regex_fields,
)
from saathi.services.oracle.oracle_reconciler import (
    OracleConsultation,
    OracleOutcome,
    OracleReconciler,
    ReconciledAssessment,
    reconcile,
)

__all__ = [
    "parse_direct_json",
    "parse_embedded_json",
    "parse_regex_fields",
    "parse_oracle_response",
    "OracleConsultation",
    "OracleOutcome",
    "OracleReconciler",
    "ReconciledAssessment",
    "reconcile",
]
