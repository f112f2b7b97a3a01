"""
Drift Engine

Classifies claims, applies the gate, and aggregates the run report.
"""

from claim_drift.engine.classifier import ClaimEvaluation, classify_claim, classify_state
from claim_drift.engine.gate import is_blocking, severity_at_or_above, severity_rank, summarize
from claim_drift.engine.scanner import DriftScanner, ScanOptions

__all__ = [
    "ClaimEvaluation",
    "classify_claim",
    "classify_state",
    "is_blocking",
    "severity_at_or_above",
    "severity_rank",
    "summarize",
    "DriftScanner",
    "ScanOptions",
]
