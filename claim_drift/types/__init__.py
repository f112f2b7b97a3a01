"""claim-drift types: enums and derived result models."""

from claim_drift.types.enums import (
    SEVERITY_RANK,
    DeclaredStatus,
    DriftState,
    MatcherType,
    Mode,
    ReportFormat,
    Severity,
)
from claim_drift.types.results import (
    ClaimResult,
    DriftReport,
    DriftSummary,
    EvidenceResult,
    MatcherResult,
)

__all__ = [
    "SEVERITY_RANK",
    "DeclaredStatus",
    "DriftState",
    "MatcherType",
    "Mode",
    "ReportFormat",
    "Severity",
    "ClaimResult",
    "DriftReport",
    "DriftSummary",
    "EvidenceResult",
    "MatcherResult",
]
