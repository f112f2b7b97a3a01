"""Drift Results - Domain Layer.

Derived, read-only outputs of a scan. Built fresh on every run.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

from claim_drift.types.enums import DeclaredStatus, DriftState, MatcherType, Mode, Severity


@dataclass(frozen=True)
class MatcherResult:
    """Outcome of one matcher against one file."""

    matched: bool
    details: str


@dataclass(frozen=True)
class EvidenceResult:
    """Per-evidence outcome: match, contradictions and diagnostic."""

    path: str
    matcher_type: MatcherType
    matcher: str
    required: bool
    matched: bool
    contradiction_matched: bool
    contradiction_reasons: list[str]
    details: str


@dataclass(frozen=True)
class ClaimResult:
    """Drift verdict for a single claim.

    Contains:
        - Drift state derived from evidence
        - Gate verdict (blocking) after override suppression
        - The evidence trail that produced it
    """

    claim_id: str
    severity: Severity
    owner: str
    state: DriftState
    declared_status: DeclaredStatus
    blocking: bool
    override_applied: bool
    override_reason: str | None = None
    evidence: list[EvidenceResult] = field(default_factory=list)


@dataclass(frozen=True)
class DriftSummary:
    """Run-level counts."""

    total_claims: int
    by_state: dict[DriftState, int]
    blocking_claims: int
    overrides_applied: int


@dataclass(frozen=True)
class DriftReport:
    """Complete result of one scan."""

    generated_at: str
    mode: Mode
    strict: Severity
    ledger_path: str
    duration_ms: int
    performance_budget_ms: int
    performance_within_budget: bool
    summary: DriftSummary
    results: list[ClaimResult] = field(default_factory=list)

    @property
    def blocked(self) -> bool:
        """True when at least one claim blocks the run."""
        return self.summary.blocking_claims > 0

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dictionary (enum members become their values)."""
        payload = asdict(self)
        payload["summary"]["by_state"] = {str(state): count for state, count in self.summary.by_state.items()}
        return _plain(payload)


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, (Severity, DriftState, DeclaredStatus, MatcherType, Mode)):
        return value.value
    return value
