"""Gate Decision.

A claim blocks the pipeline only when all of these hold:
    - the run is in enforce mode
    - the claim is missing or contradicted
    - its severity is at or above the strict floor
    - no valid override suppresses it
"""

from collections.abc import Iterable

from claim_drift.ledger.spec import OverrideRecord
from claim_drift.types.enums import DriftState, Mode, Severity
from claim_drift.types.results import ClaimResult, DriftSummary


def severity_rank(severity: Severity | str) -> int:
    return Severity(severity).rank


def severity_at_or_above(severity: Severity | str, strict: Severity | str) -> bool:
    return severity_rank(severity) >= severity_rank(strict)


def is_blocking(
    severity: Severity | str,
    state: DriftState | str,
    mode: Mode | str,
    strict: Severity | str,
    override: OverrideRecord | None,
) -> bool:
    """Blocking verdict for one claim."""
    return (
        Mode(mode) == Mode.ENFORCE
        and DriftState(state).is_unresolved
        and severity_at_or_above(severity, strict)
        and override is None
    )


def summarize(results: Iterable[ClaimResult]) -> DriftSummary:
    """Run-level counts; the run blocks when blocking_claims > 0."""
    by_state = {state: 0 for state in DriftState}
    total = blocking = overrides = 0
    for row in results:
        total += 1
        by_state[row.state] += 1
        if row.blocking:
            blocking += 1
        if row.override_applied:
            overrides += 1
    return DriftSummary(
        total_claims=total,
        by_state=by_state,
        blocking_claims=blocking,
        overrides_applied=overrides,
    )
