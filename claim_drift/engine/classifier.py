"""Drift Classifier.

Turns per-evidence match outcomes into one drift state per claim.

Priority:
    1. contradicted: any contradiction matcher matched (regardless of counts)
    2. missing:      required evidence exists and none of it matched
    3. partial:      some but not all required evidence matched
    4. ok:           everything required matched, or nothing is required

A claim whose evidence is all optional is advisory only: it is `ok` unless
contradicted.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from claim_drift.ledger.spec import ClaimRecord
from claim_drift.matching import EvidenceMatcher, resolve_path
from claim_drift.types.enums import DriftState
from claim_drift.types.results import EvidenceResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaimEvaluation:
    """Evidence outcome of one claim, before gating."""

    claim_id: str
    state: DriftState
    required_total: int
    required_matched: int
    evidence: list[EvidenceResult] = field(default_factory=list)
    contradiction_reasons: list[str] = field(default_factory=list)


def classify_state(required_total: int, required_matched: int, contradicted: bool) -> DriftState:
    """Drift state from evidence counts."""
    if contradicted:
        return DriftState.CONTRADICTED
    if required_total > 0 and required_matched == 0:
        return DriftState.MISSING
    if required_matched < required_total:
        return DriftState.PARTIAL
    return DriftState.OK


def classify_claim(
    claim: ClaimRecord,
    matcher: EvidenceMatcher,
    repo_root: str | Path,
    repo_marker: str | None = None,
) -> ClaimEvaluation:
    """Evaluate every evidence spec (and its contradictions) of a claim.

    Contradictions are evaluated against the same resolved file as the
    evidence they are attached to.

    Raises:
        ParseFailure: If an evidence file exists but cannot be read
    """
    required_total = 0
    required_matched = 0
    contradicted = False
    all_reasons: list[str] = []
    evidence_results: list[EvidenceResult] = []

    for evidence in claim.evidence:
        if evidence.required:
            required_total += 1

        resolved = resolve_path(evidence.path, repo_root, repo_marker)
        match = matcher.match(claim.claim_id, resolved, evidence.matcher_type, evidence.matcher)
        if evidence.required and match.matched:
            required_matched += 1

        reasons: list[str] = []
        for rule in evidence.contradiction:
            if matcher.match(claim.claim_id, resolved, rule.matcher_type, rule.matcher).matched:
                reasons.append(rule.reason)

        if reasons:
            contradicted = True
            all_reasons.extend(reasons)

        evidence_results.append(
            EvidenceResult(
                path=resolved,
                matcher_type=evidence.matcher_type,
                matcher=evidence.matcher,
                required=evidence.required,
                matched=match.matched,
                contradiction_matched=bool(reasons),
                contradiction_reasons=reasons,
                details=match.details,
            )
        )

    state = classify_state(required_total, required_matched, contradicted)
    logger.debug(f"{claim.claim_id}: {state} ({required_matched}/{required_total} required matched)")

    return ClaimEvaluation(
        claim_id=claim.claim_id,
        state=state,
        required_total=required_total,
        required_matched=required_matched,
        evidence=evidence_results,
        contradiction_reasons=all_reasons,
    )
