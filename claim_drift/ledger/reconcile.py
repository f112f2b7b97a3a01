"""Ledger path reconciliation.

When a file moves, every evidence spec pointing at it goes stale. This
produces a candidate ledger with the paths rewritten; the input ledger is
never modified so the candidate can be reviewed in a pull request.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any

from claim_drift.errors import SchemaError

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """Candidate ledger plus what changed."""

    ledger: dict[str, Any]
    replacements: int = 0
    touched_claims: list[str] = field(default_factory=list)


def normalize_path(raw: str) -> str:
    return raw.replace("\\", "/")


def reconcile_paths(ledger: dict[str, Any], old_path: str, new_path: str) -> ReconcileResult:
    """Rewrite evidence paths that point at `old_path`.

    An evidence path matches when, slash-normalized, it equals `old_path` or
    ends with `/old_path`. Matching paths have the first `old_path` replaced by
    `new_path`; if the raw text did not contain `old_path` verbatim (mixed
    separators), the path is set to `new_path`.

    Args:
        ledger: Raw ledger document (not modified)
        old_path: Previous location
        new_path: New location

    Returns:
        ReconcileResult with a deep-copied, rewritten ledger

    Raises:
        SchemaError: If the document has no claims list
    """
    if not old_path or not new_path:
        raise ValueError("old_path and new_path are required")

    candidate = copy.deepcopy(ledger)
    claims = candidate.get("claims") if isinstance(candidate, dict) else None
    if not isinstance(claims, list):
        raise SchemaError("ledger.claims must be an array")

    old_norm = normalize_path(old_path)
    result = ReconcileResult(ledger=candidate)

    for claim in claims:
        for evidence in claim.get("evidence") or []:
            raw = evidence.get("path")
            if not isinstance(raw, str):
                continue

            current = normalize_path(raw)
            if current != old_norm and not current.endswith(f"/{old_norm}"):
                continue

            rewritten = raw.replace(old_path, new_path, 1)
            if normalize_path(rewritten) == current:
                rewritten = new_path
            evidence["path"] = rewritten

            result.replacements += 1
            claim_id = claim.get("claim_id")
            if claim_id not in result.touched_claims:
                result.touched_claims.append(claim_id)

    logger.info(f"Reconciled {result.replacements} evidence paths across {len(result.touched_claims)} claims")
    return result
