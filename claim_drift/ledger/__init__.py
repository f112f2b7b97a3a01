"""
Ledger Layer

Claim ledger and override ledger models, loading, and validation.

Components:
- spec: pydantic models for the ledger documents
- loader: file loading + schema validation (SchemaError on violations)
- reconcile: evidence path rewriting after file moves
"""

from claim_drift.ledger.loader import load_ledger, load_overrides, read_document, validate_ledger
from claim_drift.ledger.reconcile import ReconcileResult, reconcile_paths
from claim_drift.ledger.spec import (
    ClaimLedger,
    ClaimRecord,
    ContradictionSpec,
    EvidenceSpec,
    OverrideRecord,
    OverridesFile,
)

__all__ = [
    "ClaimLedger",
    "ClaimRecord",
    "ContradictionSpec",
    "EvidenceSpec",
    "OverrideRecord",
    "OverridesFile",
    "load_ledger",
    "load_overrides",
    "read_document",
    "validate_ledger",
    "ReconcileResult",
    "reconcile_paths",
]
