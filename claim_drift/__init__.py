"""
claim-drift - Documentation claim drift scanner.

Checks that product claims recorded in a claim ledger are still backed by
the code (exports, calls, route handlers, workflow steps, regexes, marker
tags) and gates CI on unresolved drift.

Example:
    from pathlib import Path
    from claim_drift import DriftScanner, ScanOptions, Mode

    scanner = DriftScanner(ScanOptions(repo_root=Path("."), mode=Mode.ENFORCE))
    report = scanner.scan("docs/governance/claim-ledger.json")
"""

from claim_drift.engine import DriftScanner, ScanOptions, classify_claim, is_blocking
from claim_drift.errors import (
    ClaimDriftError,
    ConfigurationError,
    ParseFailure,
    SchemaError,
    UnsupportedMatcherError,
)
from claim_drift.ledger import ClaimLedger, load_ledger, load_overrides, validate_ledger
from claim_drift.report import render_json, render_markdown, write_reports
from claim_drift.types import DriftReport, DriftState, MatcherType, Mode, Severity

__version__ = "0.1.0"

__all__ = [
    # Engine
    "DriftScanner",
    "ScanOptions",
    "classify_claim",
    "is_blocking",
    # Ledger
    "ClaimLedger",
    "load_ledger",
    "load_overrides",
    "validate_ledger",
    # Report
    "render_json",
    "render_markdown",
    "write_reports",
    # Types
    "DriftReport",
    "DriftState",
    "MatcherType",
    "Mode",
    "Severity",
    # Errors
    "ClaimDriftError",
    "ConfigurationError",
    "ParseFailure",
    "SchemaError",
    "UnsupportedMatcherError",
]
