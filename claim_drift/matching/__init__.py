"""
Matching Layer

Resolves evidence paths and evaluates matchers against the scanned tree.

Components:
- paths: ledger path → concrete path
- source_cache: per-run text/AST memo
- js_regex: JS-style regex literals
- ast_queries: export / call / route-handler queries on syntax trees
- matcher: closed matcher dispatch
"""

from claim_drift.matching.matcher import FILE_NOT_FOUND, EvidenceMatcher, default_marker
from claim_drift.matching.paths import resolve_path
from claim_drift.matching.source_cache import SourceCache

__all__ = [
    "FILE_NOT_FOUND",
    "EvidenceMatcher",
    "SourceCache",
    "default_marker",
    "resolve_path",
]
