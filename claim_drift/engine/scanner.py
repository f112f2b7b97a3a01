"""Drift Scanner.

Runs one scan end to end:

    1. load + validate the ledger (fails fast, before any file work)
    2. load overrides and keep only those passing governance
    3. classify every claim against the source tree
    4. gate each claim and aggregate the report

Results keep the ledger's claim order. Each scan gets a fresh SourceCache.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path

from claim_drift.config import OverridePolicy, Settings
from claim_drift.engine.classifier import classify_claim
from claim_drift.engine.gate import is_blocking, summarize
from claim_drift.errors import ConfigurationError
from claim_drift.governance import OverrideGovernance, describe_override
from claim_drift.ledger import ClaimLedger, OverrideRecord, OverridesFile, load_ledger, load_overrides
from claim_drift.logging import LogContext, log_duration
from claim_drift.matching import EvidenceMatcher, SourceCache, resolve_path
from claim_drift.types.enums import Mode, Severity
from claim_drift.types.results import ClaimResult, DriftReport

logger = logging.getLogger(__name__)

DEFAULT_PERFORMANCE_BUDGET_MS = 30_000


@dataclass(frozen=True)
class ScanOptions:
    """Run parameters of a scan."""

    repo_root: Path
    mode: Mode = Mode.REPORT
    strict: Severity = Severity.CRITICAL
    policy: OverridePolicy = field(default_factory=OverridePolicy)
    repo_marker: str | None = None
    performance_budget_ms: int = DEFAULT_PERFORMANCE_BUDGET_MS
    parallel_reads: int = 0

    def __post_init__(self):
        try:
            object.__setattr__(self, "mode", Mode(self.mode))
            object.__setattr__(self, "strict", Severity(self.strict))
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        object.__setattr__(self, "repo_root", Path(self.repo_root))


class DriftScanner:
    """Evaluates a claim ledger against a source tree.

    Example:
        scanner = DriftScanner(ScanOptions(repo_root=Path("."), mode=Mode.ENFORCE))
        report = scanner.scan("docs/governance/claim-ledger.json", "docs/governance/claim-overrides.json")
        if report.blocked:
            ...
    """

    def __init__(self, options: ScanOptions, clock: Callable[[], datetime] | None = None):
        self.options = options
        self.governance = OverrideGovernance(options.policy)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_settings(cls, settings: Settings, repo_root: str | Path, **overrides) -> "DriftScanner":
        """Build a scanner from Settings; keyword arguments replace ScanOptions fields."""
        options = ScanOptions(
            repo_root=Path(repo_root),
            mode=settings.mode,
            strict=settings.strict,
            policy=settings.override_policy,
            repo_marker=settings.repo_marker,
            performance_budget_ms=settings.performance_budget_ms,
            parallel_reads=settings.parallel_reads,
        )
        if overrides:
            options = replace(options, **overrides)
        return cls(options)

    @log_duration(logger, "Claim drift scan")
    def scan(self, ledger_path: str | Path, overrides_path: str | Path | None = None) -> DriftReport:
        """Load inputs from disk and evaluate them.

        Raises:
            ConfigurationError: If the ledger file does not exist
            SchemaError: If the ledger or overrides file is malformed
            ParseFailure: If an evidence file exists but cannot be read
        """
        started = time.perf_counter()
        ledger = load_ledger(ledger_path)
        overrides = load_overrides(overrides_path) if overrides_path else OverridesFile()
        return self.evaluate(ledger, overrides, ledger_path=str(ledger_path), started=started)

    def evaluate(
        self,
        ledger: ClaimLedger,
        overrides: OverridesFile | list[OverrideRecord] | None = None,
        ledger_path: str = "",
        started: float | None = None,
    ) -> DriftReport:
        """Evaluate an already-validated ledger."""
        started = time.perf_counter() if started is None else started
        opts = self.options
        now = self._clock()

        records = overrides.overrides if isinstance(overrides, OverridesFile) else list(overrides or [])
        active = self.governance.active_overrides(records, now)

        cache = SourceCache()
        matcher = EvidenceMatcher(cache)
        if opts.parallel_reads > 1:
            self._prefetch(ledger, cache)

        results: list[ClaimResult] = []
        with LogContext(ledger=ledger_path, mode=str(opts.mode), strict=str(opts.strict)):
            logger.info(f"Scanning {len(ledger.claims)} claims (mode={opts.mode}, strict={opts.strict})")

            for claim in ledger.claims:
                evaluation = classify_claim(claim, matcher, opts.repo_root, opts.repo_marker)
                override = self.governance.find_active_suppression(claim.claim_id, active)
                blocking = is_blocking(claim.severity, evaluation.state, opts.mode, opts.strict, override)

                results.append(
                    ClaimResult(
                        claim_id=claim.claim_id,
                        severity=claim.severity,
                        owner=claim.owner or "unassigned",
                        state=evaluation.state,
                        declared_status=claim.declared_status,
                        blocking=blocking,
                        override_applied=override is not None,
                        override_reason=describe_override(override) if override is not None else None,
                        evidence=evaluation.evidence,
                    )
                )

            summary = summarize(results)
            duration_ms = int((time.perf_counter() - started) * 1000)
            logger.info(
                f"Claim drift scan complete. claims={summary.total_claims} "
                f"blocking={summary.blocking_claims} mode={opts.mode}"
            )

        return DriftReport(
            generated_at=now.isoformat().replace("+00:00", "Z"),
            mode=opts.mode,
            strict=opts.strict,
            ledger_path=ledger_path,
            duration_ms=duration_ms,
            performance_budget_ms=opts.performance_budget_ms,
            performance_within_budget=duration_ms <= opts.performance_budget_ms,
            summary=summary,
            results=results,
        )

    def _prefetch(self, ledger: ClaimLedger, cache: SourceCache) -> None:
        opts = self.options
        ast_paths: set[str] = set()
        text_paths: set[str] = set()
        for claim in ledger.claims:
            for evidence in claim.evidence:
                resolved = resolve_path(evidence.path, opts.repo_root, opts.repo_marker)
                matcher_types = [evidence.matcher_type, *(rule.matcher_type for rule in evidence.contradiction)]
                if any(t.needs_syntax_tree for t in matcher_types):
                    ast_paths.add(resolved)
                else:
                    text_paths.add(resolved)

        cache.warm(ast_paths, opts.parallel_reads, parse=True)
        cache.warm(text_paths - ast_paths, opts.parallel_reads, parse=False)
