"""
claim-drift CLI

Commands:
- scan: evaluate the claim ledger against the repository and write reports
- reconcile: rewrite evidence paths after a file move (candidate ledger)

Exit codes:
    0  scan finished, nothing blocking
    2  blocking claims under enforce mode
    3  ledger/overrides schema or configuration problem
    4  any other runtime failure
"""

import json
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from claim_drift.config import OverridePolicy, get_settings
from claim_drift.engine import DriftScanner
from claim_drift.errors import ClaimDriftError, ConfigurationError, SchemaError
from claim_drift.ledger import read_document, reconcile_paths
from claim_drift.logging import get_logger, setup_logger
from claim_drift.report import write_reports
from claim_drift.types import DriftReport, DriftState, ReportFormat

EXIT_BLOCKING = 2
EXIT_SCHEMA = 3
EXIT_RUNTIME = 4

app = typer.Typer(name="claim-drift", help="Documentation claim drift scanner", add_completion=False)
console = Console(soft_wrap=True)
logger = get_logger("claim_drift.cli")

_STATE_STYLES = {
    DriftState.OK: "green",
    DriftState.PARTIAL: "yellow",
    DriftState.MISSING: "red",
    DriftState.CONTRADICTED: "bold red",
}


def _print_summary(report: DriftReport) -> None:
    table = Table(title="Claim Drift")
    table.add_column("Claim")
    table.add_column("Severity")
    table.add_column("State")
    table.add_column("Blocking", justify="right")
    table.add_column("Override", justify="right")
    table.add_column("Owner")

    for row in report.results:
        style = _STATE_STYLES[row.state]
        table.add_row(
            escape(row.claim_id),
            str(row.severity),
            f"[{style}]{row.state}[/{style}]",
            "yes" if row.blocking else "",
            "yes" if row.override_applied else "",
            escape(row.owner),
        )
    console.print(table)

    summary = report.summary
    states = ", ".join(f"{state}={summary.by_state.get(state, 0)}" for state in DriftState)
    console.print(
        f"claims={summary.total_claims} blocking={summary.blocking_claims} "
        f"overrides={summary.overrides_applied} ({states}) in {report.duration_ms}ms"
    )
    if not report.performance_within_budget:
        console.print(f"[yellow]Scan exceeded performance budget of {report.performance_budget_ms}ms[/yellow]")


@app.command()
def scan(
    ledger: str | None = typer.Option(None, "--ledger", help="Claim ledger path (JSON or YAML)"),
    overrides: str | None = typer.Option(None, "--overrides", help="Override ledger path"),
    root: Path = typer.Option(Path("."), "--root", help="Repository root"),
    output_dir: str | None = typer.Option(None, "--output-dir", "-o", help="Report output directory"),
    mode: str | None = typer.Option(None, "--mode", help="report/enforce"),
    strict: str | None = typer.Option(None, "--strict", help="Blocking severity threshold"),
    formats: list[str] | None = typer.Option(None, "--format", "-f", help="Report format: json/md (repeatable)"),
    max_ttl_days: float | None = typer.Option(None, "--max-ttl-days", help="Maximum override lifetime in days"),
    require_approver: bool = typer.Option(False, "--require-approver", help="Only accept allow-listed approvers"),
    allowed_approvers: list[str] | None = typer.Option(
        None, "--allowed-approver", help="Allowed override approver (repeatable)"
    ),
    parallel_reads: int | None = typer.Option(None, "--parallel-reads", help="Prefetch workers (0 = sequential)"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level"),
    structured_logs: bool = typer.Option(False, "--structured-logs", help="Emit JSON log lines"),
):
    """
    Scan documentation claims for drift against the code.

    Relative ledger, overrides and output paths are resolved against --root.

    Examples:
        claim-drift scan
        claim-drift scan --mode enforce --strict high
        claim-drift scan --root ../app --format md
    """
    settings = get_settings()
    setup_logger(level=log_level or settings.log_level, structured=structured_logs or settings.log_structured)

    paths = settings.scan
    repo_root = root.resolve()
    ledger_path = repo_root / (ledger or paths.ledger_path)
    overrides_path = repo_root / (overrides or paths.overrides_path)
    out_dir = repo_root / (output_dir or paths.output_dir)

    try:
        policy = OverridePolicy(
            max_ttl_days=settings.override_max_ttl_days if max_ttl_days is None else max_ttl_days,
            approvers_required=require_approver or settings.override_approvers_required,
            allowed_approvers=allowed_approvers or settings.override_allowed_approvers,
        )
        report_formats = [ReportFormat(f) for f in formats] if formats else list(settings.formats)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_SCHEMA)

    overrides_kw = {"policy": policy}
    if mode is not None:
        overrides_kw["mode"] = mode
    if strict is not None:
        overrides_kw["strict"] = strict
    if parallel_reads is not None:
        overrides_kw["parallel_reads"] = parallel_reads

    try:
        scanner = DriftScanner.from_settings(settings, repo_root, **overrides_kw)
        report = scanner.scan(ledger_path, overrides_path)
        written = write_reports(report, out_dir, report_formats)
    except (SchemaError, ConfigurationError) as e:
        console.print(f"[red]Schema error: {escape(str(e))}[/red]")
        for err in getattr(e, "errors", [])[:20]:
            loc = ".".join(str(p) for p in err.get("loc", ()))
            console.print(f"  - {escape(loc)}: {escape(str(err.get('msg')))}")
        raise typer.Exit(EXIT_SCHEMA)
    except ClaimDriftError as e:
        console.print(f"[red]Runtime error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_RUNTIME)
    except Exception as e:
        logger.exception("Claim drift scan failed")
        console.print(f"[red]Runtime error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_RUNTIME)

    _print_summary(report)
    for path in written:
        console.print(f"Report: {path}")

    if report.blocked:
        console.print(f"[red]Blocking claim drift detected ({report.summary.blocking_claims} claims)[/red]")
        raise typer.Exit(EXIT_BLOCKING)
    console.print("[green]No blocking claim drift[/green]")


@app.command()
def reconcile(
    ledger: Path = typer.Option(Path("docs/governance/claim-ledger.json"), "--ledger", help="Claim ledger path"),
    old: str = typer.Option(..., "--old", help="Previous evidence path"),
    new: str = typer.Option(..., "--new", help="New evidence path"),
    output: Path | None = typer.Option(None, "--output", help="Candidate ledger path (default: <ledger>.candidate)"),
):
    """
    Write a candidate ledger with evidence paths moved from --old to --new.

    The input ledger is left untouched.

    Examples:
        claim-drift reconcile --old src/auth.ts --new src/auth/index.ts
    """
    setup_logger(level=get_settings().log_level)
    target = output or ledger.with_name(f"{ledger.stem}.candidate{ledger.suffix}")

    try:
        result = reconcile_paths(read_document(ledger), old, new)
    except SchemaError as e:
        console.print(f"[red]Schema error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_SCHEMA)
    except ValueError as e:
        console.print(f"[red]Invalid arguments: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_SCHEMA)

    if target.suffix.lower() in (".yaml", ".yml"):
        text = yaml.safe_dump(result.ledger, sort_keys=False)
    else:
        text = json.dumps(result.ledger, indent=2) + "\n"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")

    console.print(f"Replaced {result.replacements} evidence paths in {len(result.touched_claims)} claims")
    for claim_id in result.touched_claims:
        console.print(f"  - {claim_id}")
    console.print(f"Candidate ledger: {target}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
