"""Markdown rendering of a DriftReport."""

from claim_drift.types.enums import DriftState
from claim_drift.types.results import DriftReport


def _flag(value: bool) -> str:
    return "true" if value else "false"


def render_markdown(report: DriftReport) -> str:
    """Human-readable report: run metadata, summary, claim table, evidence checklist."""
    by_state = report.summary.by_state
    lines: list[str] = [
        "# Claim Drift Report",
        "",
        f"- Generated at: {report.generated_at}",
        f"- Mode: {report.mode}",
        f"- Strict level: {report.strict}",
        f"- Duration (ms): {report.duration_ms}",
        f"- Performance budget (ms): {report.performance_budget_ms}",
        f"- Within performance budget: {_flag(report.performance_within_budget)}",
        "",
        "## Summary",
        "",
        f"- Total claims: {report.summary.total_claims}",
        f"- Blocking claims: {report.summary.blocking_claims}",
        f"- Overrides applied: {report.summary.overrides_applied}",
        "- States: " + ", ".join(f"{state}={by_state.get(state, 0)}" for state in DriftState),
        "",
        "## Claim Results",
        "",
        "| Claim | Severity | State | Blocking | Override | Owner |",
        "|---|---|---|---:|---:|---|",
    ]

    for row in report.results:
        lines.append(
            f"| {row.claim_id} | {row.severity} | {row.state} | {_flag(row.blocking)} "
            f"| {_flag(row.override_applied)} | {row.owner} |"
        )

    lines += ["", "## Evidence Details", ""]
    for row in report.results:
        lines.append(f"### {row.claim_id}")
        lines.append(f"- State: {row.state}")
        if row.override_applied:
            lines.append(f"- Override: {row.override_reason or 'applied'}")
        for ev in row.evidence:
            check = "x" if ev.matched else " "
            kind = "required" if ev.required else "optional"
            lines.append(f"- [{check}] {kind} {ev.matcher_type} :: {ev.matcher} ({ev.path})")
            if ev.contradiction_matched:
                lines.append(f"  - contradiction: {'; '.join(ev.contradiction_reasons)}")
        lines.append("")

    return "\n".join(lines)
