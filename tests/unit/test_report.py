"""JSON and Markdown report rendering."""

import json

import pytest

from claim_drift.engine import summarize
from claim_drift.report import render_json, render_markdown, write_reports
from claim_drift.types import ClaimResult, DriftReport, DriftState, EvidenceResult, MatcherType, Mode, Severity


@pytest.fixture
def report() -> DriftReport:
    results = [
        ClaimResult(
            claim_id="auth-001",
            severity=Severity.CRITICAL,
            owner="@security",
            state=DriftState.CONTRADICTED,
            declared_status="implemented",
            blocking=True,
            override_applied=False,
            evidence=[
                EvidenceResult(
                    path="/repo/src/auth.ts",
                    matcher_type=MatcherType.AST_EXPORT,
                    matcher="login",
                    required=True,
                    matched=True,
                    contradiction_matched=True,
                    contradiction_reasons=["login is a stub", "todo marker"],
                    details="ast_export:login",
                )
            ],
        ),
        ClaimResult(
            claim_id="docs-002",
            severity=Severity.LOW,
            owner="unassigned",
            state=DriftState.MISSING,
            declared_status="partial",
            blocking=False,
            override_applied=True,
            override_reason="OPS-1 by @lead until 2026-04-01: migrating",
            evidence=[
                EvidenceResult(
                    path="/repo/README.md",
                    matcher_type=MatcherType.MARKER_TAG,
                    matcher="",
                    required=False,
                    matched=False,
                    contradiction_matched=False,
                    contradiction_reasons=[],
                    details="file_not_found",
                )
            ],
        ),
    ]
    return DriftReport(
        generated_at="2026-03-01T12:00:00Z",
        mode=Mode.ENFORCE,
        strict=Severity.CRITICAL,
        ledger_path="docs/governance/claim-ledger.json",
        duration_ms=42,
        performance_budget_ms=30000,
        performance_within_budget=True,
        summary=summarize(results),
        results=results,
    )


class TestRenderJson:
    def test_plain_values(self, report):
        payload = json.loads(render_json(report))
        assert payload["mode"] == "enforce"
        assert payload["summary"]["by_state"] == {"ok": 0, "partial": 0, "missing": 1, "contradicted": 1}
        assert payload["summary"]["blocking_claims"] == 1
        first = payload["results"][0]
        assert first["state"] == "contradicted"
        assert first["evidence"][0]["matcher_type"] == "ast_export"
        assert first["evidence"][0]["contradiction_reasons"] == ["login is a stub", "todo marker"]

    def test_two_space_indent(self, report):
        assert render_json(report).startswith('{\n  "generated_at"')


class TestRenderMarkdown:
    def test_sections(self, report):
        text = render_markdown(report)
        assert text.startswith("# Claim Drift Report\n")
        for heading in ("## Summary", "## Claim Results", "## Evidence Details"):
            assert heading in text
        assert "- Mode: enforce" in text
        assert "- Within performance budget: true" in text
        assert "- States: ok=0, partial=0, missing=1, contradicted=1" in text

    def test_claim_table(self, report):
        text = render_markdown(report)
        assert "| Claim | Severity | State | Blocking | Override | Owner |" in text
        assert "|---|---|---|---:|---:|---|" in text
        assert "| auth-001 | critical | contradicted | true | false | @security |" in text
        assert "| docs-002 | low | missing | false | true | unassigned |" in text

    def test_evidence_checklist(self, report):
        text = render_markdown(report)
        assert "### auth-001" in text
        assert "- [x] required ast_export :: login (/repo/src/auth.ts)" in text
        assert "  - contradiction: login is a stub; todo marker" in text
        assert "- [ ] optional marker_tag ::  (/repo/README.md)" in text
        assert "- Override: OPS-1 by @lead until 2026-04-01: migrating" in text


class TestWriteReports:
    def test_both_formats(self, report, tmp_path):
        written = write_reports(report, tmp_path / "artifacts")
        assert [p.name for p in written] == ["claim-drift-report.json", "claim-drift-report.md"]
        assert json.loads(written[0].read_text())["ledger_path"] == "docs/governance/claim-ledger.json"

    def test_single_format_deduplicated(self, report, tmp_path):
        written = write_reports(report, tmp_path, ["md", "md"])
        assert [p.name for p in written] == ["claim-drift-report.md"]

    def test_unknown_format(self, report, tmp_path):
        with pytest.raises(ValueError):
            write_reports(report, tmp_path, ["html"])


def test_blocked_property(report):
    assert report.blocked
