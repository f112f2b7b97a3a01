"""Report rendering (JSON / Markdown) and output files."""

from claim_drift.report.markdown import render_markdown
from claim_drift.report.writer import REPORT_BASENAME, render_json, write_reports

__all__ = [
    "REPORT_BASENAME",
    "render_json",
    "render_markdown",
    "write_reports",
]
