"""Report serialization and output files."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from claim_drift.report.markdown import render_markdown
from claim_drift.types.enums import ReportFormat
from claim_drift.types.results import DriftReport

logger = logging.getLogger(__name__)

REPORT_BASENAME = "claim-drift-report"


def render_json(report: DriftReport) -> str:
    return json.dumps(report.to_dict(), indent=2)


_RENDERERS = {
    ReportFormat.JSON: render_json,
    ReportFormat.MARKDOWN: render_markdown,
}


def write_reports(
    report: DriftReport,
    output_dir: str | Path,
    formats: Iterable[ReportFormat | str] = (ReportFormat.JSON, ReportFormat.MARKDOWN),
) -> list[Path]:
    """Write the report in each requested format.

    Returns:
        Paths written, in format order
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for fmt in dict.fromkeys(ReportFormat(f) for f in formats):
        target = out_dir / f"{REPORT_BASENAME}.{fmt.value}"
        target.write_text(_RENDERERS[fmt](report), encoding="utf-8")
        logger.info(f"Wrote {fmt.value} report to {target}")
        written.append(target)
    return written
