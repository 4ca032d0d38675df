from __future__ import annotations

from typing import List

from riskrate_cli.exporters.base import BaseExporter
from riskrate_cli.formatters.markdown_formatter import MarkdownFormatter
from riskrate_cli.models.reports import TrendRow
from riskrate_cli.models.risks import QUARTERS
from riskrate_cli.reports import build_trend


class TrendExporter(BaseExporter):
    def export(self) -> None:
        self._ensure_output_dir()
        year = self.period.year
        self._log(f"Exporting residual risk trend for {year}...")

        rows = build_trend(self.snapshot, year)
        self._write_report(
            f"trend-{year}",
            title=f"Residual Risk Trend ({year})",
            body=_build_body(rows),
            data=rows,
            frontmatter=self._frontmatter(year=year, risk_count=len(rows)),
        )

        self._log(f"Exporting residual risk trend... done ({len(rows)} risks)")


def _build_body(rows: List[TrendRow]) -> str:
    if not rows:
        return "[//]: # (No active risks)"

    headers = ["No", "Risk", "Inherent"] + list(QUARTERS)
    table_rows = []
    for row in rows:
        first = next(iter(row.points.values()))
        cells = [row.code, row.name, f"{first.inherent.score} ({first.inherent.label})"]
        for quarter in QUARTERS:
            point = row.points[quarter]
            cells.append(f"{point.residual.score} ({point.residual.label})")
        table_rows.append(cells)
    return MarkdownFormatter.table(headers, table_rows)
