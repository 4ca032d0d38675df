from __future__ import annotations

from typing import List, Sequence

from riskrate_cli.exporters.base import BaseExporter
from riskrate_cli.formatters.markdown_formatter import MarkdownFormatter
from riskrate_cli.models.reports import NOT_AVAILABLE, Heatmap
from riskrate_cli.models.risks import RiskRatingBand
from riskrate_cli.reports import build_heatmaps


class HeatmapExporter(BaseExporter):
    def export(self) -> None:
        self._ensure_output_dir()
        self._log(f"Exporting heatmaps for {self.period}...")

        heatmaps = build_heatmaps(self.snapshot, self.period)
        parts: List[str] = []
        for heatmap in heatmaps:
            parts.append(_render_heatmap(heatmap))
            parts.append("")
        parts.append(_render_legend(self.snapshot.ratings))

        self._write_report(
            "heatmaps",
            title=f"Risk Heatmaps ({self.period})",
            body="\n".join(parts),
            data=heatmaps,
            frontmatter=self._frontmatter(
                impact_axis=len(heatmaps[0].x_labels),
                likelihood_axis=len(heatmaps[0].y_labels),
            ),
        )

        self._log("Exporting heatmaps... done")


def _render_heatmap(heatmap: Heatmap) -> str:
    parts = [f"## {heatmap.title}", ""]
    if not heatmap.rows or not heatmap.x_labels:
        parts.append("[//]: # (No impact or likelihood settings configured)")
        return "\n".join(parts)

    headers = ["Likelihood \\ Impact"] + [str(x) for x in heatmap.x_labels]
    rows = []
    # Highest likelihood on top.
    for likelihood, row in reversed(list(zip(heatmap.y_labels, heatmap.rows))):
        cells: List[str] = [f"**{likelihood}**"]
        for cell in row:
            band = cell.band.name if cell.band is not None else NOT_AVAILABLE
            risks = ", ".join(cell.risk_ids)
            cells.append(f"{band}: {risks}" if risks else band)
        rows.append(cells)
    parts.append(MarkdownFormatter.table(headers, rows, align="c" * len(headers)))
    return "\n".join(parts)


def _render_legend(bands: Sequence[RiskRatingBand]) -> str:
    parts = ["## Legend", ""]
    if not bands:
        parts.append("[//]: # (No risk ratings configured)")
        return "\n".join(parts)
    parts.append(MarkdownFormatter.table(
        ["Rating", "Score Range", "Color"],
        [[b.name, f"{_num(b.min_score)}-{_num(b.max_score)}", b.color] for b in bands],
    ))
    return "\n".join(parts)


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
