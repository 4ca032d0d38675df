from __future__ import annotations

from typing import List

from riskrate_cli.exporters.base import BaseExporter
from riskrate_cli.formatters.markdown_formatter import MarkdownFormatter
from riskrate_cli.models.reports import TreatmentDistribution
from riskrate_cli.models.risks import TREATMENT_STATUSES
from riskrate_cli.reports import build_treatment_distribution


class TreatmentsExporter(BaseExporter):
    def export(self) -> None:
        self._ensure_output_dir()
        self._log("Exporting treatment distribution...")

        distribution = build_treatment_distribution(self.snapshot)
        self._write_report(
            "treatments",
            title="Treatment Distribution",
            body=_build_body(distribution),
            data=distribution,
            frontmatter=self._frontmatter(treatment_count=len(self.snapshot.treatments)),
        )

        self._log(
            f"Exporting treatment distribution... done ({len(self.snapshot.treatments)} treatments)"
        )


def _build_body(distribution: TreatmentDistribution) -> str:
    parts: List[str] = ["## Overall", ""]
    for status in TREATMENT_STATUSES:
        parts.append(f"- **{status}:** {distribution.overall.get(status, 0)}")
    parts.append("")

    parts.append("## By Team")
    parts.append("")
    if distribution.by_owner:
        parts.append(MarkdownFormatter.table(
            ["Team"] + list(TREATMENT_STATUSES),
            [
                [owner] + [counts.get(status, 0) for status in TREATMENT_STATUSES]
                for owner, counts in distribution.by_owner.items()
            ],
            align="l" + "r" * len(TREATMENT_STATUSES),
        ))
    else:
        parts.append("[//]: # (No treatments set)")
    return "\n".join(parts)
