from __future__ import annotations

from typing import List

from riskrate_cli.exporters.base import BaseExporter
from riskrate_cli.formatters.markdown_formatter import MarkdownFormatter
from riskrate_cli.models.reports import RegisterEntry
from riskrate_cli.reports import build_register


class RegisterExporter(BaseExporter):
    def export(self) -> None:
        self._ensure_output_dir()
        self._log(f"Exporting risk register for {self.period}...")

        entries = build_register(self.snapshot, self.period)
        self._write_report(
            "register",
            title=f"Risk Register ({self.period})",
            body=_build_body(entries),
            data=entries,
            frontmatter=self._frontmatter(risk_count=len(entries)),
        )

        self._log(f"Exporting risk register... done ({len(entries)} risks)")


def _build_body(entries: List[RegisterEntry]) -> str:
    if not entries:
        return "[//]: # (No active risks)"

    parts: List[str] = []
    parts.append(MarkdownFormatter.table(
        ["No", "Risk", "Category", "Owner", "Inherent", "Residual"],
        [
            [
                e.code,
                e.name,
                e.category,
                e.owner,
                f"{e.inherent_score} ({e.inherent_rating})",
                f"{e.residual_score} ({e.residual_rating})",
            ]
            for e in entries
        ],
    ))
    parts.append("")

    for entry in entries:
        parts.append(f"## {entry.code}: {entry.name}")
        parts.append("")
        parts.append(MarkdownFormatter.table(
            ["", "Impact", "Likelihood", "Score", "Rating"],
            [
                ["Inherent", entry.inherent_impact, entry.inherent_likelihood,
                 entry.inherent_score, entry.inherent_rating],
                ["Residual", entry.residual_impact, entry.residual_likelihood,
                 entry.residual_score, entry.residual_rating],
            ],
            align="lrrrl",
        ))
        parts.append("")
        parts.append("### Treatments")
        parts.append("")
        if entry.treatments:
            parts.append(MarkdownFormatter.table(
                ["Treatment", "Type", "Control Type", "Owner", "Status", "Effectiveness"],
                [
                    [t.treatment, t.kind, t.control_type, t.owner, t.status, t.effectiveness]
                    for t in entry.treatments
                ],
            ))
        else:
            parts.append("[//]: # (No treatments set)")
        parts.append("")

    return "\n".join(parts)
