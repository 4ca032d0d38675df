from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from riskrate_cli.formatters.json_formatter import JsonFormatter
from riskrate_cli.formatters.markdown_formatter import MarkdownFormatter
from riskrate_cli.formatters.yaml_formatter import YamlFormatter
from riskrate_cli.models.risks import Period, TenantSnapshot


class BaseExporter(ABC):
    def __init__(
        self,
        snapshot: TenantSnapshot,
        output_dir: Path,
        period: Period,
        *,
        force: bool = False,
        keep_raw_json: bool = False,
    ) -> None:
        self.snapshot = snapshot
        self.output_dir = output_dir
        self.period = period
        self.force = force
        self.keep_raw_json = keep_raw_json
        self._overwrite_all = False
        self._json_formatter = JsonFormatter()
        self._yaml_formatter = YamlFormatter()

    @abstractmethod
    def export(self) -> None:
        """Build the report from the snapshot and write it to output_dir."""
        ...

    def _ensure_output_dir(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        print(message)

    def _should_write(self, path: Path) -> bool:
        """Check whether *path* should be written, prompting if needed."""
        if not path.exists():
            return True
        if self.force or self._overwrite_all:
            return True
        while True:
            answer = input(
                f"Overwrite existing {path.name}? [Yes/No/All] "
            ).strip().lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            if answer in ("a", "all"):
                self._overwrite_all = True
                return True

    def _frontmatter(self, **extra: Any) -> Dict[str, Any]:
        frontmatter: Dict[str, Any] = {
            "generated": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "period": str(self.period),
        }
        frontmatter.update(extra)
        return frontmatter

    def _write_report(
        self,
        name: str,
        title: str,
        body: str,
        data: Any,
        frontmatter: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Write the Markdown report plus its data as YAML (and JSON on request)."""
        md_path = self.output_dir / (name + ".md")
        if self._should_write(md_path):
            content = MarkdownFormatter.render(title=title, body=body, frontmatter=frontmatter)
            with open(md_path, "w", encoding="utf-8") as f:
                f.write(content)

        yaml_path = self.output_dir / (name + ".yaml")
        if self._should_write(yaml_path):
            self._yaml_formatter.write(data, yaml_path)

        if self.keep_raw_json:
            json_path = self.output_dir / (name + ".json")
            if self._should_write(json_path):
                self._json_formatter.write(data, json_path)
