from __future__ import annotations

from pathlib import Path
import textwrap
from typing import Any, Dict, List, Optional, Sequence

from riskrate_cli.formatters.base import BaseFormatter, to_plain
from riskrate_cli.formatters.yaml_formatter import YamlFormatter


class MarkdownFormatter(BaseFormatter):
    _MAX_LINE_LENGTH = 120

    def write(self, data: Any, output_path: Path) -> None:
        content = self._render_data(data)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)

    def file_extension(self) -> str:
        return ".md"

    @classmethod
    def render(
        cls,
        title: str,
        body: str,
        frontmatter: Optional[Dict[str, Any]] = None,
    ) -> str:
        parts = []
        if frontmatter:
            fm_text = YamlFormatter.dumps(frontmatter).rstrip("\n")
            parts.append(f"---\n{fm_text}\n---\n")
        if title:
            parts.append(f"# {title}\n")
        if body:
            wrapped_body = cls._wrap_body(body.rstrip("\n"))
            parts.append(wrapped_body + "\n")
        return "\n".join(parts)

    @staticmethod
    def table(
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        align: Optional[Sequence[str]] = None,
    ) -> str:
        """Render a pipe table; *align* holds "l", "r" or "c" per column."""
        separators: List[str] = []
        for idx in range(len(headers)):
            mode = align[idx] if align and idx < len(align) else "l"
            if mode == "r":
                separators.append("---:")
            elif mode == "c":
                separators.append(":---:")
            else:
                separators.append("---")

        lines = [
            "| " + " | ".join(str(h) for h in headers) + " |",
            "| " + " | ".join(separators) + " |",
        ]
        for row in rows:
            cells = [str(cell).replace("|", "\\|").replace("\n", " ") for cell in row]
            lines.append("| " + " | ".join(cells) + " |")
        return "\n".join(lines)

    def _render_data(self, data: Any) -> str:
        if isinstance(data, str):
            return data

        plain = to_plain(data)
        if not isinstance(plain, dict):
            return str(data)
        payload: Dict[str, Any] = plain

        title = str(payload.get("title", ""))
        body = str(payload.get("body", ""))

        frontmatter_value = payload.get("frontmatter", payload.get("metadata"))
        frontmatter: Optional[Dict[str, Any]]
        if isinstance(frontmatter_value, dict):
            frontmatter = frontmatter_value
        else:
            excluded = {"title", "body", "frontmatter", "metadata"}
            generated = {k: v for k, v in payload.items() if k not in excluded}
            frontmatter = generated or None

        return self.render(title=title, body=body, frontmatter=frontmatter)

    @classmethod
    def _wrap_body(cls, body: str) -> str:
        wrapped_lines = []
        for line in body.splitlines():
            if cls._should_preserve_line(line):
                wrapped_lines.append(line)
                continue
            wrapped_lines.append(
                textwrap.fill(
                    line,
                    width=cls._MAX_LINE_LENGTH,
                    break_long_words=False,
                    break_on_hyphens=False,
                )
            )
        return "\n".join(wrapped_lines)

    @classmethod
    def _should_preserve_line(cls, line: str) -> bool:
        if not line:
            return True
        if len(line) <= cls._MAX_LINE_LENGTH:
            return True
        if line.startswith(("#", "- ", "* ", "> ", "|", "```", "    ", "\t")):
            return True
        if "`" in line or "](" in line or "**" in line:
            return True
        return False
