"""Markdown-to-ANSI renderer used by ``--pretty``.

Covers the subset of Markdown the bundled notes are written in:
ATX headings, fenced code (highlighted with Pygments when the fence
names a language), pipe tables, bullet and numbered lists, ``**bold**``
and inline code.
"""

from __future__ import annotations

import re

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
BULLET_RE = re.compile(r"^(\s*)[-*+]\s+(.*)$")
NUMBERED_RE = re.compile(r"^(\s*)(\d+)[.)]\s+(.*)$")
TABLE_RULE_RE = re.compile(r"^\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?$")
BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
CODE_RE = re.compile(r"`([^`]+)`")
ANSI_RE = re.compile(r"\033\[[0-9;]*m")

CODE_INDENT = "  "


def fence_language(info: str) -> str:
    """Return the language word of a fence info string (```js title="x")."""
    words = info.split()
    return words[0] if words else ""


def visible_len(text: str) -> int:
    return len(ANSI_RE.sub("", text))


def split_table_row(line: str) -> list[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


class MarkdownRenderer:
    """Render Markdown to terminal text, with ANSI codes when enabled."""

    BOLD = "\033[1m"
    DIM = "\033[2m"
    CYAN = "\033[36m"
    GREEN = "\033[32m"
    RESET = "\033[0m"

    HEADING_STYLES = {1: ("═", 60), 2: ("─", 40)}

    def __init__(self, use_color: bool = True) -> None:
        self.use_color = use_color

    def _paint(self, text: str, *codes: str) -> str:
        if not self.use_color or not codes:
            return text
        return "".join(codes) + text + self.RESET

    def render(self, markdown: str) -> str:
        """Render a whole document.

        Args:
            markdown: Raw markdown text.

        Returns:
            Terminal text; free of escape codes when color is disabled.
        """
        out: list[str] = []
        lines = markdown.split("\n")
        i = 0
        while i < len(lines):
            line = lines[i]
            stripped = line.strip()

            if stripped.startswith("```"):
                language = fence_language(stripped[3:])
                end = i + 1
                while end < len(lines) and not lines[end].strip().startswith("```"):
                    end += 1
                out.extend(self.code_block(lines[i + 1 : end], language))
                i = end + 1
                continue

            if stripped.startswith("|") and i + 1 < len(lines) and TABLE_RULE_RE.match(
                lines[i + 1].strip()
            ):
                end = i + 2
                while end < len(lines) and lines[end].strip().startswith("|"):
                    end += 1
                rows = [split_table_row(lines[i])]
                rows.extend(split_table_row(row) for row in lines[i + 2 : end])
                out.extend(self.table(rows))
                i = end
                continue

            out.append(self.block_line(line))
            i += 1

        return "\n".join(out)

    def code_block(self, lines: list[str], language: str = "") -> list[str]:
        """Indent a fenced block; highlight it when the language is known."""
        if self.use_color and language:
            try:
                lexer = get_lexer_by_name(language)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                text = highlight("\n".join(lines), lexer, TerminalFormatter())
                return [CODE_INDENT + row for row in text.rstrip("\n").split("\n")]
        return [CODE_INDENT + self._paint(row, self.DIM) for row in lines]

    def table(self, rows: list[list[str]]) -> list[str]:
        """Lay out a pipe table with padded columns and a bold header."""
        width = max(len(row) for row in rows)
        header = rows[0] + [""] * (width - len(rows[0]))
        body = [[self.inline(cell) for cell in row + [""] * (width - len(row))] for row in rows[1:]]
        # Widths count visible characters, not escape codes
        sizes = [
            max(visible_len(row[col]) for row in [header, *body]) for col in range(width)
        ]

        def fmt(row: list[str]) -> str:
            cells = (cell + " " * (size - visible_len(cell)) for cell, size in zip(row, sizes))
            return "  ".join(cells).rstrip()

        rule = "  ".join("─" * size for size in sizes)
        rendered = [self._paint(fmt(header), self.BOLD), self._paint(rule, self.DIM)]
        rendered.extend(fmt(row) for row in body)
        return rendered

    def block_line(self, line: str) -> str:
        heading = HEADING_RE.match(line.strip())
        if heading:
            return self.heading(len(heading.group(1)), heading.group(2))

        bullet = BULLET_RE.match(line)
        if bullet:
            indent, text = bullet.groups()
            return f"{indent}{self._paint('•', self.CYAN)} {self.inline(text)}"

        numbered = NUMBERED_RE.match(line)
        if numbered:
            indent, number, text = numbered.groups()
            return f"{indent}{self._paint(number + '.', self.CYAN)} {self.inline(text)}"

        return self.inline(line)

    def heading(self, level: int, title: str) -> str:
        # h1 is boxed, h2 underlined, deeper levels are bold only
        title = self._paint(title, self.BOLD, self.GREEN if level == 2 else "")
        if level not in self.HEADING_STYLES:
            return f"\n{title}\n"
        char, size = self.HEADING_STYLES[level]
        border = self._paint(char * size, self.CYAN if level == 1 else self.DIM)
        if level == 1:
            return f"\n{border}\n{title}\n{border}\n"
        return f"\n{title}\n{border}\n"

    def inline(self, text: str) -> str:
        text = BOLD_RE.sub(lambda m: self._paint(m.group(1), self.BOLD), text)
        return CODE_RE.sub(lambda m: self._paint(m.group(1), self.CYAN), text)
