"""
devdocsx.display - Write resolved documents to the terminal.

Turns a ``Resolution`` plus document text into the header, body, footer
and notices shown to the user. Output streams are passed in so the
command can be driven from tests without touching ``sys.stdout``.
"""

from __future__ import annotations

import os
import sys
from typing import TextIO

from devdocsx.docs_loader import ADVANCED_TOPICS, TOPIC_CATALOG
from devdocsx.md_renderer import MarkdownRenderer
from devdocsx.resolver import Resolution

PROG = "devdocsx"
RULE = "─" * 53


class Style:
    """ANSI styling that collapses to plain text when color is off."""

    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[92m"
    YELLOW = "\033[33m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    RESET = "\033[0m"

    def __init__(self, use_color: bool = False) -> None:
        self.use_color = use_color

    def __call__(self, code: str, text: str) -> str:
        if not self.use_color:
            return text
        return f"{code}{text}{self.RESET}"


def should_use_color(mode: str, stream: TextIO | None = None) -> bool:
    """Decide whether to emit ANSI codes for a color mode.

    ``auto`` enables color only for a TTY and honours ``NO_COLOR``.
    """
    if mode == "always":
        return True
    if mode == "never":
        return False
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def format_help(style: Style) -> str:
    """Build the usage screen and static topic catalogue."""
    lines = [
        "",
        style(Style.YELLOW, f"{PROG} - Offline Documentation"),
        "",
        f"Usage: {PROG} <topic>",
        "",
        style(Style.CYAN, "Available topics:"),
    ]
    for category, topics in TOPIC_CATALOG.items():
        lines.append(f"  {category}:")
        lines.append(style(Style.DIM, "    " + ", ".join(topics)))
        lines.append("")

    lines.append("  Advanced Topics (add .adv):")
    lines.append(style(Style.DIM, "    " + ", ".join(f"{t}.adv" for t in ADVANCED_TOPICS)))
    lines.extend(
        [
            "",
            "Examples:",
            style(Style.DIM, f"  {PROG} javascript/arrays"),
            style(Style.DIM, f"  {PROG} express/middleware.adv"),
            style(Style.DIM, f"  {PROG} --list"),
            "",
        ]
    )
    return "\n".join(lines)


def print_help(style: Style, out: TextIO) -> None:
    print(format_help(style), file=out)


def print_document(
    resolution: Resolution,
    content: str,
    out: TextIO,
    style: Style,
    pretty: bool = False,
    show_path: bool = True,
) -> None:
    """Write a found document with its header, footer and notices.

    Args:
        resolution: A resolution whose ``found`` is true.
        content: Full text of the document at ``resolution.path``.
        out: Stream for the document (normally stdout).
        style: Color settings for everything around the document.
        pretty: Render the Markdown to ANSI instead of writing it verbatim.
        show_path: Append a tip naming the file on disk.
    """
    if resolution.is_advanced:
        header = f"Reading advanced documentation for: {resolution.display_topic}"
    else:
        header = f"Reading documentation for: {resolution.topic}"
    print(f"\n{style(Style.GREEN, header)}\n", file=out)

    if pretty:
        content = MarkdownRenderer(use_color=style.use_color).render(content)
    out.write(content)
    if not content.endswith("\n"):
        out.write("\n")

    print(style(Style.DIM, f"\n{RULE}"), file=out)

    if resolution.has_advanced_companion:
        print(style(Style.MAGENTA, "\nAdvanced documentation available!"), file=out)
        print(style(Style.DIM, f"   Run: {PROG} {resolution.advanced_topic}"), file=out)

    if show_path:
        print(style(Style.CYAN, "\nTip: You can also open this file directly at:"), file=out)
        print(style(Style.DIM, f"   {resolution.path}"), file=out)


def print_not_found(topic: str, err: TextIO, style: Style) -> None:
    print(style(Style.RED, f"\nTopic not found: {topic}\n"), file=err)
    print(
        style(Style.YELLOW, f'Run "{PROG}" without arguments to see available topics.'),
        file=err,
    )


def print_topic_list(topics: list[str], out: TextIO) -> None:
    for topic in topics:
        print(topic, file=out)
