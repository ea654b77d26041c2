"""Documentation loader for the devdocsx reader.

Locates the Markdown content store and reads documents from it.
Supports both installed package and development repository layouts.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devdocsx.errors import DocumentReadError
from devdocsx.resolver import ADVANCED_MARKER, Variant

logger = logging.getLogger(__name__)


# Topic listing shown by the help screen, grouped by category.
TOPIC_CATALOG: dict[str, list[str]] = {
    "JavaScript": [
        "javascript/arrays",
        "javascript/promises",
        "javascript/async-await",
        "javascript/closures",
    ],
    "Node.js": [
        "node/fs-module",
        "node/streams",
    ],
    "Express": [
        "express/setup",
        "express/middleware",
        "express/error-handling",
    ],
    "Cheatsheets": [
        "cheatsheets/javascript",
    ],
}

# Topics that ship an advanced companion (`<topic>.adv.md`).
ADVANCED_TOPICS: list[str] = [
    "express/middleware",
    "node/streams",
    "javascript/async-await",
]


def find_docs_dir() -> Path | None:
    """Locate the docs directory.

    Checks two locations:
    1. Package location: <package>/docs (installed via wheel)
    2. Repository location: <repo>/docs (development mode)

    Returns:
        Path to the docs directory, or None if not found.
    """
    package_dir = Path(__file__).parent  # src/devdocsx
    package_docs = package_dir / "docs"
    if package_docs.is_dir():
        return package_docs

    repo_root = package_dir.parent.parent  # src/..
    repo_docs = repo_root / "docs"
    if repo_docs.is_dir():
        return repo_docs

    return None


def read_document(path: Path) -> str:
    """Read a document fully into memory.

    Args:
        path: Document file, normally taken from a ``Resolution``.

    Returns:
        The document text.

    Raises:
        DocumentReadError: If the file exists but cannot be read or decoded.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Reading %s failed: %s", path, e)
        raise DocumentReadError(path, e) from e


def topic_for_path(path: Path, content_root: Path) -> str | None:
    """Return the topic identifier for a document path, or None for non-docs."""
    relative = path.relative_to(content_root).as_posix()
    if relative.endswith(Variant.ADVANCED.suffix):
        return relative[: -len(Variant.ADVANCED.suffix)] + ADVANCED_MARKER
    if relative.endswith(Variant.BASIC.suffix):
        return relative[: -len(Variant.BASIC.suffix)]
    return None


def get_available_topics(content_root: Path) -> list[str]:
    """Get the sorted list of topics present in the content store.

    Advanced documents are listed under the identifier that selects
    them, e.g. ``node/streams.adv``.
    """
    topics = []
    for path in content_root.rglob("*.md"):
        if not path.is_file():
            continue
        topic = topic_for_path(path, content_root)
        if topic:
            topics.append(topic)
    return sorted(topics)
