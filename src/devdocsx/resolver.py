"""
devdocsx.resolver - Map a topic identifier to a document in the content store.

A topic such as ``express/middleware`` may have two documents:

    <root>/express/middleware.md       basic document
    <root>/express/middleware.adv.md   advanced companion

The basic document always wins unless the caller asked for the advanced
one explicitly by typing the ``.adv`` marker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from devdocsx.errors import InvalidTopicError

logger = logging.getLogger(__name__)

ADVANCED_MARKER = ".adv"


class Variant(Enum):
    """Kind of document, keyed by its file suffix."""

    BASIC = ".md"
    ADVANCED = ".adv.md"

    @property
    def suffix(self) -> str:
        return self.value


class Status(Enum):
    """Outcome of a lookup."""

    FOUND = "found"
    FOUND_ADVANCED = "found-advanced"
    NOT_FOUND = "not-found"


# Lookup order for a bare topic; earlier entries take precedence.
CANDIDATE_ORDER = (Variant.BASIC, Variant.ADVANCED)

_STATUS_FOR_VARIANT = {
    Variant.BASIC: Status.FOUND,
    Variant.ADVANCED: Status.FOUND_ADVANCED,
}


@dataclass(frozen=True)
class Resolution:
    """Result of resolving one topic identifier."""

    topic: str
    status: Status
    path: Path | None = None
    has_advanced_companion: bool = False

    @property
    def found(self) -> bool:
        return self.status is not Status.NOT_FOUND

    @property
    def is_advanced(self) -> bool:
        return self.status is Status.FOUND_ADVANCED

    @property
    def display_topic(self) -> str:
        """Topic name without the advanced marker."""
        return strip_advanced_marker(self.topic)

    @property
    def advanced_topic(self) -> str:
        """Identifier a caller would type to read the advanced companion."""
        return self.topic + ADVANCED_MARKER


def strip_advanced_marker(topic: str) -> str:
    if topic.endswith(ADVANCED_MARKER):
        return topic[: -len(ADVANCED_MARKER)]
    return topic


def validate_topic(topic: str) -> str:
    """Reject topic identifiers that are not plain relative paths.

    Args:
        topic: Raw topic string from the command line.

    Returns:
        The topic unchanged.

    Raises:
        InvalidTopicError: If the topic is blank, absolute, contains a
            backslash or NUL, has empty segments, or uses ``.``/``..``.
    """
    if not topic or not topic.strip():
        raise InvalidTopicError(topic, "topic is empty")
    if "\x00" in topic:
        raise InvalidTopicError(topic, "topic contains a NUL byte")
    if "\\" in topic:
        raise InvalidTopicError(topic, "use '/' to separate path segments")
    if topic.startswith("/") or (len(topic) > 1 and topic[1] == ":"):
        raise InvalidTopicError(topic, "topic must be a relative path")

    for segment in topic.split("/"):
        if segment == "":
            raise InvalidTopicError(topic, "topic contains an empty path segment")
        if segment in (".", ".."):
            raise InvalidTopicError(topic, f"'{segment}' segments are not allowed")

    if strip_advanced_marker(topic).split("/")[-1] == "":
        raise InvalidTopicError(topic, "topic name is missing before '.adv'")

    return topic


def candidate_paths(topic: str, content_root: Path) -> list[tuple[Variant, Path]]:
    """Build the ordered list of paths that may hold the topic.

    A topic ending in ``.adv`` names the advanced document directly and
    has a single candidate.
    """
    if topic.endswith(ADVANCED_MARKER):
        base = strip_advanced_marker(topic)
        return [(Variant.ADVANCED, content_root / f"{base}{Variant.ADVANCED.suffix}")]
    return [(variant, content_root / f"{topic}{variant.suffix}") for variant in CANDIDATE_ORDER]


def _check_inside(topic: str, path: Path, root: Path) -> None:
    # Symlinked documents or directories must not lead out of the store
    if not path.resolve().is_relative_to(root):
        raise InvalidTopicError(topic, "topic resolves outside the documentation directory")


def resolve(topic: str, content_root: Path) -> Resolution:
    """Resolve a topic identifier against the content store.

    Args:
        topic: Topic identifier, e.g. ``express/middleware`` or
            ``express/middleware.adv``.
        content_root: Root directory of the Markdown documents.

    Returns:
        A ``Resolution`` with status FOUND, FOUND_ADVANCED or NOT_FOUND.

    Raises:
        InvalidTopicError: If the topic fails ``validate_topic`` or the
            matching document resolves outside ``content_root``.
    """
    validate_topic(topic)
    root = content_root.resolve()

    for variant, path in candidate_paths(topic, content_root):
        logger.debug("Checking %s candidate %s", variant.name.lower(), path)
        if not path.is_file():
            continue
        _check_inside(topic, path, root)

        companion = False
        if variant is Variant.BASIC:
            advanced = content_root / f"{topic}{Variant.ADVANCED.suffix}"
            companion = advanced.is_file() and advanced.resolve().is_relative_to(root)

        logger.debug("Resolved %r to %s (advanced companion: %s)", topic, path, companion)
        return Resolution(
            topic=topic,
            status=_STATUS_FOR_VARIANT[variant],
            path=path,
            has_advanced_companion=companion,
        )

    logger.debug("No document found for %r under %s", topic, content_root)
    return Resolution(topic=topic, status=Status.NOT_FOUND)
