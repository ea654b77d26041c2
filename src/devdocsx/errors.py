"""
devdocsx.errors - Exceptions raised while reading documentation.

A missing topic is not an error: the resolver reports it as a
``NOT_FOUND`` resolution. These exceptions cover everything else.
"""

from __future__ import annotations

from pathlib import Path


class DevDocsError(Exception):
    """Base class for devdocsx failures."""


class InvalidTopicError(DevDocsError, ValueError):
    """Topic identifier is malformed or escapes the content root."""

    def __init__(self, topic: str, reason: str) -> None:
        super().__init__(f"Invalid topic {topic!r}: {reason}")
        self.topic = topic
        self.reason = reason


class DocumentReadError(DevDocsError):
    """An existing document could not be read."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"Cannot read {path}: {cause}")
        self.path = path
        self.cause = cause


class ContentRootError(DevDocsError):
    """The documentation directory could not be located."""


class ConfigError(DevDocsError):
    """The configuration file could not be read or parsed."""
