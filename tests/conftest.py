"""Shared fixtures for devdocsx tests."""

from __future__ import annotations

from pathlib import Path

import pytest


def write_doc(root: Path, relative: str, content: str) -> Path:
    """Create a document under root, making parent directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def content_store(tmp_path: Path) -> Path:
    """A small content store covering every resolution outcome.

    - express/middleware: basic + advanced
    - express/routing: basic only
    - node/streams: advanced only
    """
    root = tmp_path / "docs"
    write_doc(root, "express/middleware.md", "# Middleware\n\nBasic middleware notes.\n")
    write_doc(root, "express/middleware.adv.md", "# Middleware (Advanced)\n\nAdvanced notes.\n")
    write_doc(root, "express/routing.md", "# Routing\n\nRoutes.\n")
    write_doc(root, "node/streams.adv.md", "# Streams (Advanced)\n\nBackpressure.\n")
    return root


@pytest.fixture
def cli_store(content_store: Path, monkeypatch, tmp_path: Path) -> Path:
    """Point the CLI at content_store and isolate it from user config."""
    monkeypatch.setattr("devdocsx.cli.find_docs_dir", lambda: content_store)
    config_file = tmp_path / "config.toml"
    config_file.write_text("", encoding="utf-8")
    monkeypatch.setenv("DEVDOCSX_CONFIG", str(config_file))
    monkeypatch.delenv("NO_COLOR", raising=False)
    for name in ("DEVDOCSX_DISPLAY_COLOR", "DEVDOCSX_DISPLAY_PRETTY", "DEVDOCSX_DISPLAY_SHOW_PATH"):
        monkeypatch.delenv(name, raising=False)
    return content_store


@pytest.fixture
def doc_writer():
    """Return the write_doc helper for tests that build their own store."""
    return write_doc
