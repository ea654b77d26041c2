"""Tests for the devdocsx command-line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from devdocsx.cli import (
    EXIT_INVALID_TOPIC,
    EXIT_IO_FAULT,
    EXIT_NOT_FOUND,
    EXIT_OK,
    create_parser,
    main,
    topic_completer,
)

BASIC_MIDDLEWARE = "# Middleware\n\nBasic middleware notes.\n"
ADVANCED_MIDDLEWARE = "# Middleware (Advanced)\n\nAdvanced notes.\n"


class TestReadTopic:
    """Reading documents through main()."""

    def test_basic_only(self, cli_store: Path, capsys):
        assert main(["express/routing"]) == EXIT_OK
        out, err = capsys.readouterr()
        assert "Reading documentation for: express/routing" in out
        assert "# Routing\n\nRoutes.\n" in out
        assert "Advanced documentation available" not in out
        assert err == ""

    def test_basic_with_advanced_companion(self, cli_store: Path, capsys):
        assert main(["express/middleware"]) == EXIT_OK
        out, _ = capsys.readouterr()
        assert BASIC_MIDDLEWARE in out
        assert ADVANCED_MIDDLEWARE not in out
        assert "Advanced documentation available!" in out
        assert "Run: devdocsx express/middleware.adv" in out

    def test_explicit_advanced(self, cli_store: Path, capsys):
        assert main(["express/middleware.adv"]) == EXIT_OK
        out, _ = capsys.readouterr()
        assert "Reading advanced documentation for: express/middleware" in out
        assert ADVANCED_MIDDLEWARE in out
        assert BASIC_MIDDLEWARE not in out
        assert "Advanced documentation available" not in out

    def test_advanced_only_bare_topic(self, cli_store: Path, capsys):
        assert main(["node/streams"]) == EXIT_OK
        out, _ = capsys.readouterr()
        assert "Reading advanced documentation for: node/streams" in out
        assert "# Streams (Advanced)\n\nBackpressure.\n" in out

    def test_not_found(self, cli_store: Path, capsys):
        assert main(["foo"]) == EXIT_NOT_FOUND
        out, err = capsys.readouterr()
        assert out == ""
        assert "Topic not found: foo" in err
        assert 'Run "devdocsx" without arguments' in err

    def test_output_is_idempotent(self, cli_store: Path, capsys):
        main(["express/middleware"])
        first = capsys.readouterr().out
        main(["express/middleware"])
        second = capsys.readouterr().out
        assert first == second

    def test_file_path_tip(self, cli_store: Path, capsys):
        main(["express/routing"])
        out, _ = capsys.readouterr()
        assert "Tip: You can also open this file directly at:" in out
        assert str(cli_store / "express" / "routing.md") in out

    def test_no_path_flag(self, cli_store: Path, capsys):
        main(["express/routing", "--no-path"])
        out, _ = capsys.readouterr()
        assert "Tip:" not in out
        assert str(cli_store) not in out

    def test_output_has_no_color_when_not_a_tty(self, cli_store: Path, capsys):
        main(["express/middleware"])
        assert "\033[" not in capsys.readouterr().out

    def test_pretty_renders_markdown(self, cli_store: Path, capsys):
        main(["express/routing", "--pretty", "--plain"])
        out, _ = capsys.readouterr()
        assert "═" * 60 in out
        assert "# Routing" not in out

    def test_document_without_trailing_newline(self, cli_store: Path, capsys, doc_writer):
        doc_writer(cli_store, "misc/raw.md", "no newline at end")
        assert main(["misc/raw", "--no-path"]) == EXIT_OK
        out, _ = capsys.readouterr()
        assert "no newline at end\n" in out


class TestErrors:
    """Error classes map to distinct exit codes."""

    def test_traversal_rejected(self, cli_store: Path, capsys):
        (cli_store.parent / "secret.md").write_text("TOP SECRET", encoding="utf-8")
        assert main(["../secret"]) == EXIT_INVALID_TOPIC
        out, err = capsys.readouterr()
        assert out == ""
        assert "TOP SECRET" not in err
        assert "Invalid topic" in err

    def test_unreadable_document(self, cli_store: Path, capsys):
        (cli_store / "broken.md").write_bytes(b"\xff\xfe\xfa")
        assert main(["broken"]) == EXIT_IO_FAULT
        out, err = capsys.readouterr()
        assert out == ""
        assert "Cannot read" in err
        assert "Topic not found" not in err

    def test_missing_docs_dir(self, cli_store: Path, capsys, monkeypatch):
        monkeypatch.setattr("devdocsx.cli.find_docs_dir", lambda: None)
        assert main(["express/routing"]) == EXIT_IO_FAULT
        assert "Documentation directory not found" in capsys.readouterr().err

    def test_bad_config(self, cli_store: Path, capsys, tmp_path: Path, monkeypatch):
        bad = tmp_path / "bad.toml"
        bad.write_text("[display\ncolor = ", encoding="utf-8")
        monkeypatch.setenv("DEVDOCSX_CONFIG", str(bad))
        assert main(["express/routing"]) == EXIT_IO_FAULT
        assert "invalid TOML" in capsys.readouterr().err

    def test_unexpected_error_reraised_when_verbose(self, cli_store: Path, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("devdocsx.cli.resolve", boom)
        assert main(["express/routing"]) == 1
        with pytest.raises(RuntimeError):
            main(["express/routing", "--verbose"])


class TestHelp:
    """No-argument invocation."""

    def test_help_exit_zero(self, cli_store: Path, capsys):
        assert main([]) == EXIT_OK
        out, err = capsys.readouterr()
        assert "Usage: devdocsx <topic>" in out
        assert "express/middleware" in out
        assert "Advanced Topics (add .adv):" in out
        assert err == ""

    def test_help_never_looks_up_files(self, monkeypatch, capsys):
        def fail():
            raise AssertionError("help must not touch the docs directory")

        monkeypatch.setattr("devdocsx.cli.find_docs_dir", fail)
        monkeypatch.setattr("devdocsx.cli.load_config", fail)
        assert main([]) == EXIT_OK

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("devdocsx ")


class TestListAndCompletion:
    """Topic discovery from the command line."""

    def test_list(self, cli_store: Path, capsys):
        assert main(["--list"]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.splitlines() == [
            "express/middleware",
            "express/middleware.adv",
            "express/routing",
            "node/streams.adv",
        ]

    def test_list_with_topic_is_usage_error(self, cli_store: Path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["express/middleware", "--list"])
        assert exc_info.value.code == 2
        captured = capsys.readouterr()
        assert "--list cannot be combined with a topic" in captured.err
        assert captured.out == ""

    def test_completer_filters_by_prefix(self, cli_store: Path):
        assert topic_completer("express/m") == [
            "express/middleware",
            "express/middleware.adv",
        ]

    def test_completer_without_docs(self, monkeypatch):
        monkeypatch.setattr("devdocsx.cli.find_docs_dir", lambda: None)
        assert topic_completer("") == []

    def test_parser_topic_optional(self):
        args = create_parser().parse_args([])
        assert args.topic is None
        assert args.list is False


class TestConfiguration:
    """Configuration file and environment overrides reach the output."""

    def test_config_hides_path(self, cli_store: Path, capsys, tmp_path: Path, monkeypatch):
        config = tmp_path / "custom.toml"
        config.write_text("[display]\nshow_path = false\n", encoding="utf-8")
        monkeypatch.setenv("DEVDOCSX_CONFIG", str(config))
        main(["express/routing"])
        assert "Tip:" not in capsys.readouterr().out

    def test_config_color_always(self, cli_store: Path, capsys, tmp_path: Path, monkeypatch):
        config = tmp_path / "custom.toml"
        config.write_text('[display]\ncolor = "always"\n', encoding="utf-8")
        monkeypatch.setenv("DEVDOCSX_CONFIG", str(config))
        main(["express/routing"])
        out = capsys.readouterr().out
        assert "\033[" in out
        assert "# Routing\n\nRoutes.\n" in out

    def test_plain_flag_beats_config(self, cli_store: Path, capsys, monkeypatch):
        monkeypatch.setenv("DEVDOCSX_DISPLAY_COLOR", "always")
        main(["express/routing", "--plain"])
        assert "\033[" not in capsys.readouterr().out

    def test_env_enables_pretty(self, cli_store: Path, capsys, monkeypatch):
        monkeypatch.setenv("DEVDOCSX_DISPLAY_PRETTY", "true")
        main(["express/routing"])
        assert "═" * 60 in capsys.readouterr().out


class TestEmptyTopic:
    def test_empty_string_shows_help(self, cli_store: Path, capsys):
        assert main([""]) == EXIT_OK
        assert "Usage: devdocsx <topic>" in capsys.readouterr().out
