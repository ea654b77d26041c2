"""
devdocsx.cli - Command-line interface.

Main entry point for the devdocsx documentation reader.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import argcomplete

from devdocsx import __version__
from devdocsx.config import load_config
from devdocsx.display import (
    PROG,
    Style,
    print_document,
    print_help,
    print_not_found,
    print_topic_list,
    should_use_color,
)
from devdocsx.docs_loader import find_docs_dir, get_available_topics, read_document
from devdocsx.errors import (
    ConfigError,
    ContentRootError,
    DocumentReadError,
    InvalidTopicError,
)
from devdocsx.resolver import resolve

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID_TOPIC = 2
EXIT_IO_FAULT = 3
EXIT_INTERRUPTED = 130


def topic_completer(prefix: str, **kwargs) -> List[str]:
    """Complete topic identifiers from the installed content store."""
    docs_dir = find_docs_dir()
    if docs_dir is None:
        return []
    return [t for t in get_available_topics(docs_dir) if t.startswith(prefix)]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Offline developer documentation reader",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  {PROG}                          # Show available topics
  {PROG} express/middleware       # Read a topic
  {PROG} express/middleware.adv   # Read its advanced companion
  {PROG} node/streams --pretty    # Render Markdown for the terminal
  {PROG} --list                   # List every topic on disk

Shell completion:
  eval "$(register-python-argcomplete {PROG})"
""",
    )
    topic_arg = parser.add_argument(
        "topic",
        nargs="?",
        help="Topic to read, e.g. express/middleware (add .adv for advanced docs)",
    )
    topic_arg.completer = topic_completer
    parser.add_argument(
        "--list",
        action="store_true",
        help="List all topics found in the documentation directory",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Plain text output (no ANSI colors)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Render Markdown headings and code blocks for the terminal",
    )
    parser.add_argument(
        "--no-path",
        action="store_true",
        help="Do not print the location of the document file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging, full tracebacks)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)
    if args.list and args.topic:
        parser.error("--list cannot be combined with a topic")

    _setup_logging(args.verbose)

    # Help never touches configuration or the documentation directory
    if not args.topic and not args.list:
        color_mode = "never" if args.plain else "auto"
        print_help(Style(use_color=should_use_color(color_mode, sys.stdout)), sys.stdout)
        return EXIT_OK

    try:
        if args.list:
            return list_command()

        config = load_config()
        display = config["display"]
        color_mode = "never" if args.plain else display["color"]
        style = Style(use_color=should_use_color(color_mode, sys.stdout))

        return read_command(
            args.topic,
            style,
            pretty=args.pretty or display["pretty"],
            show_path=display["show_path"] and not args.no_path,
        )

    except InvalidTopicError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_TOPIC
    except (DocumentReadError, ContentRootError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_FAULT
    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _require_docs_dir() -> Path:
    docs_dir = find_docs_dir()
    if docs_dir is None:
        raise ContentRootError(f"Documentation directory not found; reinstall {PROG}")
    return docs_dir


def read_command(topic: str, style: Style, pretty: bool = False, show_path: bool = True) -> int:
    """Resolve one topic and print it."""
    resolution = resolve(topic, _require_docs_dir())

    if not resolution.found:
        print_not_found(topic, sys.stderr, style)
        return EXIT_NOT_FOUND

    content = read_document(resolution.path)
    print_document(
        resolution,
        content,
        sys.stdout,
        style,
        pretty=pretty,
        show_path=show_path,
    )
    return EXIT_OK


def list_command() -> int:
    """Print every topic present in the documentation directory."""
    print_topic_list(get_available_topics(_require_docs_dir()), sys.stdout)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
