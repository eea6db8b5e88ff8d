"""Deck CLI — deck build / deck serve / deck themes.

Entry point for the ``deck`` command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _add_render_options(parser: argparse.ArgumentParser) -> None:
    """Options shared by build and serve."""
    parser.add_argument("--title", default=None, help="Set the title of the webpage")
    parser.add_argument(
        "--theme", default=None, help="Theme used to highlight code blocks",
    )
    parser.add_argument(
        "--theme-dir",
        dest="theme_dirs",
        action="append",
        type=Path,
        default=None,
        metavar="DIR",
        help="Add a directory searched for .tmTheme files (repeatable)",
    )
    parser.add_argument("--css", type=Path, default=None, help="Inline custom CSS from FILE")
    parser.add_argument("--js", type=Path, default=None, help="Inline custom JS from FILE")
    parser.add_argument(
        "--no-minify",
        dest="minify",
        action="store_false",
        default=None,
        help="Keep the rendered HTML unminified",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the deck CLI."""
    parser = argparse.ArgumentParser(
        prog="deck",
        description="Markdown to self-contained HTML slide decks.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # deck build
    build_parser = subparsers.add_parser(
        "build",
        help="Convert a markdown file to a self-contained HTML file",
    )
    build_parser.add_argument(
        "markdown",
        nargs="?",
        type=Path,
        default=None,
        help="Markdown file with the slides (default: standard input)",
    )
    build_parser.add_argument(
        "-o", "--out",
        dest="output",
        type=Path,
        default=None,
        help="Output HTML file (default: standard output)",
    )
    _add_render_options(build_parser)

    # deck serve
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve a markdown deck locally, optionally reloading on change",
    )
    serve_parser.add_argument("input", type=Path, help="Markdown file with the slides")
    serve_parser.add_argument("-p", "--port", type=int, default=None, help="Bind port (default 8000)")
    serve_parser.add_argument("--host", default=None, help="Bind address (default 127.0.0.1)")
    serve_parser.add_argument(
        "-w", "--watch",
        action="store_true",
        default=None,
        help="Re-render when the markdown, css or js file changes",
    )
    _add_render_options(serve_parser)

    # deck themes
    themes_parser = subparsers.add_parser("themes", help="List available themes")
    themes_parser.add_argument(
        "--theme-dir",
        dest="theme_dirs",
        action="append",
        type=Path,
        default=None,
        metavar="DIR",
        help="Add a directory searched for .tmTheme files (repeatable)",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from deck import __version__

    return __version__


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("deck")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s", "%H:%M:%S"),
    )
    logger.addHandler(handler)


def _render_kwargs(args: argparse.Namespace) -> dict[str, object]:
    return {
        "title": args.title,
        "theme": args.theme,
        "theme_dirs": args.theme_dirs,
        "css": args.css,
        "js": args.js,
        "minify": args.minify,
    }


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)

    from deck._errors import DeckError
    from deck.app import build, list_themes, serve
    from deck.theme import DEFAULT_THEME

    try:
        if args.command == "build":
            build(args.markdown, output=args.output, **_render_kwargs(args))
        elif args.command == "serve":
            serve(
                args.input,
                host=args.host,
                port=args.port,
                watch=args.watch,
                **_render_kwargs(args),
            )
        elif args.command == "themes":
            for name, source in list_themes(args.theme_dirs or ()):
                marker = " (default)" if name == DEFAULT_THEME else ""
                origin = "" if source == "builtin" else f"  {source}"
                print(f"{name}{marker}{origin}")
    except DeckError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
