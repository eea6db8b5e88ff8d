"""Reading deck sources and writing rendered pages."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from deck._errors import DeckIOError
from deck.render.renderer import Document

if TYPE_CHECKING:
    from pathlib import Path


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, wrapping OS errors in DeckIOError."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise DeckIOError(msg) from exc


def read_stdin() -> str:
    try:
        return sys.stdin.read()
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read standard input: {exc}"
        raise DeckIOError(msg) from exc


def read_document(
    markdown: Path | None,
    css: Path | None = None,
    js: Path | None = None,
) -> Document:
    """Load a Document from disk; markdown comes from stdin when *markdown* is None."""
    return Document(
        markdown=read_text(markdown) if markdown is not None else read_stdin(),
        css=read_text(css) if css is not None else None,
        js=read_text(js) if js is not None else None,
    )


def write_page(page: str, out: Path | None) -> None:
    """Write *page* to *out*, or to standard output when *out* is None."""
    try:
        if out is None:
            sys.stdout.write(page)
            sys.stdout.flush()
        else:
            out.write_text(page, encoding="utf-8")
    except OSError as exc:
        target = out if out is not None else "standard output"
        msg = f"Failed to write {target}: {exc}"
        raise DeckIOError(msg) from exc
