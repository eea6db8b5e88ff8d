"""HTML minification with a tag-balance check.

Minification is deliberately conservative: whitespace runs collapse to a
single space, and whitespace touching a block-level tag is dropped.  The
contents of ``pre``, ``textarea``, ``script`` and ``style`` are left
byte-for-byte intact.  Before anything is rewritten the markup is parsed
and every non-void element must be closed in order; otherwise
:class:`MinificationError` is raised rather than emitting a corrupted page.
"""

from __future__ import annotations

import re
from html.parser import HTMLParser

from deck._errors import MinificationError

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})

_BLOCK_TAGS = (
    "html|head|body|main|nav|header|footer|section|article|aside|div|p|"
    "ul|ol|li|dl|dt|dd|h[1-6]|table|thead|tbody|tfoot|tr|th|td|caption|"
    "blockquote|figure|figcaption|hr|pre|meta|title|style|script|details|summary"
)

_PRESERVED = re.compile(
    r"(<(pre|textarea|script|style)\b[^>]*>.*?</\2\s*>)",
    re.IGNORECASE | re.DOTALL,
)
_WHITESPACE = re.compile(r"\s+")
_AROUND_BLOCK = re.compile(
    rf"\s*(</?(?:{_BLOCK_TAGS})\b[^>]*>|<!DOCTYPE[^>]*>)\s*",
    re.IGNORECASE,
)


class _BalanceChecker(HTMLParser):
    """Tracks open elements; records the first nesting violation."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.stack: list[tuple[str, tuple[int, int]]] = []
        self.problem: str | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag not in VOID_ELEMENTS:
            self.stack.append((tag, self.getpos()))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        # <br/>, <img/>: self-closing, nothing to track
        return

    def handle_endtag(self, tag: str) -> None:
        if self.problem is not None or tag in VOID_ELEMENTS:
            return
        line, col = self.getpos()
        if not self.stack:
            self.problem = f"unexpected </{tag}> at line {line}, column {col}"
            return
        open_tag, (open_line, _) = self.stack.pop()
        if open_tag != tag:
            self.problem = (
                f"</{tag}> at line {line}, column {col} closes <{open_tag}> "
                f"opened at line {open_line}"
            )


def check_balance(markup: str) -> None:
    """Raise MinificationError unless every element in *markup* is closed in order."""
    checker = _BalanceChecker()
    checker.feed(markup)
    checker.close()
    if checker.problem is None and checker.stack:
        tag, (line, _) = checker.stack[-1]
        checker.problem = f"<{tag}> opened at line {line} is never closed"
    if checker.problem is not None:
        msg = f"Cannot minify unbalanced markup: {checker.problem}"
        raise MinificationError(msg)


def minify_html(markup: str) -> str:
    """Return a whitespace-minified copy of *markup*.

    Raises:
        MinificationError: If the markup is not well balanced.

    """
    check_balance(markup)
    pieces = _PRESERVED.split(markup)
    out: list[str] = []
    # split() with two groups yields [text, block, tagname, text, block, tagname, ..., text]
    for i in range(0, len(pieces), 3):
        text = _AROUND_BLOCK.sub(r"\1", _collapse(pieces[i]))
        if i > 0 and pieces[i - 1].lower() != "textarea":
            text = text.lstrip()
        if i + 1 < len(pieces) and pieces[i + 2].lower() != "textarea":
            text = text.rstrip()
        out.append(text)
        if i + 1 < len(pieces):
            out.append(pieces[i + 1])
    return "".join(out).strip()


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text)
