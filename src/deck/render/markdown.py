"""Slide markdown to HTML — Patitas for prose, Pygments for fenced code.

Fenced code blocks are lifted out of the slide before Patitas sees it and
replaced by placeholder lines.  Each block is highlighted with the
active theme and spliced back into the rendered HTML, so highlighting is
identical across slides and independent of the markdown parser.
"""

from __future__ import annotations

import html
import re
from typing import TYPE_CHECKING

from patitas import Markdown
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.token import Token
from pygments.util import ClassNotFound

if TYPE_CHECKING:
    from pygments.lexer import Lexer
    from pygments.style import Style

HIGHLIGHT_CLASS = "highlight"

# Blockquote markers, then an optional list marker or continuation indent.
_FENCE_OPEN = re.compile(
    r"^(?P<quote>(?: {0,3}>[ ]?)*)"
    r"(?P<lead>[ \t]*(?:(?:[-*+]|\d{1,9}[.)])[ \t]+)?)"
    r"(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^`]*?)[ \t]*$"
)
_QUOTE = re.compile(r" {0,3}>[ ]?")
_PLACEHOLDER_PREFIX = "DECKFENCE"


class CodeHighlighter:
    """Highlights code blocks with one theme as class-based spans.

    Token spans use Pygments' short class names (``k``, ``s``, ``c1``...)
    under a ``.highlight`` container; :meth:`stylesheet` returns the
    matching rules.

    """

    def __init__(self, style: type[Style]) -> None:
        self._style = style
        self._formatter = HtmlFormatter(style=style, cssclass=HIGHLIGHT_CLASS)

    def highlight(self, code: str, language: str | None) -> str:
        """Return a ``<div class="highlight">`` block for *code*."""
        lexer = _lexer_for(language)
        rendered = highlight(code, lexer, self._formatter)
        if language:
            rendered = rendered.replace(
                f'<div class="{HIGHLIGHT_CLASS}">',
                f'<div class="{HIGHLIGHT_CLASS}" data-lang="{html.escape(language)}">',
                1,
            )
        return rendered

    def stylesheet(self) -> str:
        """CSS rules for highlighted blocks under the active theme."""
        selector = f".{HIGHLIGHT_CLASS}"
        rules = [self._formatter.get_style_defs(selector)]
        base = self._style.style_for_token(Token)
        if base.get("color"):
            rules.append(f"{selector} {{ color: #{base['color']} }}")
        return "\n".join(rules) + "\n"


def _lexer_for(language: str | None) -> Lexer:
    if not language:
        return TextLexer()
    try:
        return get_lexer_by_name(language)
    except ClassNotFound:
        return TextLexer()


class SlideMarkdown:
    """Converts one slide's markdown to an HTML fragment.

    Fences nested in blockquotes (``> ```python``) and list items
    (``- ```python`` or an indented continuation) are lifted out too: the
    container prefix is stripped from the code and kept on the placeholder,
    so Patitas still places the highlighted block inside its container.

    """

    def __init__(self, highlighter: CodeHighlighter) -> None:
        self._highlighter = highlighter
        self._md = Markdown(plugins=["table"])

    def convert(self, source: str) -> str:
        marker = _placeholder_marker(source)
        blocks: list[str] = []
        stashed = self._stash_fences(source, blocks, marker)
        rendered = self._md(stashed)
        pattern = re.compile(rf"(?:<p>\s*)?{re.escape(marker)}(\d+)ZQ(?:\s*</p>)?")

        def restore(match: re.Match[str]) -> str:
            index = int(match.group(1))
            return blocks[index] if index < len(blocks) else match.group(0)

        return pattern.sub(restore, rendered)

    def _stash_fences(self, source: str, blocks: list[str], marker: str) -> str:
        out: list[str] = []
        lines = source.splitlines()
        i = 0
        while i < len(lines):
            opened = _FENCE_OPEN.match(lines[i])
            if not opened:
                out.append(lines[i])
                i += 1
                continue

            quote, lead, fence, info = opened.group("quote", "lead", "fence", "info")
            depth = quote.count(">")
            language = info.split()[0].strip("{}.") if info.split() else None
            body: list[str] = []
            i += 1
            while i < len(lines):
                line = _strip_quotes(lines[i], depth)
                if line is None:
                    break  # the blockquote ended, and the fence with it
                i += 1
                line = _dedent(line, len(lead))
                if _closes(line, fence):
                    break
                body.append(line)

            code = "\n".join(body) + "\n" if body else ""
            blocks.append(self._highlighter.highlight(code, language or None))
            placeholder = f"{quote}{lead}{marker}{len(blocks) - 1}ZQ"
            blank = quote.rstrip()
            if lead.strip():
                # The list marker stays on the placeholder line.
                out.extend([placeholder, blank])
            else:
                out.extend([blank, placeholder, blank])
        return "\n".join(out) + "\n"


def _placeholder_marker(source: str) -> str:
    """A placeholder prefix that does not occur anywhere in *source*."""
    marker = _PLACEHOLDER_PREFIX
    while marker in source:
        marker += "X"
    return marker


def _strip_quotes(line: str, depth: int) -> str | None:
    """Remove *depth* blockquote markers, or None if the line has fewer."""
    for _ in range(depth):
        quoted = _QUOTE.match(line)
        if quoted is None:
            return None
        line = line[quoted.end():]
    return line


def _closes(line: str, fence: str) -> bool:
    stripped = line.strip()
    return (
        len(line) - len(line.lstrip(" ")) <= 3
        and len(stripped) >= len(fence)
        and not stripped.strip(fence[0])
    )


def _dedent(line: str, width: int) -> str:
    """Remove up to *width* leading spaces, as fenced content does."""
    strip = min(width, len(line) - len(line.lstrip(" ")))
    return line[strip:]
