"""Slide splitting — markdown source to an ordered list of slides.

A slide separator is a thematic-break line (three or more ``-``, ``*`` or
``_``, nothing else) that opens the document or follows a blank line, and
that sits outside any fenced code block.  The blank-line requirement keeps
setext heading underlines (``Title\\n---``) intact.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_SEPARATOR = re.compile(r"^ {0,3}(?:-{3,}|\*{3,}|_{3,})[ \t]*$")
_FENCE_OPEN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_SLIDE_CLASS = re.compile(r"^\s*<!--\s*class:\s*([\w\- ]+?)\s*-->\s*$")


@dataclass(frozen=True, slots=True)
class Slide:
    """One top-level section of the deck source.

    Attributes:
        index: Zero-based position in the deck.
        markdown: The slide's markdown, separator lines excluded.
        classes: Extra CSS classes requested by a leading
            ``<!-- class: ... -->`` directive.

    """

    index: int
    markdown: str
    classes: tuple[str, ...] = ()


def split_slides(source: str) -> list[Slide]:
    """Split *source* into slides, preserving source order.

    N separators always produce N + 1 slides, including empty ones.
    """
    chunks: list[list[str]] = [[]]
    fence: str | None = None
    previous_blank = True

    for line in source.splitlines():
        if fence is not None:
            chunks[-1].append(line)
            if _closes_fence(line, fence):
                fence = None
            previous_blank = False
            continue

        opened = _FENCE_OPEN.match(line)
        if opened and not (opened.group(1)[0] == "`" and "`" in opened.group(2)):
            fence = opened.group(1)
            chunks[-1].append(line)
            previous_blank = False
            continue

        if previous_blank and _SEPARATOR.match(line):
            chunks.append([])
            previous_blank = True
            continue

        chunks[-1].append(line)
        previous_blank = not line.strip()

    return [_make_slide(i, lines) for i, lines in enumerate(chunks)]


def _closes_fence(line: str, fence: str) -> bool:
    stripped = line.strip()
    return (
        len(line) - len(line.lstrip(" ")) <= 3
        and stripped.startswith(fence[0] * len(fence))
        and not stripped.strip(fence[0])
    )


def _make_slide(index: int, lines: list[str]) -> Slide:
    classes: tuple[str, ...] = ()
    # The first non-blank line may carry a class directive.
    for i, line in enumerate(lines):
        if not line.strip():
            continue
        directive = _SLIDE_CLASS.match(line)
        if directive:
            classes = tuple(directive.group(1).split())
            lines = lines[:i] + lines[i + 1:]
        break
    return Slide(index=index, markdown="\n".join(lines).strip("\n") + "\n", classes=classes)
