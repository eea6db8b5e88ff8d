"""Page assembly — slides, styles and scripts into one HTML document.

The page template is inline so that a rendered deck never depends on
anything outside the returned string.
"""

from __future__ import annotations

import html
from pathlib import Path
from typing import TYPE_CHECKING

from deck._errors import DeckIOError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from deck.render.slides import Slide


_PAGE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
{title}<style>
{style}</style>
</head>
<body>
<main class="deck">
{slides}</main>
<script>
{script}</script>
</body>
</html>
"""

_SLIDE = '<section class="{classes}" id="slide-{number}" data-index="{index}">\n{body}</section>\n'


def assets_path() -> Path:
    """Return the absolute path to the bundled deck assets."""
    return Path(__file__).parent / "assets"


def load_asset(name: str) -> str:
    """Read a bundled asset (``deck.css`` or ``deck.js``)."""
    path = assets_path() / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to read bundled asset {path}: {exc}"
        raise DeckIOError(msg) from exc


def render_slide(slide: Slide, body: str) -> str:
    """Wrap one slide's HTML in its navigable ``<section>``."""
    classes = " ".join(("slide", *slide.classes))
    return _SLIDE.format(
        classes=html.escape(classes),
        number=slide.index + 1,
        index=slide.index,
        body=body if body.endswith("\n") else body + "\n",
    )


def assemble_page(
    *,
    title: str | None,
    styles: Sequence[str | None],
    scripts: Sequence[str | None],
    sections: Sequence[str],
) -> str:
    """Combine the parts into the final document.

    ``styles`` and ``scripts`` are concatenated in order, skipping None, so
    later entries (user CSS/JS) can override earlier ones.
    """
    title_tag = f"<title>{html.escape(title)}</title>\n" if title is not None else ""
    return _PAGE.format(
        title=title_tag,
        style=_join(styles),
        slides="".join(sections),
        script=_join(scripts),
    )


def _join(parts: Sequence[str | None]) -> str:
    return "".join(p if p.endswith("\n") else p + "\n" for p in parts if p)
