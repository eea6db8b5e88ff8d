"""Renderer — markdown deck source to one self-contained HTML page.

Construction does all filesystem work (theme catalog, bundled assets) and
resolves the active theme once.  ``render`` is a pure function of its
Document: no state is kept between calls and identical input produces
byte-identical output.

Thread Safety:
    A Renderer holds only read-only state after construction.  ``render``
    may run in a worker thread.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from deck.render.markdown import CodeHighlighter, SlideMarkdown
from deck.render.minify import minify_html
from deck.render.page import assemble_page, load_asset, render_slide
from deck.render.slides import split_slides
from deck.theme import load_catalog, resolve_theme

if TYPE_CHECKING:
    from pygments.style import Style

    from deck.config import RenderOptions
    from deck.theme import ThemeCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Document:
    """One render's input.

    Attributes:
        markdown: Deck source.
        css: Extra stylesheet appended after the theme rules.
        js: Extra script appended after the navigation logic.

    """

    markdown: str
    css: str | None = None
    js: str | None = None


class Renderer:
    """Renders Documents with a fixed set of RenderOptions.

    Args:
        options: Title, theme selection, theme directories, minification.

    Raises:
        ThemeLoadError: If a theme directory or file cannot be loaded.
        ThemeNotFoundError: If ``options.theme`` names an unknown theme.

    """

    def __init__(self, options: RenderOptions) -> None:
        self._options = options
        self._catalog = load_catalog(options.theme_dirs)
        self._theme = resolve_theme(self._catalog, options.theme)
        highlighter = CodeHighlighter(self._theme)
        self._markdown = SlideMarkdown(highlighter)
        self._base_css = load_asset("deck.css")
        self._theme_css = highlighter.stylesheet()
        self._base_js = load_asset("deck.js")
        logger.debug(
            "Renderer ready: theme=%s (%s), %d themes in catalog",
            options.theme or "default",
            self._theme.__name__,
            len(self._catalog),
        )

    @property
    def options(self) -> RenderOptions:
        return self._options

    @property
    def catalog(self) -> ThemeCatalog:
        return self._catalog

    @property
    def theme(self) -> type[Style]:
        """The resolved highlighting style."""
        return self._theme

    def render(self, doc: Document) -> str:
        """Render *doc* to a complete HTML page.

        Raises:
            MinificationError: If minification is enabled and the assembled
                markup is unbalanced (for example a stray ``</style>`` in
                user CSS or unclosed raw HTML in the markdown).

        """
        slides = split_slides(doc.markdown)
        sections = [render_slide(s, self._markdown.convert(s.markdown)) for s in slides]

        page = assemble_page(
            title=self._options.title,
            styles=(self._base_css, self._theme_css, doc.css),
            scripts=(self._base_js, doc.js),
            sections=sections,
        )
        if self._options.minify:
            page = minify_html(page)
        logger.debug("Rendered %d slides (%d bytes)", len(slides), len(page))
        return page
