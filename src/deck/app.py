"""Deck application — the build and serve entry points.

``build`` renders once and writes the page.  ``serve`` wraps a
PreviewServer in a Chirp app run by Pounce, with the watcher tied to the
app's startup and shutdown hooks.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from deck.config_loader import load_config
from deck.render.renderer import Renderer
from deck.sources import read_document, write_page

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chirp import App

    from deck.config import DeckConfig
    from deck.preview.server import PreviewServer

logger = logging.getLogger(__name__)


def _config_dir(markdown: str | Path | None) -> Path | None:
    """Directory searched for deck.toml / deck.yaml: the markdown file's own."""
    if markdown is None:
        return None
    return Path(markdown).resolve().parent


def render_page(config: DeckConfig) -> str:
    """Render the deck described by *config* (markdown from stdin if no input)."""
    renderer = Renderer(config.render_options)
    doc = read_document(config.input, config.css, config.js)
    return renderer.render(doc)


def _create_chirp_app(server: PreviewServer) -> App:
    """Create a Chirp App serving *server*'s routes.

    Chirp wants a template directory even though every page here is
    rendered by deck itself; the bundled assets directory stands in.

    """
    from chirp import App, AppConfig

    from deck.preview.router import PreviewRouter
    from deck.render.page import assets_path

    app_config = AppConfig(
        template_dir=assets_path(),
        debug=True,
        host=server.config.host,
        port=server.config.port,
    )
    app = App(config=app_config)
    PreviewRouter(server, app).register()
    return app


def _wire_lifecycle(server: PreviewServer, app: App) -> None:
    """Start the watcher with the app and release waiters when it stops.

    Flow:
        on_startup  -> server.start() (watch task joins the server's loop)
        file change -> debounced re-render -> waiters woken
        on_shutdown -> server.stop() (watch task cancelled, waiters get 503)

    """

    @app.on_startup
    async def _start_preview() -> None:
        await server.start()

    @app.on_shutdown
    async def _stop_preview() -> None:
        await server.stop()


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def build(markdown: str | Path | None = None, **kwargs: object) -> str:
    """Render a deck to a self-contained HTML file.

    Args:
        markdown: Markdown source file; None reads standard input.
        **kwargs: Override DeckConfig fields (``output`` None writes to
            standard output).

    Returns:
        The rendered page.

    Raises:
        DeckError: Any failure; nothing is written in that case.

    """
    from deck.banner import print_build_summary

    config = load_config(_config_dir(markdown), input=markdown, **kwargs)
    logger.debug("Config: %s", config)
    t0 = time.perf_counter()
    page = render_page(config)
    write_page(page, config.output)
    if config.output is not None:
        print_build_summary(config, len(page), (time.perf_counter() - t0) * 1000)
    return page


def serve(markdown: str | Path, **kwargs: object) -> None:
    """Serve a deck with live reload.

    Args:
        markdown: Markdown source file.
        **kwargs: Override DeckConfig fields.

    Raises:
        DeckError: Startup failed (theme, first render or watch setup).

    """
    from deck.banner import print_banner
    from deck.preview.server import PreviewServer

    config = load_config(_config_dir(markdown), input=markdown, **kwargs)
    logger.debug("Config: %s", config)
    t0 = time.perf_counter()

    server = PreviewServer(config)
    app = _create_chirp_app(server)
    _wire_lifecycle(server, app)

    load_ms = (time.perf_counter() - t0) * 1000
    print_banner(config, theme=config.theme, load_ms=load_ms)

    app.run(host=config.host, port=config.port)


def list_themes(theme_dirs: Iterable[str | Path] = ()) -> list[tuple[str, str]]:
    """``(name, source)`` for every theme available with *theme_dirs*, by name.

    The source is ``"builtin"`` or the ``.tmTheme`` path the theme came from.
    """
    from deck.theme import load_catalog

    catalog = load_catalog(Path(d) for d in theme_dirs)
    return [(name, catalog.source(name)) for name in catalog.names()]

