"""Re-render pipeline — connects the change watcher to the broadcaster.

On every debounced change:
    1. Re-read the markdown, css and js files from disk
    2. Render in a worker thread (the event loop keeps serving)
    3. Publish: new page on success, same page plus error on failure;
       the generation advances either way
    4. Wake every pending ``/wait`` connection

This is the only writer of PreviewState.  Failures never propagate: the
browser keeps seeing the last good page and the error is logged.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from deck._errors import DeckError
from deck.sources import read_document

if TYPE_CHECKING:
    from deck.config import DeckConfig
    from deck.reactive.broadcaster import Broadcaster
    from deck.reactive.state import PreviewSnapshot, PreviewState
    from deck.render.renderer import Renderer

logger = logging.getLogger(__name__)


def render_sources(renderer: Renderer, config: DeckConfig) -> str:
    """Read the sources named by *config* and render them (may raise DeckError)."""
    doc = read_document(config.input, config.css, config.js)
    return renderer.render(doc)


class RenderPipeline:
    """Re-renders the deck and publishes the result.

    Args:
        renderer: Renderer built at startup (theme already resolved).
        config: Source file locations.
        state: PreviewState to publish into.
        broadcaster: Broadcaster whose waiters are woken after each attempt.

    """

    def __init__(
        self,
        renderer: Renderer,
        config: DeckConfig,
        state: PreviewState,
        broadcaster: Broadcaster,
    ) -> None:
        self._renderer = renderer
        self._config = config
        self._state = state
        self._broadcaster = broadcaster
        # Serializes render cycles so snapshots publish in order.
        self._lock = asyncio.Lock()

    async def handle_change(self) -> PreviewSnapshot:
        """Run one render cycle and wake all waiters."""
        async with self._lock:
            t0 = time.perf_counter()
            try:
                page = await asyncio.to_thread(render_sources, self._renderer, self._config)
            except DeckError as exc:
                snapshot = self._state.publish_failure(str(exc))
                logger.error(
                    "Render failed (generation %d), keeping last good page: %s [sources: %s]",
                    snapshot.generation, exc, self._sources(),
                )
            except Exception as exc:
                snapshot = self._state.publish_failure(f"{type(exc).__name__}: {exc}")
                logger.exception(
                    "Unexpected render error (generation %d) [sources: %s]",
                    snapshot.generation, self._sources(),
                )
            else:
                snapshot = self._state.publish_success(page)
                logger.info(
                    "Rendered generation %d in %.0fms",
                    snapshot.generation, (time.perf_counter() - t0) * 1000,
                )

            woken = self._broadcaster.broadcast()
            logger.debug("Woke %d waiting client(s)", woken)
            return snapshot

    def _sources(self) -> str:
        return ", ".join(str(p) for p in self._config.watch_paths)
