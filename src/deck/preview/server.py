"""Preview server — lifecycle of one ``deck serve`` session.

Phases::

    starting -> serving <-> (re-rendering) -> stopping -> stopped

Construction is the ``starting`` phase: it builds the Renderer, renders the
first page and checks the watch set, raising on any failure so that no
listener is ever opened for a broken configuration.  Re-rendering happens
inside ``serving`` whenever the watcher fires.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from deck._errors import ConfigError, ReactiveError
from deck.reactive.broadcaster import Broadcaster
from deck.reactive.pipeline import RenderPipeline, render_sources
from deck.reactive.state import PreviewState
from deck.reactive.watcher import DEFAULT_DELAY, ChangeWatcher
from deck.render.renderer import Renderer

if TYPE_CHECKING:
    from deck.config import DeckConfig

logger = logging.getLogger(__name__)

type Phase = Literal["starting", "serving", "stopping", "stopped"]


class PreviewServer:
    """Owns the renderer, preview state, broadcaster and watcher.

    Args:
        config: Deck settings; ``config.input`` is required.
        delay: Watcher quiet period in seconds.

    Raises:
        ConfigError: ``config.input`` is not set.
        ThemeLoadError, ThemeNotFoundError: Renderer construction failed.
        DeckIOError, MinificationError: The first render failed.
        WatchError: ``config.watch`` is set and a source file is missing.

    """

    def __init__(self, config: DeckConfig, *, delay: float = DEFAULT_DELAY) -> None:
        if config.input is None:
            raise ConfigError("deck serve requires an input markdown file")
        self._phase: Phase = "starting"
        self._config = config
        self._renderer = Renderer(config.render_options)
        self._broadcaster = Broadcaster()

        self._state = PreviewState(
            render_sources(self._renderer, config), watch_set=config.watch_paths,
        )
        self._pipeline = RenderPipeline(self._renderer, config, self._state, self._broadcaster)

        self._watcher: ChangeWatcher | None = None
        if config.watch:
            self._watcher = ChangeWatcher(
                config.watch_paths, self._pipeline.handle_change, delay=delay,
            )
            self._watcher.check_paths()

    @property
    def config(self) -> DeckConfig:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    @property
    def state(self) -> PreviewState:
        return self._state

    @property
    def broadcaster(self) -> Broadcaster:
        return self._broadcaster

    @property
    def pipeline(self) -> RenderPipeline:
        return self._pipeline

    @property
    def watcher(self) -> ChangeWatcher | None:
        return self._watcher

    async def start(self) -> None:
        """Enter ``serving``; starts the watcher when watching is enabled.

        Raises:
            ReactiveError: If the server has already been stopped.

        """
        if self._phase in ("stopping", "stopped"):
            msg = f"Cannot start a preview server that is {self._phase}"
            raise ReactiveError(msg)
        if self._phase != "starting":
            return
        if self._watcher is not None:
            self._watcher.start()
        self._phase = "serving"
        logger.debug("Preview server serving (watch=%s)", self._watcher is not None)

    async def stop(self) -> None:
        """Tear down the watcher and release every pending waiter."""
        if self._phase in ("stopping", "stopped"):
            return
        self._phase = "stopping"
        try:
            if self._watcher is not None:
                await self._watcher.stop()
        finally:
            released = self._broadcaster.close()
            self._phase = "stopped"
            logger.debug("Preview server stopped, released %d waiter(s)", released)
