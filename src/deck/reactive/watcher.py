"""File watcher — debounced change notifications for the deck sources.

Watches a fixed set of files (markdown, optional css, optional js).  Editors
emit bursts of events per save (write, rename, delete-and-recreate), so raw
events only re-arm a quiet-period timer; the callback runs once the timer
elapses with no further events.

Flow:
    watchfiles.awatch (parent dirs) -> filter to watched files
        -> Debouncer.trigger() -> quiet period -> on_change()
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from deck._errors import WatchError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from watchfiles import Change

    from deck._types import ChangeCallback

logger = logging.getLogger(__name__)

# Quiet period before a burst of events is considered finished.
DEFAULT_DELAY = 0.2

# Pause before re-establishing the watch after an OS-level error.
_RETRY_DELAY = 1.0


class Debouncer:
    """Restartable timer that coalesces triggers into one callback.

    Every :meth:`trigger` cancels the pending timer and schedules a new one
    *delay* seconds out.  Only the timer firing runs the callback.  Must be
    used from within a running event loop.

    """

    def __init__(self, delay: float, callback: ChangeCallback) -> None:
        self._delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """Whether a timer is armed and has not fired yet."""
        return self._handle is not None

    def trigger(self) -> None:
        """Arm, or re-arm, the quiet-period timer."""
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        """Disarm the timer without running the callback."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def aclose(self) -> None:
        """Disarm the timer and cancel any callback still running."""
        self.cancel()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def _fire(self) -> None:
        self._handle = None
        task = asyncio.get_running_loop().create_task(self._run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self) -> None:
        try:
            await self._callback()
        except Exception:
            logger.exception("Change handler failed")


class ChangeWatcher:
    """Watches deck source files and reports debounced changes.

    The parent directory of each file is watched (non-recursively) rather
    than the file itself, so atomic saves that delete and recreate the file
    are still seen as a change.  Events for other files in those
    directories are ignored.

    Args:
        paths: Files to watch.  Each must exist when :meth:`start` is called.
        on_change: Coroutine function run once per burst of changes.
        delay: Quiet period in seconds.

    """

    def __init__(
        self,
        paths: Iterable[Path],
        on_change: ChangeCallback,
        *,
        delay: float = DEFAULT_DELAY,
    ) -> None:
        self._paths = frozenset(Path(p).resolve() for p in paths)
        self._debouncer = Debouncer(delay, on_change)
        self._stop_event: asyncio.Event | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def paths(self) -> frozenset[Path]:
        """Resolved paths of the watched files."""
        return self._paths

    @property
    def is_running(self) -> bool:
        """Whether the watch task is active."""
        return self._task is not None and not self._task.done()

    def check_paths(self) -> None:
        """Raise WatchError unless every watched file currently exists."""
        if not self._paths:
            raise WatchError("No files to watch")
        for path in sorted(self._paths):
            if not path.is_file():
                msg = f"Cannot watch {path}: file does not exist"
                raise WatchError(msg)

    def is_watched(self, path: str | Path) -> bool:
        return Path(path).resolve() in self._paths

    def start(self) -> None:
        """Start the watch task on the running event loop.

        Raises:
            WatchError: If a watched file does not exist.

        """
        if self.is_running:
            return
        self.check_paths()
        self._stop_event = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(
            self._watch_loop(), name="deck-watcher",
        )
        logger.debug("Watching %s", ", ".join(str(p) for p in sorted(self._paths)))

    async def stop(self) -> None:
        """Stop watching, cancelling a pending debounce or in-flight callback."""
        if self._stop_event is not None:
            self._stop_event.set()
        self._debouncer.cancel()
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        await self._debouncer.aclose()

    def handle_changes(self, changes: Iterable[tuple[Change, str]]) -> int:
        """Feed a batch of raw filesystem events; returns how many were relevant."""
        relevant = 0
        for change, path in changes:
            if self.is_watched(path):
                logger.debug("%s: %s", change.name, path)
                relevant += 1
        if relevant:
            self._debouncer.trigger()
        return relevant

    def _watch_filter(self, change: Change, path: str) -> bool:
        return self.is_watched(path)

    async def _watch_loop(self) -> None:
        from watchfiles import awatch

        assert self._stop_event is not None
        directories = sorted({str(p.parent) for p in self._paths})

        while not self._stop_event.is_set():
            try:
                async for changes in awatch(
                    *directories,
                    watch_filter=self._watch_filter,
                    stop_event=self._stop_event,
                    recursive=False,
                    debounce=100,
                    step=20,
                ):
                    self.handle_changes(changes)
            except Exception:
                logger.exception("File watcher error; retrying in %.0fs", _RETRY_DELAY)
                await asyncio.sleep(_RETRY_DELAY)
            else:
                break
