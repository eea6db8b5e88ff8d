"""Preview state — the last good page and the render generation.

Held as one immutable snapshot behind a single reference.  The re-render
routine is the only writer and replaces the whole snapshot; HTTP handlers
read ``state.snapshot`` once and use that consistent view.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from deck._types import Generation


@dataclass(frozen=True, slots=True)
class PreviewSnapshot:
    """One published view of the preview state.

    Attributes:
        page: The last successfully rendered page.
        generation: Number of render attempts since startup.
        error: Message of the latest attempt if it failed, else None.

    """

    page: str
    generation: Generation = 0
    error: str | None = None


class PreviewState:
    """Owns the current PreviewSnapshot for one server lifetime."""

    __slots__ = ("_snapshot", "_watch_set")

    def __init__(self, page: str, watch_set: Iterable[Path] = ()) -> None:
        self._snapshot = PreviewSnapshot(page=page)
        self._watch_set = tuple(watch_set)

    @property
    def snapshot(self) -> PreviewSnapshot:
        return self._snapshot

    @property
    def generation(self) -> Generation:
        return self._snapshot.generation

    @property
    def last_good_page(self) -> str:
        return self._snapshot.page

    @property
    def watch_set(self) -> tuple[Path, ...]:
        return self._watch_set

    def publish_success(self, page: str) -> PreviewSnapshot:
        """Advance the generation and replace the page."""
        self._snapshot = PreviewSnapshot(page=page, generation=self._snapshot.generation + 1)
        return self._snapshot

    def publish_failure(self, error: str) -> PreviewSnapshot:
        """Advance the generation, keeping the last good page."""
        self._snapshot = replace(
            self._snapshot, generation=self._snapshot.generation + 1, error=error,
        )
        return self._snapshot
