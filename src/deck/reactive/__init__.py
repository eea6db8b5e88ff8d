"""Reactive layer — file changes to browser reloads.

Connects the debounced change watcher, the re-render pipeline, the preview
state and the reload broadcaster.
"""

from deck.reactive.broadcaster import Broadcaster, Waiter
from deck.reactive.pipeline import RenderPipeline
from deck.reactive.state import PreviewSnapshot, PreviewState
from deck.reactive.watcher import ChangeWatcher, Debouncer

__all__ = [
    "Broadcaster",
    "ChangeWatcher",
    "Debouncer",
    "PreviewSnapshot",
    "PreviewState",
    "RenderPipeline",
    "Waiter",
]
