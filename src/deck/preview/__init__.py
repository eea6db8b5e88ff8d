"""Preview layer — the live ``deck serve`` server and its routes."""

from deck.preview.router import PreviewRouter
from deck.preview.server import PreviewServer

__all__ = [
    "PreviewRouter",
    "PreviewServer",
]
