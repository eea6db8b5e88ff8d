"""Render layer — markdown deck source to a self-contained HTML page.

Splits the source into slides, converts each with Patitas, highlights
fenced code with Pygments, and inlines every stylesheet and script.
"""

from deck.render.renderer import Document, Renderer
from deck.render.slides import Slide, split_slides

__all__ = [
    "Document",
    "Renderer",
    "Slide",
    "split_slides",
]
