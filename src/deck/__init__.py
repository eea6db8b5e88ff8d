"""deck — markdown to self-contained HTML slide decks.

Renders a markdown document into a single portable HTML file with
syntax-highlighted code, or serves it locally with live reload.

Quick start::

    import deck

    deck.build("talk.md", output="talk.html")
    deck.serve("talk.md", watch=True)

Slides are separated by a thematic break (``---``) on its own line after a
blank line.  Fenced code blocks are highlighted with a Pygments style or a
TextMate ``.tmTheme`` from a ``--theme-dir``.

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "DeckConfig",
    "Document",
    "RenderOptions",
    "Renderer",
    "__version__",
    "build",
    "serve",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import deck`` fast: Pygments, Patitas and Chirp load on first use.
    """
    if name == "DeckConfig":
        from deck.config import DeckConfig

        return DeckConfig

    if name == "RenderOptions":
        from deck.config import RenderOptions

        return RenderOptions

    if name == "Document":
        from deck.render.renderer import Document

        return Document

    if name == "Renderer":
        from deck.render.renderer import Renderer

        return Renderer

    if name == "build":
        from deck.app import build

        return build

    if name == "serve":
        from deck.app import serve

        return serve

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
