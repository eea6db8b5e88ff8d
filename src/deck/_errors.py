"""Deck error hierarchy.

All deck-specific errors inherit from DeckError for easy catching.
"""


class DeckError(Exception):
    """Base error for all deck operations."""


class DeckIOError(DeckError):
    """A source, stylesheet, script or output file could not be read or written."""


class ConfigError(DeckError):
    """Invalid or unreadable project configuration."""


class ThemeLoadError(DeckError):
    """A theme directory or theme definition file could not be loaded."""


class ThemeNotFoundError(DeckError):
    """The requested theme name is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Theme not found: {name!r}")


class MinificationError(DeckError):
    """The assembled page could not be minified safely."""


class WatchError(DeckError):
    """A filesystem watch could not be established on a required path."""


class ReactiveError(DeckError):
    """Internal failure in the preview plumbing (tasks, queues, lifecycle)."""
