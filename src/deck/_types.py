"""Shared type definitions for deck."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from pathlib import Path

# Mode of operation
type DeckMode = Literal["build", "serve"]

# Name of a highlighting theme (case-sensitive)
type ThemeName = str

# A watched source file (markdown, css or js)
type SourcePath = Path

# Counter of attempted render cycles in the preview server
type Generation = int

# Waiter identifier
type ClientID = str

# Callback fired once per debounced burst of file changes
type ChangeCallback = Callable[[], Awaitable[None]]
