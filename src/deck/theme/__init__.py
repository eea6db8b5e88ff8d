"""Deck theme catalog — built-in and user highlighting themes.

Built-in themes are every style Pygments ships.  User directories add
``.tmTheme`` files on top, in order, so a later directory overrides an
earlier one (and any built-in) on a name collision.

Thread Safety:
    A loaded catalog is a read-only mapping.  Safe for free-threading.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from pygments.style import Style
from pygments.styles import get_all_styles, get_style_by_name
from pygments.util import ClassNotFound

from deck._errors import ThemeLoadError, ThemeNotFoundError
from deck.theme.tmtheme import THEME_SUFFIX, load_tmtheme

DEFAULT_THEME = "monokai"

__all__ = [
    "DEFAULT_THEME",
    "ThemeCatalog",
    "load_catalog",
    "resolve_theme",
]


class ThemeCatalog(Mapping[str, type[Style]]):
    """Immutable mapping of theme name to Pygments Style class.

    Also records where each theme came from (``"builtin"`` or the file path)
    for diagnostics.

    """

    __slots__ = ("_sources", "_themes")

    def __init__(
        self,
        themes: Mapping[str, type[Style]],
        sources: Mapping[str, str] | None = None,
    ) -> None:
        self._themes = MappingProxyType(dict(themes))
        self._sources = MappingProxyType(dict(sources or {}))

    def __getitem__(self, name: str) -> type[Style]:
        return self._themes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._themes)

    def __len__(self) -> int:
        return len(self._themes)

    def names(self) -> list[str]:
        """All theme names, sorted."""
        return sorted(self._themes)

    def source(self, name: str) -> str:
        """Where *name* was loaded from: ``"builtin"`` or a file path."""
        return self._sources.get(name, "builtin")


def _builtin_themes() -> dict[str, type[Style]]:
    themes: dict[str, type[Style]] = {}
    for name in get_all_styles():
        try:
            themes[name] = get_style_by_name(name)
        except ClassNotFound as exc:
            # A style plugin advertised by entry points failed to import.
            msg = f"Failed to load built-in theme {name!r}: {exc}"
            raise ThemeLoadError(msg) from exc
    return themes


def load_catalog(theme_dirs: Iterable[Path] = ()) -> ThemeCatalog:
    """Load built-in themes, then every ``.tmTheme`` in *theme_dirs* in order.

    Files within a directory are read in sorted name order so that the
    result does not depend on directory listing order.

    Raises:
        ThemeLoadError: If a directory cannot be listed or any theme file
            is malformed.  No partial catalog is returned.

    """
    themes = _builtin_themes()
    sources: dict[str, str] = {}

    for directory in theme_dirs:
        directory = Path(directory)
        if not directory.is_dir():
            msg = f"Theme directory not found: {directory}"
            raise ThemeLoadError(msg)
        try:
            files = sorted(p for p in directory.iterdir() if p.suffix == THEME_SUFFIX)
        except OSError as exc:
            msg = f"Failed to list theme directory {directory}: {exc}"
            raise ThemeLoadError(msg) from exc

        for path in files:
            themes[path.stem] = load_tmtheme(path)
            sources[path.stem] = str(path)

    return ThemeCatalog(themes, sources)


def resolve_theme(catalog: ThemeCatalog, name: str | None) -> type[Style]:
    """Select the theme named *name*, or the default theme when None.

    Raises:
        ThemeNotFoundError: If *name* is given and not in the catalog
            (lookup is case-sensitive).

    """
    if name is None:
        return catalog[DEFAULT_THEME]
    try:
        return catalog[name]
    except KeyError:
        raise ThemeNotFoundError(name) from None
