"""Deck configuration.

RenderOptions drives a single Renderer; DeckConfig is the full settings
object for ``deck build`` / ``deck serve``.  Both are frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from deck._types import SourcePath, ThemeName


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Options fixed for the lifetime of a Renderer.

    Attributes:
        title: Text for the page ``<title>``; omitted from the page when None.
        theme: Name of the highlighting theme; None selects the default theme.
        theme_dirs: Directories searched for extra ``.tmTheme`` files, in
            priority order (later directories win on name collisions).
        minify: Collapse inter-tag whitespace and validate tag balance.

    """

    title: str | None = None
    theme: ThemeName | None = None
    theme_dirs: tuple[Path, ...] = ()
    minify: bool = True

    def __post_init__(self) -> None:
        # Accept any iterable of str/Path, store an immutable tuple of Paths.
        object.__setattr__(self, "theme_dirs", tuple(Path(d) for d in self.theme_dirs))


@dataclass(frozen=True, slots=True)
class DeckConfig:
    """Configuration for a deck build or preview server.

    Attributes:
        input: Markdown source.  None means standard input (build only).
        output: Destination HTML file.  None means standard output (build only).
        host: Bind address for the preview server.
        port: Bind port for the preview server.
        watch: Re-render when the markdown, css or js file changes.
        title: Page title override.
        theme: Highlighting theme name.
        theme_dirs: Extra theme directories, in priority order.
        css: File whose contents are appended to the page stylesheet.
        js: File whose contents are appended to the page script.
        minify: Minify the rendered page.

    """

    input: Path | None = None
    output: Path | None = None
    host: str = "127.0.0.1"
    port: int = 8000
    watch: bool = False
    title: str | None = None
    theme: ThemeName | None = None
    theme_dirs: tuple[Path, ...] = field(default_factory=tuple)
    css: Path | None = None
    js: Path | None = None
    minify: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "theme_dirs", tuple(Path(d) for d in self.theme_dirs))
        for name in ("input", "output", "css", "js"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Path):
                object.__setattr__(self, name, Path(value))

    @property
    def render_options(self) -> RenderOptions:
        """The subset of settings a Renderer needs."""
        return RenderOptions(
            title=self.title,
            theme=self.theme,
            theme_dirs=self.theme_dirs,
            minify=self.minify,
        )

    @property
    def watch_paths(self) -> tuple[SourcePath, ...]:
        """Source files to watch: markdown, then css and js when configured."""
        return tuple(p for p in (self.input, self.css, self.js) if p is not None)
