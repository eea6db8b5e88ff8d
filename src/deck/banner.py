"""Startup banner — mode-aware status output.

Prints a short banner with timing and status indicators to stderr.
Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from deck._types import DeckMode
    from deck.config import DeckConfig


# ---------------------------------------------------------------------------
# ANSI helpers, respecting NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""

_MODE_STYLES: dict[str, tuple[str, str]] = {
    "build": (_YELLOW, "build"),
    "serve": (_CYAN, "serve"),
}


def _mode_badge(mode: DeckMode) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _clickable_url(url: str) -> str:
    """Wrap *url* in an OSC 8 hyperlink escape if the terminal supports it."""
    if not _COLOR:
        return url
    return f"\033]8;;{url}\033\\{_BOLD}{_CYAN}{url}{_RESET}\033]8;;\033\\"


def _header(mode: DeckMode) -> list[str]:
    from deck import __version__

    return [
        "",
        f"  {_BOLD}deck{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: DeckConfig,
    *,
    theme: str | None = None,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the ``deck serve`` startup banner to stderr.

    Args:
        config: Resolved DeckConfig.
        theme: Requested theme name (None for the default).
        load_ms: Time spent building the renderer and first page.
        warnings: Optional list of warning messages to display.

    """
    from deck.reactive.reload import WAIT_ENDPOINT
    from deck.theme import DEFAULT_THEME

    lines = _header("serve")

    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {config.input} rendered{timing}")
    lines.append(f"  {_DIM}├─{_RESET} theme: {theme or DEFAULT_THEME}")
    for label, path in (("css", config.css), ("js", config.js)):
        if path is not None:
            lines.append(f"  {_DIM}├─{_RESET} {label}: {_DIM}{path}{_RESET}")

    if config.watch:
        lines.append(
            f"  {_DIM}└─{_RESET} {_GREEN}live{_RESET} "
            f"— reload on {_DIM}{WAIT_ENDPOINT}{_RESET}"
        )
    else:
        lines.append(f"  {_DIM}└─{_RESET} static {_DIM}(pass --watch to reload on change){_RESET}")

    url = f"http://{config.host}:{config.port}"
    lines.append("")
    lines.append(f"  {_clickable_url(url)}")

    if config.watch:
        lines.append("")
        lines.append(f"  {_DIM}Watching for changes...{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")
    print("\n".join(lines), file=sys.stderr)


def print_build_summary(config: DeckConfig, size: int, duration_ms: float) -> None:
    """Print the ``deck build`` completion summary to stderr."""
    lines = _header("build")
    lines.append(f"  {_DIM}├─{_RESET} {size:,} bytes")
    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output}{_RESET}")
    lines.append(f"  Done in {duration_ms:.0f}ms")
    lines.append("")
    print("\n".join(lines), file=sys.stderr)
