"""Shared test fixtures for deck."""

from __future__ import annotations

import plistlib
from pathlib import Path
from typing import Any

import pytest

SAMPLE_DECK = """\
# Welcome

First slide.

---

## Code

```python
def greet(name):
    return f"hello {name}"
```

---

Last slide
"""


@pytest.fixture
def deck_dir(tmp_path: Path) -> Path:
    """A directory with a three-slide deck plus custom css and js.

    Files: ``talk.md``, ``style.css``, ``extra.js``.
    """
    (tmp_path / "talk.md").write_text(SAMPLE_DECK, encoding="utf-8")
    (tmp_path / "style.css").write_text(".slide h1 { color: rebeccapurple; }\n")
    (tmp_path / "extra.js").write_text("window.deckExtraLoaded = true;\n")
    return tmp_path


@pytest.fixture
def theme_dir(tmp_path: Path) -> Path:
    """A theme directory holding one valid ``.tmTheme`` named ``solarpunk``."""
    directory = tmp_path / "themes"
    directory.mkdir()
    write_tmtheme(directory / "solarpunk.tmTheme", keyword="#ff0000")
    return directory


def make_tmtheme_data(
    *,
    background: str = "#101010",
    foreground: str = "#eeeeee",
    keyword: str = "#ff0000",
    comment: str = "#777777",
    extra: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build the dictionary form of a small TextMate theme."""
    settings: list[dict[str, Any]] = [
        {"settings": {"background": background, "foreground": foreground}},
        {"name": "Comment", "scope": "comment", "settings": {
            "foreground": comment, "fontStyle": "italic",
        }},
        {"name": "Keyword", "scope": "keyword, storage.type", "settings": {
            "foreground": keyword, "fontStyle": "bold",
        }},
    ]
    settings.extend(extra or [])
    return {"name": "Test Theme", "settings": settings}


def write_tmtheme(path: Path, **kwargs: Any) -> Path:
    """Write a ``.tmTheme`` property list built by :func:`make_tmtheme_data`."""
    with path.open("wb") as fh:
        plistlib.dump(make_tmtheme_data(**kwargs), fh)
    return path
