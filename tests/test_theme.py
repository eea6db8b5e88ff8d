"""Tests for deck.theme — catalog loading and theme resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from pygments.styles import get_all_styles, get_style_by_name
from pygments.token import Keyword

from deck._errors import ThemeLoadError, ThemeNotFoundError
from deck.theme import DEFAULT_THEME, ThemeCatalog, load_catalog, resolve_theme

from .conftest import write_tmtheme


# ---------------------------------------------------------------------------
# load_catalog
# ---------------------------------------------------------------------------


class TestLoadCatalog:
    """Built-in themes plus user directories."""

    def test_builtins_present(self) -> None:
        catalog = load_catalog()
        assert set(get_all_styles()) <= set(catalog)
        assert DEFAULT_THEME in catalog

    def test_builtin_source(self) -> None:
        assert load_catalog().source("monokai") == "builtin"

    def test_user_theme_added(self, theme_dir: Path) -> None:
        catalog = load_catalog([theme_dir])
        assert "solarpunk" in catalog
        assert catalog.source("solarpunk") == str(theme_dir / "solarpunk.tmTheme")

    def test_non_theme_files_ignored(self, theme_dir: Path) -> None:
        (theme_dir / "README.txt").write_text("not a theme")
        catalog = load_catalog([theme_dir])
        assert "README" not in catalog

    def test_user_theme_overrides_builtin(self, tmp_path: Path) -> None:
        write_tmtheme(tmp_path / "monokai.tmTheme", keyword="#123456")
        catalog = load_catalog([tmp_path])
        assert catalog["monokai"] is not get_style_by_name("monokai")
        assert catalog["monokai"].style_for_token(Keyword)["color"] == "123456"

    def test_later_directory_wins(self, tmp_path: Path) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        write_tmtheme(first / "shared.tmTheme", keyword="#111111")
        write_tmtheme(second / "shared.tmTheme", keyword="#222222")

        catalog = load_catalog([first, second])
        assert catalog["shared"].style_for_token(Keyword)["color"] == "222222"
        assert catalog.source("shared") == str(second / "shared.tmTheme")

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ThemeLoadError, match="not found"):
            load_catalog([tmp_path / "nope"])

    def test_malformed_theme_raises(self, theme_dir: Path) -> None:
        (theme_dir / "broken.tmTheme").write_text("this is not a plist")
        with pytest.raises(ThemeLoadError, match="broken.tmTheme"):
            load_catalog([theme_dir])

    def test_names_sorted(self, theme_dir: Path) -> None:
        names = load_catalog([theme_dir]).names()
        assert names == sorted(names)
        assert "solarpunk" in names


# ---------------------------------------------------------------------------
# ThemeCatalog
# ---------------------------------------------------------------------------


class TestThemeCatalog:
    """ThemeCatalog — read-only mapping."""

    def test_read_only(self) -> None:
        catalog = ThemeCatalog({"a": get_style_by_name("default")})
        with pytest.raises(TypeError):
            catalog["b"] = get_style_by_name("default")  # type: ignore[index]

    def test_source_defaults_to_builtin(self) -> None:
        catalog = ThemeCatalog({"a": get_style_by_name("default")})
        assert catalog.source("a") == "builtin"
        assert len(catalog) == 1


# ---------------------------------------------------------------------------
# resolve_theme
# ---------------------------------------------------------------------------


class TestResolveTheme:
    """Theme selection by name."""

    def test_none_selects_default(self) -> None:
        catalog = load_catalog()
        assert resolve_theme(catalog, None) is catalog[DEFAULT_THEME]

    def test_named_builtin(self) -> None:
        catalog = load_catalog()
        assert resolve_theme(catalog, "native") is get_style_by_name("native")

    def test_unknown_raises(self) -> None:
        with pytest.raises(ThemeNotFoundError) as exc_info:
            resolve_theme(load_catalog(), "no-such-theme")
        assert exc_info.value.name == "no-such-theme"

    def test_case_sensitive(self) -> None:
        with pytest.raises(ThemeNotFoundError):
            resolve_theme(load_catalog(), "Monokai")
