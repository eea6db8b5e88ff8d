"""Tests for deck.theme.tmtheme — TextMate theme conversion."""

from __future__ import annotations

import plistlib
from pathlib import Path

import pytest
from pygments.style import Style
from pygments.token import Comment, Keyword, Name, String, Token

from deck._errors import ThemeLoadError
from deck.theme.tmtheme import load_tmtheme, style_from_plist

from .conftest import make_tmtheme_data, write_tmtheme


class TestStyleFromPlist:
    """Conversion of parsed theme data to a Pygments Style."""

    def test_returns_style_subclass(self) -> None:
        style = style_from_plist(make_tmtheme_data(), name="test")
        assert issubclass(style, Style)
        assert style.__name__ == "TmTheme_test"

    def test_global_colours(self) -> None:
        style = style_from_plist(
            make_tmtheme_data(background="#202020", foreground="#fafafa"), name="t",
        )
        assert style.background_color == "#202020"
        assert style.style_for_token(Token)["color"] == "fafafa"

    def test_highlight_colour(self) -> None:
        data = make_tmtheme_data()
        data["settings"][0]["settings"]["selection"] = "#333333"
        assert style_from_plist(data, name="t").highlight_color == "#333333"

        data["settings"][0]["settings"]["lineHighlight"] = "#444444"
        assert style_from_plist(data, name="t").highlight_color == "#444444"

    def test_scoped_rule_with_font_style(self) -> None:
        style = style_from_plist(make_tmtheme_data(keyword="#ff0000"), name="t")
        keyword = style.style_for_token(Keyword)
        assert keyword["color"] == "ff0000"
        assert keyword["bold"] is True

    def test_comma_selectors_map_every_part(self) -> None:
        style = style_from_plist(make_tmtheme_data(keyword="#ff0000"), name="t")
        assert style.style_for_token(Keyword.Type)["color"] == "ff0000"

    def test_italic_comment(self) -> None:
        style = style_from_plist(make_tmtheme_data(comment="#777777"), name="t")
        comment = style.style_for_token(Comment)
        assert comment["color"] == "777777"
        assert comment["italic"] is True

    def test_longest_scope_prefix_wins(self) -> None:
        extra = [
            {"scope": "entity.name.function.python", "settings": {"foreground": "#00ff00"}},
        ]
        style = style_from_plist(make_tmtheme_data(extra=extra), name="t")
        assert style.style_for_token(Name.Function)["color"] == "00ff00"

    def test_descendant_selector_uses_last_part(self) -> None:
        extra = [{"scope": "source.python string", "settings": {"foreground": "#abcdef"}}]
        style = style_from_plist(make_tmtheme_data(extra=extra), name="t")
        assert style.style_for_token(String)["color"] == "abcdef"

    def test_short_and_alpha_colours_normalized(self) -> None:
        extra = [
            {"scope": "string", "settings": {"foreground": "#ABC"}},
            {"scope": "variable", "settings": {"foreground": "#11223380"}},
        ]
        style = style_from_plist(make_tmtheme_data(extra=extra), name="t")
        assert style.style_for_token(String)["color"] == "aabbcc"
        assert style.style_for_token(Name.Variable)["color"] == "112233"

    def test_unknown_scope_ignored(self) -> None:
        extra = [{"scope": "meta.nothing.known", "settings": {"foreground": "#010101"}}]
        style = style_from_plist(make_tmtheme_data(extra=extra), name="t")
        assert "010101" not in str(style.styles.values())

    def test_invalid_colour_raises(self) -> None:
        extra = [{"scope": "string", "settings": {"foreground": "red"}}]
        with pytest.raises(ValueError, match="colour"):
            style_from_plist(make_tmtheme_data(extra=extra), name="t")

    def test_missing_settings_raises(self) -> None:
        with pytest.raises(ValueError, match="settings"):
            style_from_plist({"name": "empty"}, name="t")

    def test_non_dict_raises(self) -> None:
        with pytest.raises(ValueError):
            style_from_plist(["not", "a", "dict"], name="t")


class TestLoadTmTheme:
    """Loading ``.tmTheme`` files from disk."""

    def test_load_valid(self, tmp_path: Path) -> None:
        path = write_tmtheme(tmp_path / "ocean.tmTheme")
        style = load_tmtheme(path)
        assert style.__name__ == "TmTheme_ocean"

    def test_name_with_spaces(self, tmp_path: Path) -> None:
        path = write_tmtheme(tmp_path / "Deep Ocean.tmTheme")
        assert load_tmtheme(path).__name__ == "TmTheme_Deep_Ocean"

    def test_not_a_plist(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.tmTheme"
        path.write_text("<<<garbage>>>")
        with pytest.raises(ThemeLoadError, match="Failed to load theme"):
            load_tmtheme(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ThemeLoadError):
            load_tmtheme(tmp_path / "absent.tmTheme")

    def test_malformed_content(self, tmp_path: Path) -> None:
        path = tmp_path / "odd.tmTheme"
        with path.open("wb") as fh:
            plistlib.dump({"settings": [{"settings": {"background": 42}}]}, fh)
        with pytest.raises(ThemeLoadError, match="Malformed theme"):
            load_tmtheme(path)
