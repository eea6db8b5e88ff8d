"""TextMate theme loader — converts ``.tmTheme`` files to Pygments styles.

A ``.tmTheme`` file is an XML property list with a ``settings`` array.  The
first entry without a ``scope`` carries the editor-wide colours; every other
entry styles one or more scope selectors.  Selectors are mapped onto the
closest Pygments token by longest scope prefix.
"""

from __future__ import annotations

import plistlib
import re
from typing import TYPE_CHECKING, Any

from pygments.style import Style
from pygments.token import (
    Comment,
    Error,
    Generic,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Token,
)

from deck._errors import ThemeLoadError

if TYPE_CHECKING:
    from pathlib import Path

    from pygments.token import _TokenType


THEME_SUFFIX = ".tmTheme"

# Longest matching prefix wins, so order here does not matter.
_SCOPE_TOKENS: dict[str, _TokenType] = {
    "comment": Comment,
    "comment.block.documentation": String.Doc,
    "string": String,
    "string.regexp": String.Regex,
    "string.other.link": Name.Attribute,
    "constant": Name.Constant,
    "constant.numeric": Number,
    "constant.language": Keyword.Constant,
    "constant.character": String.Char,
    "constant.character.escape": String.Escape,
    "variable": Name.Variable,
    "variable.language": Name.Builtin.Pseudo,
    "variable.other.constant": Name.Constant,
    "keyword": Keyword,
    "keyword.operator": Operator,
    "keyword.operator.word": Operator.Word,
    "storage": Keyword.Declaration,
    "storage.type": Keyword.Type,
    "entity.name": Name,
    "entity.name.function": Name.Function,
    "entity.name.function.decorator": Name.Decorator,
    "entity.name.class": Name.Class,
    "entity.name.type": Name.Class,
    "entity.name.namespace": Name.Namespace,
    "entity.name.tag": Name.Tag,
    "entity.name.label": Name.Label,
    "entity.other.attribute-name": Name.Attribute,
    "entity.other.inherited-class": Name.Class,
    "meta.decorator": Name.Decorator,
    "support.function": Name.Builtin,
    "support.class": Name.Builtin,
    "support.type": Name.Builtin,
    "support.constant": Name.Constant,
    "punctuation": Punctuation,
    "markup.heading": Generic.Heading,
    "markup.inserted": Generic.Inserted,
    "markup.deleted": Generic.Deleted,
    "markup.bold": Generic.Strong,
    "markup.italic": Generic.Emph,
    "markup.raw": String.Backtick,
    "invalid": Error,
}

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FONT_STYLES = ("bold", "italic", "underline")


def load_tmtheme(path: Path) -> type[Style]:
    """Load *path* and return an equivalent Pygments Style subclass.

    Raises:
        ThemeLoadError: If the file is unreadable, is not a property list,
            or contains settings that cannot be converted.

    """
    try:
        with path.open("rb") as fh:
            data = plistlib.load(fh)
    except (OSError, plistlib.InvalidFileException, ValueError) as exc:
        msg = f"Failed to load theme {path}: {exc}"
        raise ThemeLoadError(msg) from exc

    try:
        return style_from_plist(data, name=path.stem)
    except (TypeError, ValueError) as exc:
        msg = f"Malformed theme {path}: {exc}"
        raise ThemeLoadError(msg) from exc


def style_from_plist(data: Any, *, name: str) -> type[Style]:
    """Build a Style class from a parsed ``.tmTheme`` dictionary.

    Raises:
        ValueError: On a structurally invalid theme or unparseable colour.

    """
    if not isinstance(data, dict):
        raise ValueError("top-level element is not a dictionary")
    entries = data.get("settings")
    if not isinstance(entries, list) or not entries:
        raise ValueError("missing 'settings' array")

    attrs: dict[str, Any] = {"name": name}
    styles: dict[_TokenType, str] = {}

    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError("settings entry is not a dictionary")
        settings = entry.get("settings", {})
        if not isinstance(settings, dict):
            raise ValueError("'settings' of an entry is not a dictionary")

        scope = entry.get("scope")
        if scope is None:
            _apply_globals(settings, attrs, styles)
            continue
        if not isinstance(scope, str):
            raise ValueError(f"scope is not a string: {scope!r}")

        rule = _style_rule(settings)
        if not rule:
            continue
        for token in _tokens_for_scope(scope):
            styles[token] = rule

    attrs["styles"] = styles
    return type(f"TmTheme_{_identifier(name)}", (Style,), attrs)


def _apply_globals(
    settings: dict[str, Any],
    attrs: dict[str, Any],
    styles: dict[_TokenType, str],
) -> None:
    if "background" in settings:
        attrs["background_color"] = _color(settings["background"])
    # Pygments has a single highlight colour; the line highlight wins over selection.
    highlight = settings.get("lineHighlight", settings.get("selection"))
    if highlight is not None:
        attrs["highlight_color"] = _color(highlight)
    if "foreground" in settings:
        styles[Token] = _color(settings["foreground"])


def _style_rule(settings: dict[str, Any]) -> str:
    """Translate one entry's settings to a Pygments style string."""
    parts: list[str] = []
    font_style = settings.get("fontStyle", "")
    if not isinstance(font_style, str):
        raise ValueError(f"fontStyle is not a string: {font_style!r}")
    parts.extend(s for s in _FONT_STYLES if s in font_style.split())
    if "foreground" in settings:
        parts.append(_color(settings["foreground"]))
    if "background" in settings:
        parts.append("bg:" + _color(settings["background"]))
    return " ".join(parts)


def _tokens_for_scope(scope: str) -> list[_TokenType]:
    """Map a (possibly comma-separated) scope selector to Pygments tokens.

    For descendant selectors (``source.python string``) only the last,
    most specific, component is considered.
    """
    tokens: list[_TokenType] = []
    for selector in scope.split(","):
        parts = selector.split()
        if not parts:
            continue
        token = _lookup_scope(parts[-1])
        if token is not None and token not in tokens:
            tokens.append(token)
    return tokens


def _lookup_scope(scope: str) -> _TokenType | None:
    segments = scope.split(".")
    while segments:
        token = _SCOPE_TOKENS.get(".".join(segments))
        if token is not None:
            return token
        segments.pop()
    return None


def _color(value: Any) -> str:
    """Normalize a TextMate colour to ``#rrggbb``, dropping any alpha channel."""
    if not isinstance(value, str) or not _HEX_COLOR.match(value.strip()):
        raise ValueError(f"invalid colour: {value!r}")
    digits = value.strip()[1:]
    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits[:3])
    return "#" + digits[:6].lower()


def _identifier(name: str) -> str:
    return re.sub(r"\W", "_", name)
