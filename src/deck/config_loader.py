"""Load DeckConfig from deck.toml / deck.yaml if present.

Merges file config with CLI values.  CLI overrides file; CLI values left
unset (None) do not mask file values.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from deck._errors import ConfigError
from deck.config import DeckConfig

CONFIG_FILENAMES = ("deck.toml", "deck.yaml", "deck.yml")

_KNOWN_KEYS = frozenset({
    "title", "theme", "theme_dirs", "css", "js",
    "host", "port", "watch", "minify",
})
_PATH_KEYS = frozenset({"css", "js"})
_STR_KEYS = frozenset({"title", "theme", "host", "css", "js"})
_BOOL_KEYS = frozenset({"watch", "minify"})


def load_config(base_dir: Path | None, **overrides: object) -> DeckConfig:
    """Build a DeckConfig from the project file in *base_dir* plus *overrides*.

    Args:
        base_dir: Directory searched for ``deck.toml``, ``deck.yaml`` or
            ``deck.yml`` (first match wins).  None skips the lookup, which
            is what building from standard input does.
        **overrides: DeckConfig fields from the command line.

    Raises:
        ConfigError: If the project file exists but cannot be parsed, or a
            setting in it has the wrong type.

    """
    file_config = _read_deck_config(base_dir) if base_dir is not None else {}
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    try:
        return DeckConfig(**merged)
    except TypeError as exc:
        msg = f"Invalid deck configuration: {exc}"
        raise ConfigError(msg) from exc


def find_config_file(base_dir: Path) -> Path | None:
    """Return the first project file present in *base_dir*, if any."""
    for name in CONFIG_FILENAMES:
        path = base_dir / name
        if path.is_file():
            return path
    return None


def _read_deck_config(base_dir: Path) -> dict[str, object]:
    path = find_config_file(base_dir)
    if path is None:
        return {}
    data = _parse_toml(path) if path.suffix == ".toml" else _parse_yaml(path)
    values = _flatten_deck_section(data)
    _check_types(values, path)
    return _normalize(values, path.parent)


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at the top level"
        raise ConfigError(msg)
    return data


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc


def _flatten_deck_section(data: dict[str, object]) -> dict[str, object]:
    """Extract deck.* keys into top-level config."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k != "deck" and k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("deck")
    if isinstance(section, dict):
        for k, v in section.items():
            if k not in _KNOWN_KEYS:
                msg = f"Unknown deck setting: {k!r}"
                raise ConfigError(msg)
            result[k] = v
    return result


def _normalize(values: dict[str, object], base: Path) -> dict[str, object]:
    """Resolve relative paths against the directory holding the config file."""
    result = dict(values)
    for key in _PATH_KEYS & result.keys():
        result[key] = base / str(result[key])
    if "theme_dirs" in result:
        dirs = result["theme_dirs"]
        if isinstance(dirs, str):
            dirs = [dirs]
        if not isinstance(dirs, list):
            msg = "theme_dirs must be a list of directories"
            raise ConfigError(msg)
        result["theme_dirs"] = tuple(base / str(d) for d in dirs)
    return result


def _check_types(values: dict[str, object], path: Path) -> None:
    """Reject scalar settings whose type does not match the DeckConfig field."""
    for key, value in values.items():
        if key in _STR_KEYS and not isinstance(value, str):
            expected = "a string"
        elif key in _BOOL_KEYS and not isinstance(value, bool):
            expected = "true or false"
        elif key == "port" and (isinstance(value, bool) or not isinstance(value, int)):
            expected = "an integer"
        else:
            continue
        msg = f"{path}: {key!r} must be {expected}, got {value!r}"
        raise ConfigError(msg)
