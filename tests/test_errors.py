"""Tests for deck._errors."""

from deck._errors import (
    ConfigError,
    DeckError,
    DeckIOError,
    MinificationError,
    ReactiveError,
    ThemeLoadError,
    ThemeNotFoundError,
    WatchError,
)


class TestErrorHierarchy:
    """All deck errors inherit from DeckError."""

    def test_deck_error_is_exception(self) -> None:
        assert issubclass(DeckError, Exception)

    def test_catch_all_deck_errors(self) -> None:
        """All specific errors are catchable via DeckError."""
        for error_cls in (
            ConfigError, DeckIOError, MinificationError,
            ReactiveError, ThemeLoadError, WatchError,
        ):
            try:
                raise error_cls("test")
            except DeckError:
                pass

    def test_theme_not_found_names_theme(self) -> None:
        err = ThemeNotFoundError("Solarized")
        assert isinstance(err, DeckError)
        assert err.name == "Solarized"
        assert "'Solarized'" in str(err)
