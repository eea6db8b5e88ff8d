"""Tests for deck.banner — startup and build output."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

from deck.banner import print_banner, print_build_summary
from deck.config import DeckConfig


class TestPrintBanner:
    """Tests for the ``deck serve`` banner."""

    def _capture_banner(self, config: DeckConfig | None = None, **kwargs: object) -> str:
        """Call print_banner and capture stderr output."""
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            print_banner(config or DeckConfig(input=Path("talk.md")), **kwargs)
        return buf.getvalue()

    def test_static_banner(self) -> None:
        output = self._capture_banner(load_ms=42.4)

        assert "deck" in output
        assert "talk.md rendered" in output
        assert "42ms" in output
        assert "theme: monokai" in output
        assert "--watch" in output
        assert "http://127.0.0.1:8000" in output
        assert "Watching for changes" not in output

    def test_watch_banner(self) -> None:
        config = DeckConfig(input=Path("talk.md"), watch=True, port=9001)
        output = self._capture_banner(config, theme="native")

        assert "live" in output
        assert "/wait" in output
        assert "theme: native" in output
        assert "http://127.0.0.1:9001" in output
        assert "Watching for changes" in output

    def test_custom_assets_listed(self) -> None:
        config = DeckConfig(input=Path("talk.md"), css=Path("style.css"), js=Path("extra.js"))
        output = self._capture_banner(config)
        assert "css: style.css" in output
        assert "js: extra.js" in output

    def test_warnings(self) -> None:
        output = self._capture_banner(warnings=["port 80 needs root"])
        assert "port 80 needs root" in output


class TestPrintBuildSummary:
    """Tests for the ``deck build`` summary."""

    def test_summary(self) -> None:
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            print_build_summary(DeckConfig(output=Path("talk.html")), 12345, 7.2)
        output = buf.getvalue()
        assert "[build]" in output
        assert "12,345 bytes" in output
        assert "output: talk.html" in output
        assert "Done in 7ms" in output
