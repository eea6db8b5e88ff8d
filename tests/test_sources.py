"""Tests for deck.sources — reading inputs and writing pages."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from deck._errors import DeckIOError
from deck.render.renderer import Document
from deck.sources import read_document, read_text, write_page


class TestReadDocument:
    """Loading a Document from disk or stdin."""

    def test_all_files(self, deck_dir: Path) -> None:
        doc = read_document(deck_dir / "talk.md", deck_dir / "style.css", deck_dir / "extra.js")
        assert doc.markdown.startswith("# Welcome")
        assert "rebeccapurple" in (doc.css or "")
        assert "deckExtraLoaded" in (doc.js or "")

    def test_optional_files_absent(self, deck_dir: Path) -> None:
        doc = read_document(deck_dir / "talk.md")
        assert doc.css is None
        assert doc.js is None

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("# From stdin\n"))
        assert read_document(None) == Document("# From stdin\n")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DeckIOError, match="absent.md"):
            read_document(tmp_path / "absent.md")

    def test_missing_css(self, deck_dir: Path) -> None:
        with pytest.raises(DeckIOError, match="nope.css"):
            read_document(deck_dir / "talk.md", css=deck_dir / "nope.css")

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "binary.md"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(DeckIOError):
            read_text(path)


class TestWritePage:
    """Writing the rendered page."""

    def test_file(self, tmp_path: Path) -> None:
        out = tmp_path / "deck.html"
        write_page("<html></html>", out)
        assert out.read_text(encoding="utf-8") == "<html></html>"

    def test_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        write_page("<html></html>", None)
        assert capsys.readouterr().out == "<html></html>"

    def test_unwritable(self, tmp_path: Path) -> None:
        with pytest.raises(DeckIOError):
            write_page("x", tmp_path / "missing-dir" / "deck.html")
