"""Tests for deck.reactive.reload — live reload script injection."""

from deck.reactive.reload import WAIT_ENDPOINT, inject_reload_script, reload_script


class TestReloadScript:
    """The long-poll client script."""

    def test_embeds_generation(self) -> None:
        assert "var since = 5;" in reload_script(5)

    def test_polls_wait_endpoint(self) -> None:
        script = reload_script(0)
        assert f"'{WAIT_ENDPOINT}?since='" in script
        assert "location.reload()" in script

    def test_stops_on_shutdown(self) -> None:
        assert "503" in reload_script(0)

    def test_marked_for_identification(self) -> None:
        assert reload_script(0).startswith("<script data-deck-reload>")


class TestInjectReloadScript:
    """Placement inside the page."""

    def test_before_body_close(self) -> None:
        result = inject_reload_script("<html><body><p>Hi</p></body></html>", 3)
        assert result.index("data-deck-reload") < result.index("</body>")
        assert result.startswith("<html><body><p>Hi</p>")
        assert result.endswith("</script>\n</body></html>")

    def test_uses_last_body_close(self) -> None:
        page = "<body><pre>&lt;/body&gt;</pre><!-- </body> --></body>"
        result = inject_reload_script(page, 1)
        assert result.endswith("</script>\n</body>")

    def test_before_html_close(self) -> None:
        result = inject_reload_script("<html><p>Hi</p></html>", 1)
        assert result.endswith("</script>\n</html>")

    def test_appended_without_markers(self) -> None:
        result = inject_reload_script("<p>fragment</p>", 1)
        assert result.startswith("<p>fragment</p><script")

    def test_original_content_unchanged(self) -> None:
        page = "<html><body><p>Hi</p></body></html>"
        result = inject_reload_script(page, 2)
        assert result.replace(reload_script(2), "") == page
