"""Preview router — the HTTP surface of ``deck serve``.

Routes:
    ``GET /``                   last good page, reload script injected
    ``GET /wait?since=<gen>``   long-poll; 200 once the generation moves on,
                                503 if the server stops first

Any other path is answered by Chirp with a 404.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from deck.reactive.reload import WAIT_ENDPOINT, inject_reload_script

if TYPE_CHECKING:
    from chirp import App, Request

    from deck.preview.server import PreviewServer


PAGE_ENDPOINT = "/"

_HTML = "text/html; charset=utf-8"
_TEXT = "text/plain; charset=utf-8"


def parse_since(raw: str | None, current: int) -> int | None:
    """Parse the ``since`` query value.

    A missing value means "the current generation" (wait for the next one).
    Returns None for anything that is not a non-negative integer.
    """
    if raw is None or raw == "":
        return current
    try:
        since = int(raw)
    except ValueError:
        return None
    return since if since >= 0 else None


class PreviewRouter:
    """Registers the preview routes on a Chirp app.

    Handlers only read ``server.state.snapshot``; they never write state.

    Args:
        server: The PreviewServer whose state and broadcaster are served.
        app: Chirp App to register routes on (must not yet be frozen).

    """

    def __init__(self, server: PreviewServer, app: App) -> None:
        self._server = server
        self._app = app

    def register(self) -> None:
        self.register_page_endpoint()
        self.register_wait_endpoint()

    def register_page_endpoint(self) -> None:
        """Register ``GET /`` serving the last good page."""
        from chirp import Response

        state = self._server.state

        async def page_handler(request: Request) -> Any:
            snapshot = state.snapshot
            body = inject_reload_script(snapshot.page, snapshot.generation)
            return Response(body=body, status=200, content_type=_HTML)

        page_handler.__name__ = "deck_page"
        page_handler.__qualname__ = "PreviewRouter.deck_page"

        self._app.route(PAGE_ENDPOINT, name="deck:page")(page_handler)

    def register_wait_endpoint(self) -> None:
        """Register ``GET /wait`` — suspends until the generation changes."""
        from chirp import Response

        state = self._server.state
        broadcaster = self._server.broadcaster

        async def wait_handler(request: Request) -> Any:
            since = parse_since(request.query.get("since"), state.generation)
            if since is None:
                return Response(
                    body="since must be a non-negative integer",
                    status=400,
                    content_type=_TEXT,
                )

            if await broadcaster.wait(since, lambda: state.generation):
                return Response(body="reload", status=200, content_type=_TEXT)
            return Response(body="shutdown", status=503, content_type=_TEXT)

        wait_handler.__name__ = "deck_wait"
        wait_handler.__qualname__ = "PreviewRouter.deck_wait"

        self._app.route(WAIT_ENDPOINT, name="deck:wait")(wait_handler)
