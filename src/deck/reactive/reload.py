"""Live reload — script injected into pages served by ``deck serve``.

The script long-polls the wait endpoint with the generation its page was
rendered at.  A 200 means a newer generation exists and the page reloads
(the slide position survives in ``location.hash``).  A 503 means the
server is shutting down and polling stops.  Network errors retry.

Only served pages carry the script; ``deck build`` output never does.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from deck._types import Generation

WAIT_ENDPOINT = "/wait"

_RELOAD_SCRIPT = """\
<script data-deck-reload>
(function() {{
  var since = {generation};
  function poll() {{
    fetch('{endpoint}?since=' + since, {{cache: 'no-store'}}).then(function(r) {{
      if (r.status === 200) {{
        location.reload();
      }} else if (r.status !== 503) {{
        setTimeout(poll, 1000);
      }}
    }}).catch(function() {{
      setTimeout(poll, 2000);
    }});
  }}
  poll();
}})();
</script>
"""


def reload_script(generation: Generation) -> str:
    """The reload script for a page rendered at *generation*."""
    return _RELOAD_SCRIPT.format(generation=int(generation), endpoint=WAIT_ENDPOINT)


def inject_reload_script(page: str, generation: Generation) -> str:
    """Insert the reload script before ``</body>`` (or ``</html>``, or append)."""
    script = reload_script(generation)
    for marker in ("</body>", "</html>"):
        at = page.rfind(marker)
        if at != -1:
            return page[:at] + script + page[at:]
    return page + script
