"""Reload broadcaster — wakes every pending ``/wait`` connection.

Each waiting browser tab holds a Waiter with its own wakeup event.  When a
render cycle completes, :meth:`Broadcaster.broadcast` sets every event, so
all tabs observe the new generation (broadcast, not a work queue).
"""

from __future__ import annotations

import asyncio
import threading
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from deck._types import ClientID, Generation


@dataclass(frozen=True, slots=True)
class Waiter:
    """A pending reload-wait connection.

    Attributes:
        client_id: Unique identifier for this connection.
        since: The generation the client's page was rendered at.
        wakeup: Set by the broadcaster when something may have changed.

    """

    client_id: ClientID
    since: Generation
    wakeup: asyncio.Event = field(default_factory=asyncio.Event, compare=False, hash=False)


class Broadcaster:
    """Tracks pending waiters and releases them on every render cycle.

    Thread-safe: the waiter set is protected by a lock.  Wakeups themselves
    must happen on the event loop that owns the waiters.

    """

    def __init__(self) -> None:
        self._waiters: set[Waiter] = set()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def waiter_count(self) -> int:
        """Number of connections currently blocked in :meth:`wait`."""
        with self._lock:
            return len(self._waiters)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def subscribe(self, waiter: Waiter) -> None:
        with self._lock:
            self._waiters.add(waiter)

    def unsubscribe(self, waiter: Waiter) -> None:
        with self._lock:
            self._waiters.discard(waiter)

    def get_waiters(self) -> frozenset[Waiter]:
        """Snapshot of current waiters (no lock held on return)."""
        with self._lock:
            return frozenset(self._waiters)

    def broadcast(self) -> int:
        """Wake every current waiter.  Returns the number woken."""
        waiters = self.get_waiters()
        for waiter in waiters:
            waiter.wakeup.set()
        return len(waiters)

    def close(self) -> int:
        """Refuse new waits and release every pending one.

        Released waiters return False from :meth:`wait`.
        """
        self._closed = True
        return self.broadcast()

    async def wait(self, since: Generation, current: Callable[[], Generation]) -> bool:
        """Block until ``current()`` differs from *since*.

        A generation lower than *since* means the client's page came from an
        earlier server process; that also counts as "reload now".

        Returns:
            True when the client should reload, False when the broadcaster
            was closed first (server shutting down).

        """
        waiter = Waiter(client_id=str(uuid.uuid4()), since=since)
        self.subscribe(waiter)
        try:
            while True:
                if current() != since:
                    return True
                if self._closed:
                    return False
                await waiter.wakeup.wait()
                waiter.wakeup.clear()
        finally:
            self.unsubscribe(waiter)
