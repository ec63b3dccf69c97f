"""Fake orchestrator for testing.

Provides an in-memory OrchestratorPort whose watch stream is fed by the
test through a thread-safe queue.
"""

from __future__ import annotations

import queue
import threading
from typing import Iterator

from peerwatch.domain.events import ChangeEvent, ChangeEventType
from peerwatch.domain.peer import READY_CONDITION, PeerCondition, PeerSnapshot, WatchScope

_CLOSE = object()


def make_peer(name: str, address: str, ready: bool) -> PeerSnapshot:
    """Build a PeerSnapshot with a single Ready condition.

    Args:
        name: Peer object name.
        address: Peer address.
        ready: Status of the Ready condition.

    Returns:
        PeerSnapshot carrying one Ready condition.
    """
    return PeerSnapshot(
        name=name,
        address=address,
        conditions=(PeerCondition(type=READY_CONDITION, status=ready),),
    )


class FakeOrchestrator:
    """Fake implementation of OrchestratorPort for testing.

    ``list_peers`` returns the configured peers or raises the configured
    error. ``watch_peers`` returns an iterator that blocks on an internal
    queue: events pushed with :meth:`push` are delivered in order, and
    :meth:`close` ends the current stream.

    Example:
        >>> fake = FakeOrchestrator(peers=[make_peer("a", "10.0.0.2", True)])
        >>> fake.push_modified("b", "10.0.0.3", ready=True)
        >>> fake.close()
    """

    def __init__(
        self,
        peers: list[PeerSnapshot] | None = None,
        list_error: Exception | None = None,
        watch_errors: list[Exception] | None = None,
    ) -> None:
        """Initialize the fake.

        Args:
            peers: Peers returned by list_peers().
            list_error: If set, list_peers() raises it.
            watch_errors: Errors raised by successive watch_peers() calls.
                         Once exhausted, watch_peers() succeeds.
        """
        self._peers = list(peers or [])
        self._list_error = list_error
        self._watch_errors = list(watch_errors or [])
        self._events: queue.Queue[object] = queue.Queue()
        self._lock = threading.Lock()
        self.list_calls: list[WatchScope] = []
        self.watch_calls: list[WatchScope] = []
        self.watch_opened = threading.Event()

    def list_peers(self, scope: WatchScope) -> list[PeerSnapshot]:
        """Return the configured peers, or raise the configured error."""
        with self._lock:
            self.list_calls.append(scope)
        if self._list_error is not None:
            raise self._list_error
        return list(self._peers)

    def watch_peers(self, scope: WatchScope) -> Iterator[ChangeEvent]:
        """Return a stream over the pushed events."""
        with self._lock:
            self.watch_calls.append(scope)
            error = self._watch_errors.pop(0) if self._watch_errors else None
        if error is not None:
            raise error
        self.watch_opened.set()
        return self._stream()

    def _stream(self) -> Iterator[ChangeEvent]:
        while True:
            item = self._events.get()
            if item is _CLOSE:
                return
            if isinstance(item, Exception):
                raise item
            yield item  # type: ignore[misc]

    def push(self, event: ChangeEvent) -> None:
        """Queue an event for delivery on the watch stream."""
        self._events.put(event)

    def push_modified(self, name: str, address: str, ready: bool) -> None:
        """Queue a MODIFIED event for a peer with the given readiness."""
        self.push(
            ChangeEvent(
                event_type=ChangeEventType.MODIFIED.value,
                peer=make_peer(name, address, ready),
            )
        )

    def fail_stream(self, error: Exception) -> None:
        """Make the current stream raise ``error`` once it reaches it."""
        self._events.put(error)

    def close(self) -> None:
        """End the current watch stream once pending events are consumed."""
        self._events.put(_CLOSE)
