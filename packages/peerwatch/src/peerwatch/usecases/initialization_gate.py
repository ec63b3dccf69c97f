"""InitializationGate: one-shot signal that the initial snapshot is published."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class InitializationGate:
    """One-shot readiness signal.

    Notification callbacks wait on the gate so that nothing they do becomes
    visible before the consumer has published the initial membership. The
    consumer opens the gate exactly once, after it has stored the list
    returned by the snapshot fetch.

    A gate that will never open (the watcher is shutting down first) can be
    cancelled, which releases every waiter with a False result.

    Example:
        >>> gate = InitializationGate()
        >>> gate.is_open
        False
        >>> gate.open()
        >>> gate.wait(timeout=0)
        True
    """

    def __init__(self, opened: bool = False) -> None:
        """Initialize the gate.

        Args:
            opened: Start already open (no ordering requirement).
        """
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._cancelled = False
        if opened:
            self._event.set()

    @property
    def is_open(self) -> bool:
        """True once open() has been called, unless cancelled first."""
        return self._event.is_set() and not self._cancelled

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def open(self) -> None:
        """Open the gate, releasing every waiter. Later calls are no-ops."""
        with self._lock:
            if self._event.is_set():
                logger.debug("Initialization gate already released")
                return
            self._event.set()

    def cancel(self) -> None:
        """Release every waiter without opening. No-op on an open gate."""
        with self._lock:
            if self._event.is_set():
                return
            self._cancelled = True
            self._event.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the gate is open.

        Args:
            timeout: Maximum seconds to wait. None waits forever.

        Returns:
            True if the gate is open, False if the timeout expired first or
            the gate was cancelled.
        """
        return self._event.wait(timeout) and not self._cancelled
