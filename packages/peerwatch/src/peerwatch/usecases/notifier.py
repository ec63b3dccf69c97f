"""Notifier use case: fire-and-forget dispatch of membership transitions.

Notifications are submitted to a thread pool's unbounded work queue and run
on pooled workers. There is no ordering guarantee between notifications,
not even for the same address: callbacks must be safe to run concurrently
with themselves and must not assume event order.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from peerwatch.domain.events import Notification, TransitionKind
from peerwatch.usecases.initialization_gate import InitializationGate

logger = logging.getLogger(__name__)

NotifyFunc = Callable[[str, TransitionKind], None]


class Notifier:
    """Dispatches (address, kind) pairs to the caller's callback.

    Each worker waits on the InitializationGate before invoking the callback,
    so no callback side effect happens before initialization completes.
    Exceptions raised by the callback are logged and dropped.

    Dependencies:
        - NotifyFunc: Caller-supplied callback
        - InitializationGate: Defers callbacks until the consumer is ready
    """

    def __init__(
        self,
        callback: NotifyFunc,
        gate: InitializationGate | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize the notifier.

        Args:
            callback: Called as ``callback(address, kind)`` per transition.
            gate: Gate to wait on before each callback. Defaults to an
                  already open gate.
            max_workers: Size of the worker pool. Defaults to the
                        ThreadPoolExecutor default.
        """
        self._callback = callback
        self._gate = gate if gate is not None else InitializationGate(opened=True)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="peerwatch-notify"
        )

    def notify(self, address: str, kind: TransitionKind) -> Future[None] | None:
        """Submit a notification and return immediately.

        Args:
            address: Peer address that transitioned.
            kind: TransitionKind.ADDED or TransitionKind.REMOVED.

        Returns:
            Future completing once the callback has run (or failed), or None
            if the notifier has already been shut down.
        """
        try:
            return self._executor.submit(self._deliver, Notification(address, kind))
        except RuntimeError:
            logger.warning(
                "Notifier is shut down, dropping notify: %s [%s]", address, kind.name
            )
            return None

    def _deliver(self, notification: Notification) -> None:
        if not self._gate.wait():
            logger.debug(
                "Initialization never completed, dropping notify: %s [%s]",
                notification.address,
                notification.kind.name,
            )
            return
        logger.info("Got notify: %s [%s]", notification.address, notification.kind.name)
        try:
            self._callback(notification.address, notification.kind)
        except Exception:
            logger.exception(
                "notify callback failed for %s [%s]",
                notification.address,
                notification.kind.name,
            )

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting notifications and release the workers.

        If the gate never opened, it is cancelled and the notifications
        waiting behind it are dropped.

        Args:
            wait: Block until queued notifications have been delivered.
        """
        if not self._gate.is_open:
            self._gate.cancel()
            self._executor.shutdown(wait=wait, cancel_futures=True)
            return
        self._executor.shutdown(wait=wait)
