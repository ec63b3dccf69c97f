"""PeerWatcher: wires the membership use cases together.

Fetches the initial snapshot synchronously, then runs the change stream on a
background daemon thread, notifying the caller on every transition.

Example:
    >>> gate = InitializationGate()
    >>> watcher = PeerWatcher(
    ...     self_address="10.0.0.1",
    ...     scope=WatchScope(namespace="default", label_selector="app=cache"),
    ...     notify=on_change,
    ...     orchestrator=KubernetesOrchestratorAdapter.from_settings(settings),
    ...     gate=gate,
    ... )
    >>> peers = watcher.start()
    >>> ring.set_peers(peers)
    >>> gate.open()  # on_change may now run
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from peerwatch.domain.exceptions import PeerWatchConfigError
from peerwatch.usecases.change_stream_processor import ChangeStreamProcessor
from peerwatch.usecases.initialization_gate import InitializationGate
from peerwatch.usecases.membership_store import MembershipStore
from peerwatch.usecases.notifier import Notifier
from peerwatch.usecases.readiness_evaluator import ReadinessEvaluator
from peerwatch.usecases.snapshot_fetcher import SnapshotFetcher

if TYPE_CHECKING:
    from peerwatch.adapters.metrics_port import MetricsPort
    from peerwatch.adapters.ports import OrchestratorPort
    from peerwatch.domain.peer import WatchScope
    from peerwatch.domain.retry import RetryPolicy
    from peerwatch.usecases.notifier import NotifyFunc

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "peerwatch"


def enable_debug_logging() -> None:
    """Lower the peerwatch package logger to DEBUG (raw event stream)."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)


class PeerWatcher:
    """Live view of the ready peers of a scope.

    Dependencies:
        - OrchestratorPort: Lists and watches peers
        - InitializationGate: Holds back callbacks until the consumer opens it
        - RetryPolicy (optional): Watch reconnect policy
        - MetricsPort (optional): Membership metrics

    Thread safety:
        start() and stop() must be called from one controlling thread.
        peers() may be called from any thread.
    """

    def __init__(
        self,
        self_address: str,
        scope: WatchScope,
        notify: NotifyFunc,
        orchestrator: OrchestratorPort,
        *,
        gate: InitializationGate | None = None,
        retry_policy: RetryPolicy | None = None,
        metrics: MetricsPort | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize the watcher. Nothing is fetched until start().

        Args:
            self_address: Address of the local node.
            scope: Namespace and label selector of the peers.
            notify: Callback invoked as ``notify(address, kind)`` per transition.
            orchestrator: Port used to list and watch the peers.
            gate: Gate the consumer opens once it has published the initial
                  list. Defaults to an already open gate.
            retry_policy: Watch reconnect policy. Defaults to no reconnects.
            metrics: Optional metrics port.
            max_workers: Notifier pool size.

        Raises:
            PeerWatchConfigError: If self_address is empty.
        """
        self_address = self_address.strip()
        if not self_address:
            raise PeerWatchConfigError("self_address cannot be empty")

        self._self_address = self_address
        self._scope = scope
        self._orchestrator = orchestrator
        self._gate = gate if gate is not None else InitializationGate(opened=True)
        self._retry_policy = retry_policy
        self._metrics = metrics
        self._evaluator = ReadinessEvaluator()
        self._notifier = Notifier(notify, gate=self._gate, max_workers=max_workers)
        self._store: MembershipStore | None = None
        self._processor: ChangeStreamProcessor | None = None
        self._thread: threading.Thread | None = None

    @property
    def self_address(self) -> str:
        return self._self_address

    @property
    def gate(self) -> InitializationGate:
        return self._gate

    @property
    def is_running(self) -> bool:
        """True while the change stream thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> list[str]:
        """Fetch the initial snapshot and start watching.

        Returns:
            Sorted initial membership, self included.

        Raises:
            PeerListError: If the initial listing fails. Nothing is started.
            EmptyPeerSetError: If the initial set is empty.
            RuntimeError: If the watcher was already started.
        """
        initial = SnapshotFetcher(self._orchestrator, self._evaluator).fetch_initial(
            self._scope, self._self_address
        )
        return self.start_with(initial)

    def start_with(self, initial: set[str] | list[str]) -> list[str]:
        """Start watching from an already known membership.

        Used directly to fall back to a self-only set when the initial
        listing failed.

        Args:
            initial: Addresses to seed the store with. Self is always added.

        Returns:
            Sorted initial membership, self included.

        Raises:
            RuntimeError: If the watcher was already started.
        """
        if self._thread is not None:
            raise RuntimeError("PeerWatcher already started")

        self._store = MembershipStore(
            self._self_address, (address for address in initial if address)
        )
        self._processor = ChangeStreamProcessor(
            self._orchestrator,
            self._store,
            self._notifier,
            evaluator=self._evaluator,
            retry_policy=self._retry_policy,
            metrics=self._metrics,
        )
        self._thread = threading.Thread(
            target=self._processor.run,
            args=(self._scope,),
            name="peerwatch-stream",
            daemon=True,
        )
        self._thread.start()

        peers = self._store.snapshot_sorted()
        logger.info("Watching %s, initial peers = %s", self._scope, peers)
        return peers

    def mark_initialized(self) -> None:
        """Open the initialization gate, letting queued notifications run."""
        self._gate.open()

    def peers(self) -> list[str]:
        """Return the current sorted membership, self included.

        Before start() this is just the self address.
        """
        if self._store is None:
            return [self._self_address]
        return self._store.snapshot_sorted()

    def stop(self, timeout: float | None = 5.0) -> None:
        """Stop watching and release the notifier workers.

        Closes the orchestrator's open streams, so a stream thread blocked
        on a quiet cluster exits without waiting for the next event.

        Args:
            timeout: Seconds to wait for the stream thread to exit.
        """
        if self._processor is not None:
            self._processor.stop()
            self._orchestrator.close()
        self._notifier.shutdown(wait=False)
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.debug("Watch thread still blocked on the stream")


def initialize(
    self_address: str,
    scope: WatchScope,
    notify: NotifyFunc,
    debug: bool = False,
    *,
    orchestrator: OrchestratorPort,
    gate: InitializationGate | None = None,
    retry_policy: RetryPolicy | None = None,
    metrics: MetricsPort | None = None,
) -> list[str]:
    """Fetch the initial peers and keep watching them in the background.

    Args:
        self_address: Address of the local node.
        scope: Namespace and label selector of the peers.
        notify: Callback invoked as ``notify(address, kind)`` per transition.
            Runs on pool threads, possibly concurrently and out of order.
        debug: Log the raw event stream at DEBUG level.
        orchestrator: Port used to list and watch the peers.
        gate: Gate the caller opens once the returned list is published.
            Defaults to an already open gate.
        retry_policy: Watch reconnect policy. Defaults to no reconnects.
        metrics: Optional metrics port.

    Returns:
        Sorted initial membership, self included.

    Raises:
        PeerListError: If the initial listing fails.
        EmptyPeerSetError: If the initial set is empty.
    """
    if debug:
        enable_debug_logging()

    watcher = PeerWatcher(
        self_address,
        scope,
        notify,
        orchestrator,
        gate=gate,
        retry_policy=retry_policy,
        metrics=metrics,
    )
    return watcher.start()
