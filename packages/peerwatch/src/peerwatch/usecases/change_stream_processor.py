"""ChangeStreamProcessor use case: keeps membership current from the watch stream.

When a pod is added or deleted, Kubernetes walks it through several changes
that each issue a MODIFIED event. By watching MODIFIED events for the moments
a peer address flips its Ready condition, we keep track of every address that
is ready to receive connections. ADDED and DELETED events are only logged.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from peerwatch.adapters.metrics_port import NoOpMetricsAdapter
from peerwatch.domain.events import ChangeEventType, Notification, TransitionKind
from peerwatch.domain.retry import RetryPolicy
from peerwatch.usecases.readiness_evaluator import ReadinessEvaluator

if TYPE_CHECKING:
    from peerwatch.adapters.metrics_port import MetricsPort
    from peerwatch.adapters.ports import OrchestratorPort
    from peerwatch.domain.events import ChangeEvent
    from peerwatch.domain.peer import WatchScope
    from peerwatch.usecases.membership_store import MembershipStore
    from peerwatch.usecases.notifier import Notifier

logger = logging.getLogger(__name__)


class ChangeStreamProcessor:
    """Applies readiness transitions from the orchestrator to the MembershipStore.

    Transition rules, per MODIFIED event whose address is non-empty and not
    the self address:
        - ready and not a member -> add, notify ADDED
        - not ready and a member -> remove, notify REMOVED
        - otherwise no change

    Events are processed strictly in arrival order on the thread calling
    run(). That thread is the only writer of the store.

    Dependencies:
        - OrchestratorPort: Provides the watch stream
        - MembershipStore: Current membership, mutated here only
        - Notifier: Fire-and-forget transition dispatch
        - ReadinessEvaluator: Readiness of each event's peer
        - RetryPolicy (optional): Reconnects a broken stream. The default
          never reconnects.
        - MetricsPort (optional): Peer count, transitions and watch status
    """

    def __init__(
        self,
        orchestrator: OrchestratorPort,
        store: MembershipStore,
        notifier: Notifier,
        evaluator: ReadinessEvaluator | None = None,
        retry_policy: RetryPolicy | None = None,
        metrics: MetricsPort | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            orchestrator: Port used to open the watch stream.
            store: Membership seeded with the initial snapshot.
            notifier: Receives one notify() per transition.
            evaluator: Readiness predicate. Defaults to ReadinessEvaluator().
            retry_policy: Reconnect policy. Defaults to RetryPolicy() (no retries).
            metrics: Optional metrics port.
        """
        self._orchestrator = orchestrator
        self._store = store
        self._notifier = notifier
        self._evaluator = evaluator or ReadinessEvaluator()
        self._retry_policy = retry_policy or RetryPolicy()
        self._metrics: MetricsPort = metrics or NoOpMetricsAdapter()
        self._stop_requested = threading.Event()

    @property
    def self_address(self) -> str:
        return self._store.self_address

    def stop(self) -> None:
        """Ask run() to return once the current stream session ends.

        The orchestrator's close() ends a session blocked on a quiet stream.
        """
        self._stop_requested.set()

    def run(self, scope: WatchScope) -> None:
        """Watch ``scope`` and apply events until the stream ends.

        Not expected to return under normal operation. Returns when the
        watch cannot be opened or the stream closes and the retry policy
        allows no further attempt, or after stop() was called.

        Args:
            scope: The same namespace and selector used for the snapshot.
        """
        logger.debug("Initial peer list = %s", self._store.snapshot_sorted())
        self._metrics.set_peer_count(len(self._store))

        attempt = 0
        while not self._stop_requested.is_set():
            if self._consume(scope):
                attempt = 0

            if self._stop_requested.is_set():
                break

            if not self._retry_policy.should_retry(attempt):
                logger.warning(
                    "watch stopped, membership frozen at %s",
                    self._store.snapshot_sorted(),
                )
                break

            delay = self._retry_policy.calculate_backoff(attempt)
            attempt += 1
            logger.info(
                "reopening watch in %.1fs (attempt %d of %d)",
                delay,
                attempt,
                self._retry_policy.max_retries,
            )
            self._stop_requested.wait(delay)

    def _consume(self, scope: WatchScope) -> bool:
        """Open one watch session and process it until it ends.

        Returns:
            True if at least one event was received.
        """
        received = False
        try:
            stream = self._orchestrator.watch_peers(scope)
        except Exception as exc:
            logger.warning("error watching peers: %s", exc)
            return received

        self._metrics.set_watch_active(True)
        try:
            for event in stream:
                received = True
                self.process_event(event)
                if self._stop_requested.is_set():
                    break
        except Exception as exc:
            if self._stop_requested.is_set():
                logger.debug("peer watch stream closed on stop: %s", exc)
            else:
                logger.warning("peer watch stream failed: %s", exc)
        finally:
            self._metrics.set_watch_active(False)
        return received

    def process_event(self, event: ChangeEvent) -> Notification | None:
        """Apply a single change event.

        Args:
            event: Event read from the watch stream.

        Returns:
            The Notification dispatched for this event, or None when the
            event caused no membership change.
        """
        peer = event.peer
        if peer is None:
            logger.warning(
                "got non-peer object from peer watching: %r",
                event.raw_object,
            )
            return None

        ready = self._evaluator.is_ready(peer)
        logger.debug(
            "%s peer %s with ip %s. Ready = %s",
            event.event_type,
            peer.name,
            peer.address,
            ready,
        )

        # Only MODIFIED events for other peers with an address carry transitions
        if event.kind is not ChangeEventType.MODIFIED:
            return None
        address = peer.address
        if not address or address == self.self_address:
            return None

        if ready and self._store.add(address):
            logger.debug("Newly ready peer %s @ %s", peer.name, address)
            kind = TransitionKind.ADDED
        elif not ready and self._store.remove(address):
            logger.debug("Newly disappeared peer %s @ %s", peer.name, address)
            kind = TransitionKind.REMOVED
        else:
            return None

        self._metrics.record_transition(kind)
        self._metrics.set_peer_count(len(self._store))
        self._notifier.notify(address, kind)
        return Notification(address=address, kind=kind)
