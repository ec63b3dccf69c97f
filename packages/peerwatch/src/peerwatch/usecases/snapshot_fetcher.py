"""SnapshotFetcher use case: builds the initial membership set."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from peerwatch.domain.exceptions import EmptyPeerSetError, PeerListError
from peerwatch.usecases.readiness_evaluator import ReadinessEvaluator

if TYPE_CHECKING:
    from peerwatch.adapters.ports import OrchestratorPort
    from peerwatch.domain.peer import WatchScope

logger = logging.getLogger(__name__)


class SnapshotFetcher:
    """Seeds membership from a point-in-time listing of the scope.

    The result always contains the self address; every other listed peer is
    included iff the ReadinessEvaluator says it is ready. A listing that
    contains nothing but self is a valid (single node) result.

    Dependencies:
        - OrchestratorPort: Lists the peers of a scope
        - ReadinessEvaluator: Filters listed peers

    Thread safety:
        Stateless; safe to call from any thread.
    """

    def __init__(
        self,
        orchestrator: OrchestratorPort,
        evaluator: ReadinessEvaluator | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            orchestrator: Port used to list the peers.
            evaluator: Readiness predicate. Defaults to ReadinessEvaluator().
        """
        self._orchestrator = orchestrator
        self._evaluator = evaluator or ReadinessEvaluator()

    def fetch_initial(self, scope: WatchScope, self_address: str) -> set[str]:
        """Fetch the initial membership set.

        Args:
            scope: Namespace and label selector of the peers.
            self_address: Address of the local node.

        Returns:
            Set of ready peer addresses, self included.

        Raises:
            PeerListError: If the orchestrator listing fails.
            EmptyPeerSetError: If the assembled set is empty.
        """
        try:
            peers = self._orchestrator.list_peers(scope)
        except Exception as exc:
            raise PeerListError(
                f"could not get initial peer list: {exc}", original_error=exc
            ) from exc

        members: set[str] = set()
        if self_address:
            members.add(self_address)

        for peer in peers:
            if not peer.address or peer.address == self_address:
                continue
            if self._evaluator.is_ready(peer):
                members.add(peer.address)

        if not members:
            raise EmptyPeerSetError()

        logger.debug("Initial peer list = %s", sorted(members))
        return members
