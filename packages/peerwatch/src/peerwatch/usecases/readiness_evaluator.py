"""ReadinessEvaluator use case: decides whether a peer can receive traffic."""

from __future__ import annotations

from peerwatch.domain.peer import READY_CONDITION, PeerSnapshot


class ReadinessEvaluator:
    """Single source of truth for "is this peer usable".

    A peer is ready iff it reports a condition named "Ready" whose status is
    true. A peer without that condition is not ready. Pure and total: no
    side effects and never raises.
    """

    def is_ready(self, peer: PeerSnapshot) -> bool:
        """Check whether ``peer`` is ready.

        Args:
            peer: The peer snapshot to evaluate.

        Returns:
            True if a "Ready" condition with status true exists.
        """
        return any(
            condition.type == READY_CONDITION and condition.status
            for condition in peer.conditions
        )
