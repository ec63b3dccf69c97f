"""Port interface and no-op implementation for metrics collection.

Metrics ports follow fire-and-forget semantics: implementations may
buffer, sample, or drop metrics as needed. No exceptions should propagate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from peerwatch.domain.events import TransitionKind


@runtime_checkable
class MetricsPort(Protocol):
    """Port interface for metrics collection.

    Contract:
        - All methods are fire-and-forget (no return value, no exceptions)
        - set_* methods update gauges to specific values
        - record_* methods increment counters
        - Called from the watch thread; thread safety is implementation-defined
    """

    def set_peer_count(self, count: int) -> None:
        """Set the membership size gauge (self included).

        Args:
            count: Number of addresses currently in the membership set.
        """
        ...

    def record_transition(self, kind: TransitionKind) -> None:
        """Count one membership transition.

        Args:
            kind: Whether a peer was added or removed.
        """
        ...

    def set_watch_active(self, active: bool) -> None:
        """Set the watch status gauge.

        Args:
            active: True while the change stream is open (gauge 1),
                   False once it has stopped (gauge 0).
        """
        ...


class NoOpMetricsAdapter:
    """No-operation metrics adapter for when metrics are disabled.

    Example:
        >>> adapter = NoOpMetricsAdapter()
        >>> adapter.set_peer_count(3)  # Does nothing
    """

    def set_peer_count(self, count: int) -> None:
        """No-op."""
        pass

    def record_transition(self, kind: TransitionKind) -> None:
        """No-op."""
        pass

    def set_watch_active(self, active: bool) -> None:
        """No-op."""
        pass
