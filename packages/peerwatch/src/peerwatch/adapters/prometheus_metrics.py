"""Prometheus metrics adapter for peerwatch.

Implements MetricsPort using prometheus-client library.
Gracefully handles missing prometheus-client (raises ImportError at init).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prometheus_client import Counter, Gauge

    from peerwatch.domain.events import TransitionKind


class PrometheusMetricsAdapter:
    """Prometheus implementation of MetricsPort.

    All metrics use a configurable prefix (default 'peerwatch_').

    This adapter requires prometheus-client to be installed:
        pip install peer-watch[metrics]

    Example:
        >>> adapter = PrometheusMetricsAdapter(prefix="mycache_peerwatch")
        >>> adapter.set_peer_count(3)  # Sets mycache_peerwatch_peers to 3

    Raises:
        ImportError: If prometheus-client is not installed.
    """

    def __init__(self, prefix: str = "peerwatch") -> None:
        """Initialize Prometheus metrics.

        Args:
            prefix: Metric name prefix. Defaults to "peerwatch".

        Raises:
            ImportError: If prometheus-client is not installed.
        """
        # Import here to make prometheus-client optional
        from prometheus_client import Counter, Gauge

        self._peers: Gauge = Gauge(
            f"{prefix}_peers",
            "Number of ready peers in the membership set, self included",
        )
        self._transitions: Counter = Counter(
            f"{prefix}_transitions",
            "Membership transitions by kind",
            ["kind"],
        )
        self._watch_active: Gauge = Gauge(
            f"{prefix}_watch_active",
            "Change stream status: 1=open, 0=stopped",
        )

    def set_peer_count(self, count: int) -> None:
        """Set membership size gauge.

        Args:
            count: Number of addresses in the membership set.
        """
        self._peers.set(count)

    def record_transition(self, kind: TransitionKind) -> None:
        """Increment the transition counter for ``kind``.

        Args:
            kind: TransitionKind.ADDED or TransitionKind.REMOVED.
        """
        self._transitions.labels(kind=kind.name.lower()).inc()

    def set_watch_active(self, active: bool) -> None:
        """Set watch status gauge.

        Args:
            active: True if the stream is open (1), False otherwise (0).
        """
        self._watch_active.set(1 if active else 0)
