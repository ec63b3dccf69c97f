"""Fake metrics adapter for testing.

Provides a test double for MetricsPort that records all metric updates
for assertion in tests.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from peerwatch.domain.events import TransitionKind


@dataclass(frozen=True)
class MetricCall:
    """Record of a single metric update.

    Attributes:
        metric_name: Name of the metric that was updated.
        value: Value that was set.
    """

    metric_name: str
    value: float | int | bool | str


class FakeMetricsAdapter:
    """Fake implementation of MetricsPort for testing.

    Records all metric updates for later assertion.

    Example:
        >>> fake = FakeMetricsAdapter()
        >>> fake.set_peer_count(2)
        >>> fake.current_peer_count
        2
        >>> fake.calls
        [MetricCall(metric_name='peers', value=2)]
    """

    def __init__(self) -> None:
        """Initialize with no recorded state."""
        self._lock = threading.Lock()
        self._peer_count: int | None = None
        self._watch_active: bool | None = None
        self._transitions: dict[TransitionKind, int] = {}
        self._calls: list[MetricCall] = []

    @property
    def calls(self) -> list[MetricCall]:
        """Return a copy of all metric update calls, in order of invocation."""
        with self._lock:
            return list(self._calls)

    @property
    def current_peer_count(self) -> int | None:
        """Return last set peer count, or None if never set."""
        return self._peer_count

    @property
    def current_watch_active(self) -> bool | None:
        """Return last set watch status, or None if never set."""
        return self._watch_active

    def transition_count(self, kind: TransitionKind) -> int:
        """Return how many transitions of ``kind`` were recorded."""
        with self._lock:
            return self._transitions.get(kind, 0)

    def set_peer_count(self, count: int) -> None:
        """Record peer count update."""
        with self._lock:
            self._peer_count = count
            self._calls.append(MetricCall("peers", count))

    def record_transition(self, kind: TransitionKind) -> None:
        """Record one transition."""
        with self._lock:
            self._transitions[kind] = self._transitions.get(kind, 0) + 1
            self._calls.append(MetricCall("transitions", kind.name.lower()))

    def set_watch_active(self, active: bool) -> None:
        """Record watch status update."""
        with self._lock:
            self._watch_active = active
            self._calls.append(MetricCall("watch_active", active))

    def reset(self) -> None:
        """Reset all state and calls."""
        with self._lock:
            self._peer_count = None
            self._watch_active = None
            self._transitions.clear()
            self._calls.clear()
