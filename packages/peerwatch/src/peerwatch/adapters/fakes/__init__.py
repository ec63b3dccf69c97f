"""Fake adapters for testing.

This module provides test doubles for port interfaces, enabling
deterministic testing without a real cluster.
"""

from peerwatch.adapters.fakes.fake_metrics import FakeMetricsAdapter, MetricCall
from peerwatch.adapters.fakes.fake_orchestrator import FakeOrchestrator, make_peer

__all__ = [
    "FakeMetricsAdapter",
    "MetricCall",
    "FakeOrchestrator",
    "make_peer",
]
