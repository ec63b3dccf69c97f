"""Unit tests for FakeMetricsAdapter."""

import pytest

from peerwatch.adapters.fakes import FakeMetricsAdapter, MetricCall
from peerwatch.domain.events import TransitionKind


@pytest.mark.unit
@pytest.mark.tier(0)
@pytest.mark.tra("Contract.FakeMetricsAdapter")
class TestFakeMetricsAdapter:
    """Test FakeMetricsAdapter records calls."""

    def test_initial_state(self) -> None:
        fake = FakeMetricsAdapter()
        assert fake.current_peer_count is None
        assert fake.current_watch_active is None
        assert fake.calls == []

    def test_records_calls_in_order(self) -> None:
        fake = FakeMetricsAdapter()
        fake.set_peer_count(2)
        fake.record_transition(TransitionKind.REMOVED)
        fake.set_watch_active(False)

        assert fake.calls == [
            MetricCall("peers", 2),
            MetricCall("transitions", "removed"),
            MetricCall("watch_active", False),
        ]
        assert fake.transition_count(TransitionKind.REMOVED) == 1
        assert fake.transition_count(TransitionKind.ADDED) == 0

    def test_reset(self) -> None:
        fake = FakeMetricsAdapter()
        fake.set_peer_count(2)
        fake.record_transition(TransitionKind.ADDED)
        fake.reset()
        assert fake.calls == []
        assert fake.current_peer_count is None
        assert fake.transition_count(TransitionKind.ADDED) == 0
