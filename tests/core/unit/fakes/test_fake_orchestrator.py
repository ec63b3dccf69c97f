"""Unit tests for FakeOrchestrator."""

import pytest

from peerwatch.adapters.fakes import FakeOrchestrator, make_peer
from peerwatch.domain.events import ChangeEventType
from peerwatch.domain.peer import WatchScope


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("Contract.FakeOrchestrator")
class TestFakeOrchestrator:
    """Test FakeOrchestrator behaves like an orchestrator."""

    def test_make_peer_sets_ready_condition(self) -> None:
        peer = make_peer("cache-1", "10.0.0.2", True)
        assert peer.conditions[0].type == "Ready"
        assert peer.conditions[0].status is True

    def test_list_returns_configured_peers(self, scope: WatchScope) -> None:
        peers = [make_peer("cache-1", "10.0.0.2", True)]
        fake = FakeOrchestrator(peers=peers)
        assert fake.list_peers(scope) == peers
        assert fake.list_calls == [scope]

    def test_list_raises_configured_error(self, scope: WatchScope) -> None:
        fake = FakeOrchestrator(list_error=TimeoutError("slow"))
        with pytest.raises(TimeoutError):
            fake.list_peers(scope)

    def test_stream_delivers_pushed_events_until_closed(self, scope: WatchScope) -> None:
        fake = FakeOrchestrator()
        fake.push_modified("cache-1", "10.0.0.2", ready=True)
        fake.push_modified("cache-1", "10.0.0.2", ready=False)
        fake.close()

        events = list(fake.watch_peers(scope))

        assert [e.kind for e in events] == [ChangeEventType.MODIFIED] * 2
        assert fake.watch_opened.is_set()

    def test_watch_errors_consumed_in_order(self, scope: WatchScope) -> None:
        fake = FakeOrchestrator(watch_errors=[ConnectionError("first")])
        with pytest.raises(ConnectionError, match="first"):
            fake.watch_peers(scope)
        fake.close()
        assert list(fake.watch_peers(scope)) == []
        assert len(fake.watch_calls) == 2

    def test_fail_stream_raises_from_iteration(self, scope: WatchScope) -> None:
        fake = FakeOrchestrator()
        fake.fail_stream(RuntimeError("reset"))
        with pytest.raises(RuntimeError, match="reset"):
            list(fake.watch_peers(scope))
