"""Fixtures for FastAPI adapter unit tests."""

import pytest

from peerwatch.adapters.fakes import FakeOrchestrator, make_peer
from peerwatch.domain.settings import PeerWatchSettings


@pytest.fixture
def pydantic_settings_dict() -> dict[str, str | bool | int | None]:
    """Example Pydantic settings dict (snake_case keys)."""
    return {
        "self_address": "10.0.0.1",
        "namespace": "cache",
        "label_selector": "app=cache",
        "use_cluster_credentials": True,
        "kubeconfig": None,
        "debug": False,
        "watch_retries": 2,
    }


@pytest.fixture
def settings() -> PeerWatchSettings:
    return PeerWatchSettings(
        self_address="10.0.0.1",
        namespace="cache",
        label_selector="app=cache",
        use_cluster_credentials=True,
    )


@pytest.fixture
def cluster():
    """FakeOrchestrator listing two ready peers besides self."""
    orchestrator = FakeOrchestrator(
        peers=[
            make_peer("cache-0", "10.0.0.1", True),
            make_peer("cache-1", "10.0.0.3", True),
            make_peer("cache-2", "10.0.0.2", True),
        ]
    )
    yield orchestrator
    orchestrator.close()
