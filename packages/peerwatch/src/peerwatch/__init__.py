"""peer-watch: Live membership of the ready peers of a Kubernetes workload."""

__version__ = "0.1.0"

from peerwatch.domain.events import TransitionKind
from peerwatch.domain.exceptions import (
    EmptyPeerSetError,
    PeerListError,
    PeerWatchConfigError,
    PeerWatchError,
)
from peerwatch.domain.peer import WatchScope
from peerwatch.domain.settings import PeerWatchSettings
from peerwatch.usecases.initialization_gate import InitializationGate
from peerwatch.watcher import PeerWatcher, initialize

__all__ = [
    "TransitionKind",
    "EmptyPeerSetError",
    "PeerListError",
    "PeerWatchConfigError",
    "PeerWatchError",
    "WatchScope",
    "PeerWatchSettings",
    "InitializationGate",
    "PeerWatcher",
    "initialize",
]
