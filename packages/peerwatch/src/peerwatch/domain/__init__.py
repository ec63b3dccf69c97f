"""Domain layer: Entities with zero external dependencies."""

from peerwatch.domain.events import (
    ChangeEvent,
    ChangeEventType,
    Notification,
    TransitionKind,
)
from peerwatch.domain.exceptions import (
    EmptyPeerSetError,
    PeerListError,
    PeerWatchConfigError,
    PeerWatchError,
)
from peerwatch.domain.peer import PeerCondition, PeerSnapshot, WatchScope
from peerwatch.domain.retry import RetryPolicy
from peerwatch.domain.settings import PeerWatchSettings

__all__ = [
    "ChangeEvent",
    "ChangeEventType",
    "Notification",
    "TransitionKind",
    "EmptyPeerSetError",
    "PeerListError",
    "PeerWatchConfigError",
    "PeerWatchError",
    "PeerCondition",
    "PeerSnapshot",
    "WatchScope",
    "RetryPolicy",
    "PeerWatchSettings",
]
