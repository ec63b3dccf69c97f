"""Domain events for peer membership.

Change events come in from the orchestrator's watch stream. Notifications go
out to the caller's callback whenever a peer's readiness flips. Both follow
the frozen dataclass pattern used throughout the domain layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from peerwatch.domain.peer import PeerSnapshot


class ChangeEventType(str, Enum):
    """Lifecycle event types reported by the orchestrator watch.

    Attributes:
        ADDED: The object started matching the watch scope.
        MODIFIED: The object changed. Readiness flips arrive as MODIFIED.
        DELETED: The object stopped matching the watch scope.
    """

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"


class TransitionKind(Enum):
    """Membership transitions delivered to the notify callback.

    Attributes:
        ADDED: The peer became ready and joined the membership set.
        REMOVED: The peer stopped being ready and left the membership set.
    """

    ADDED = 1
    REMOVED = 2


@dataclass(frozen=True)
class ChangeEvent:
    """Immutable event read from the orchestrator watch stream.

    Attributes:
        event_type: Raw event type string as sent by the orchestrator.
        peer: The peer the event is about, or None when the payload was not
            a peer object (e.g., an error status).
        raw_object: The original payload, kept for diagnostics.
    """

    event_type: str
    peer: PeerSnapshot | None
    raw_object: Any = None

    @property
    def kind(self) -> ChangeEventType | None:
        """Classify the raw event type.

        Returns:
            The matching ChangeEventType, or None for types the membership
            engine does not know about (e.g., "ERROR", "BOOKMARK").
        """
        try:
            return ChangeEventType(self.event_type)
        except ValueError:
            return None


@dataclass(frozen=True)
class Notification:
    """A single membership transition.

    Attributes:
        address: Address of the peer that transitioned.
        kind: Whether the peer was added or removed.
    """

    address: str
    kind: TransitionKind
