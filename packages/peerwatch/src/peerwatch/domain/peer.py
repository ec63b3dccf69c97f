"""Peer value objects.

A peer is one instance of the watched service as reported by the
orchestrator: its object name, network address and status conditions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from peerwatch.domain.exceptions import PeerWatchConfigError

READY_CONDITION = "Ready"


@dataclass(frozen=True)
class PeerCondition:
    """A single named status condition reported for a peer.

    Attributes:
        type: Condition name (e.g., "Ready", "ContainersReady").
        status: True if the condition currently holds.
    """

    type: str
    status: bool


@dataclass(frozen=True)
class PeerSnapshot:
    """Point-in-time view of a peer.

    Readiness is not stored here. It is derived from ``conditions`` every
    time a snapshot is evaluated.

    Attributes:
        name: Orchestrator object name (e.g., the pod name).
        address: Reported network address. Empty while the orchestrator has
            not assigned one yet.
        conditions: Status conditions in the order the orchestrator reported
            them.
    """

    name: str
    address: str = ""
    conditions: tuple[PeerCondition, ...] = ()

    def __post_init__(self) -> None:
        # Addresses are compared verbatim, surrounding whitespace never matches.
        object.__setattr__(self, "address", self.address.strip())


@dataclass(frozen=True)
class WatchScope:
    """The set of peers to track: a namespace plus a label selector.

    The same scope is used for the initial listing and for the watch, so
    both see exactly the same peers.

    Attributes:
        namespace: Namespace the peers live in. Must be non-empty.
        label_selector: Label selector the peers must match (e.g.,
            "app=peer-watch"). Empty selects every peer in the namespace.
    """

    namespace: str
    label_selector: str = field(default="")

    def __post_init__(self) -> None:
        """Validate scope."""
        if not self.namespace or not self.namespace.strip():
            raise PeerWatchConfigError("namespace cannot be empty")
