"""Port interfaces for the peerwatch core package.

Ports define the contracts that adapters must implement.
These are Protocol classes (structural subtyping) for flexible testing.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterable, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from peerwatch.domain.events import ChangeEvent
    from peerwatch.domain.peer import PeerSnapshot, WatchScope


@runtime_checkable
class OrchestratorPort(Protocol):
    """Port interface for the cluster orchestrator.

    Implementations list and watch the peers matching a WatchScope. The
    orchestrator is the only source of truth for which peers exist and
    whether they are ready.

    Contract:
        - list_peers() and watch_peers() must honour the scope identically
        - watch_peers() yields events in the order the orchestrator emits them
        - One watch_peers() call is one stream session: the iterable ends
          when the underlying stream closes, without resuming on its own
        - close() interrupts every open stream; it may be called from any
          thread and the interrupted iterables end promptly
        - Payloads that are not peers are yielded with ``peer=None``
    """

    def list_peers(self, scope: WatchScope) -> list[PeerSnapshot]:
        """List all peers currently matching the scope.

        Args:
            scope: Namespace and label selector to list.

        Returns:
            Snapshots of every matching peer, ready or not.

        Raises:
            May raise any client/network exception if the listing fails.
        """
        ...

    def watch_peers(self, scope: WatchScope) -> Iterable[ChangeEvent]:
        """Open a change stream for the peers matching the scope.

        Args:
            scope: Namespace and label selector to watch.

        Returns:
            A lazily produced iterable of ChangeEvent for one stream session.

        Raises:
            May raise any client/network exception if the watch cannot be
            established.
        """
        ...

    def close(self) -> None:
        """Interrupt every watch stream currently open on this orchestrator."""
        ...


@runtime_checkable
class SelfAddressResolverPort(Protocol):
    """Port interface for resolving the current node's address.

    Contract:
        - resolve_self_address() returns a non-empty string
        - The returned string should be consistent across multiple calls
        - May raise KeyError if required configuration is missing
        - May raise ValueError if the resolved address is empty after stripping
    """

    def resolve_self_address(self) -> str:
        """Resolve the current node's address.

        Returns:
            A non-empty address identifying this node among its peers.

        Raises:
            KeyError: If required environment variable or configuration is missing.
            ValueError: If the resolved address is empty after stripping.
        """
        ...


class EnvironmentSelfAddressResolver:
    """Default implementation: resolve the address from the POD_IP environment variable.

    POD_IP is normally injected through the Kubernetes downward API
    (``status.podIP``).
    """

    def __init__(
        self,
        variable: str = "POD_IP",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._variable = variable
        self._environ = environ

    def resolve_self_address(self) -> str:
        """Resolve the address from the configured environment variable.

        Returns:
            The variable's value after stripping whitespace.

        Raises:
            KeyError: If the environment variable is not set.
            ValueError: If the value is empty or whitespace-only after stripping.
        """
        environ = os.environ if self._environ is None else self._environ
        address = environ[self._variable].strip()

        if not address:
            raise ValueError("pod ip cannot be empty or whitespace-only")

        return address
