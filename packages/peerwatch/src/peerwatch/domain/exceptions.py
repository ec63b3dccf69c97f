"""Domain exceptions.

Exception hierarchy:
- PeerWatchError: Base exception for everything raised by peerwatch.
  - PeerWatchConfigError: Invalid or missing configuration. Raised by domain
    value objects (e.g., PeerWatchSettings, RetryPolicy) and by the
    environment adapters before anything is started.
  - PeerListError: The initial peer listing could not be retrieved.
  - EmptyPeerSetError: The initial membership set came out empty, not even
    containing this node.
"""


class PeerWatchError(Exception):
    """Base exception for all peerwatch errors."""

    pass


class PeerWatchConfigError(PeerWatchError):
    """Raised when peerwatch configuration is invalid.

    Fatal before startup: no partial operation is possible without a valid
    self address, scope and credentials source.
    """

    pass


class PeerListError(PeerWatchError):
    """Raised when the orchestrator cannot list the peers of a scope.

    This is recoverable. Callers may fall back to a membership set that
    contains only this node and keep watching for changes.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying exception raised by the orchestrator
            client (optional).
    """

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize PeerListError.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused the failure.
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class EmptyPeerSetError(PeerWatchError):
    """Raised when the initial membership set is empty.

    The self address is always seeded into the set, so an empty set means
    the node identity itself is broken.
    """

    def __init__(self, message: str = "no peers detected, not even self") -> None:
        super().__init__(message)
