"""peerwatch settings domain entity."""

from dataclasses import dataclass, field

from peerwatch.domain.exceptions import PeerWatchConfigError
from peerwatch.domain.peer import WatchScope
from peerwatch.domain.retry import RetryPolicy

DEFAULT_NAMESPACE = "default"
DEFAULT_LABEL_SELECTOR = "app=peer-watch"


@dataclass(frozen=True)
class PeerWatchSettings:
    """peerwatch configuration settings.

    Domain entity with zero external dependencies. Everything the embedding
    process needs to start watching: who we are, which peers to track, and
    where the orchestrator credentials come from.

    Attributes:
        self_address: Address of this node (the pod IP). Must be non-empty.
        namespace: Namespace of the peers. Defaults to "default".
        label_selector: Label selector of the peers. Defaults to
            "app=peer-watch".
        use_cluster_credentials: Use the in-cluster service account.
        kubeconfig: Absolute path to a kubeconfig file. Used when
            use_cluster_credentials is False.
        debug: Log the raw event stream at DEBUG level.
        watch_retry: Reconnect policy for the watch stream.
    """

    self_address: str
    namespace: str = DEFAULT_NAMESPACE
    label_selector: str = DEFAULT_LABEL_SELECTOR
    use_cluster_credentials: bool = False
    kubeconfig: str | None = None
    debug: bool = False
    watch_retry: RetryPolicy = field(default_factory=RetryPolicy)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        self._validate_self_address()
        self._validate_namespace()
        self._validate_credentials()

    def _validate_self_address(self) -> None:
        """Validate self_address is non-empty and non-whitespace."""
        if not self.self_address:
            raise PeerWatchConfigError("self_address cannot be empty")

        if not self.self_address.strip():
            raise PeerWatchConfigError("self_address cannot be whitespace-only")

    def _validate_namespace(self) -> None:
        """Validate namespace is not empty or whitespace-only."""
        if not self.namespace or not self.namespace.strip():
            raise PeerWatchConfigError("namespace cannot be empty or whitespace-only")

    def _validate_credentials(self) -> None:
        """Validate that some credentials source is configured."""
        if not self.use_cluster_credentials and not self.kubeconfig:
            raise PeerWatchConfigError(
                "either kubeconfig or use_cluster_credentials must be set"
            )

    @property
    def scope(self) -> WatchScope:
        """The watch scope described by these settings."""
        return WatchScope(
            namespace=self.namespace.strip(), label_selector=self.label_selector
        )
