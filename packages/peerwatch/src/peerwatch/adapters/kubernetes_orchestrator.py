"""Kubernetes implementation of the OrchestratorPort.

Lists and watches pods through the official ``kubernetes`` client and maps
``V1Pod`` objects to PeerSnapshot value objects.
"""

from __future__ import annotations

import functools
import logging
import threading
from typing import TYPE_CHECKING, Any, Iterator

from kubernetes import client, config, watch

from peerwatch.adapters.ports import OrchestratorPort
from peerwatch.domain.events import ChangeEvent
from peerwatch.domain.exceptions import PeerWatchConfigError
from peerwatch.domain.peer import PeerCondition, PeerSnapshot

if TYPE_CHECKING:
    from peerwatch.domain.peer import WatchScope
    from peerwatch.domain.settings import PeerWatchSettings

logger = logging.getLogger(__name__)

USER_AGENT = "peer-watch"


def pod_to_peer(pod: client.V1Pod) -> PeerSnapshot:
    """Convert a V1Pod into a PeerSnapshot.

    Pods that have not been scheduled yet carry no status or IP; they map to
    a peer with an empty address and no conditions.

    Args:
        pod: The pod as returned by the Kubernetes API.

    Returns:
        PeerSnapshot with the pod's name, IP and conditions.
    """
    name = pod.metadata.name if pod.metadata is not None else ""
    status = pod.status
    if status is None:
        return PeerSnapshot(name=name or "")

    conditions = tuple(
        PeerCondition(type=condition.type, status=condition.status == "True")
        for condition in (status.conditions or [])
    )
    return PeerSnapshot(
        name=name or "",
        address=status.pod_ip or "",
        conditions=conditions,
    )


class KubernetesOrchestratorAdapter:
    """Kubernetes-backed adapter for listing and watching peer pods.

    This adapter implements OrchestratorPort for use by SnapshotFetcher and
    ChangeStreamProcessor.

    Example:
        >>> adapter = KubernetesOrchestratorAdapter.from_settings(settings)
        >>> peers = adapter.list_peers(settings.scope)
    """

    def __init__(
        self,
        core_api: client.CoreV1Api,
        *,
        watch_factory: Any = watch.Watch,
    ) -> None:
        """Initialize the adapter.

        Args:
            core_api: CoreV1Api used for pod list and watch calls.
            watch_factory: Callable returning a ``kubernetes.watch.Watch``-like
                          object. Injected for testing.
        """
        self._core_api = core_api
        self._watch_factory = watch_factory
        self._lock = threading.Lock()
        self._sessions: set[_WatchSession] = set()

    @classmethod
    def from_settings(cls, settings: PeerWatchSettings) -> KubernetesOrchestratorAdapter:
        """Build an adapter from in-cluster credentials or a kubeconfig file.

        Args:
            settings: Settings selecting the credentials source.

        Returns:
            A ready to use adapter with the ``peer-watch`` user agent.

        Raises:
            PeerWatchConfigError: If no credentials source is configured or
                the configuration cannot be loaded.
        """
        configuration = client.Configuration()
        try:
            if settings.use_cluster_credentials:
                config.load_incluster_config(client_configuration=configuration)
            elif settings.kubeconfig:
                config.load_kube_config(
                    config_file=settings.kubeconfig,
                    client_configuration=configuration,
                )
            else:
                raise PeerWatchConfigError("kubernetes client config is not set")
        except config.ConfigException as exc:
            raise PeerWatchConfigError(
                f"could not load kubernetes client config: {exc}"
            ) from exc

        api_client = client.ApiClient(configuration=configuration)
        api_client.user_agent = USER_AGENT
        return cls(client.CoreV1Api(api_client))

    def list_peers(self, scope: WatchScope) -> list[PeerSnapshot]:
        """List every pod in the scope.

        Args:
            scope: Namespace and label selector.

        Returns:
            One PeerSnapshot per listed pod.

        Raises:
            kubernetes.client.ApiException or urllib3 errors on failure.
        """
        pods = self._core_api.list_namespaced_pod(
            scope.namespace, label_selector=scope.label_selector
        )
        return [pod_to_peer(pod) for pod in pods.items]

    def watch_peers(self, scope: WatchScope) -> Iterator[ChangeEvent]:
        """Stream pod events for the scope over a single watch request.

        The underlying request is issued lazily on first iteration, so
        connection errors surface from ``next()``. The client's own resume
        from the last resource version is disabled: the iterator ends when
        the server closes the stream and reconnecting is left to the caller.

        Args:
            scope: Namespace and label selector.

        Yields:
            ChangeEvent per pod event. Objects that are not pods are yielded
            with ``peer=None``.
        """
        session = _WatchSession(self._watch_factory())
        list_namespaced_pod = self._core_api.list_namespaced_pod

        # Watch reads the event object type from the wrapped docstring
        @functools.wraps(list_namespaced_pod)
        def list_pods(*args: Any, **kwargs: Any) -> Any:
            response = list_namespaced_pod(*args, **kwargs)
            with self._lock:
                session.responses.append(response)
                closed = session.closed
            if closed:
                _interrupt(response)
            return response

        with self._lock:
            self._sessions.add(session)
        try:
            for event in session.watch.stream(
                list_pods,
                namespace=scope.namespace,
                label_selector=scope.label_selector,
                timeout_seconds=None,
            ):
                obj = event.get("object")
                peer = pod_to_peer(obj) if isinstance(obj, client.V1Pod) else None
                yield ChangeEvent(
                    event_type=str(event.get("type", "")),
                    peer=peer,
                    raw_object=obj,
                )
        finally:
            with self._lock:
                self._sessions.discard(session)
            session.watch.stop()

    def close(self) -> None:
        """Interrupt every open watch stream.

        Safe to call from any thread. A stream blocked waiting for the next
        event ends promptly, either normally or with a connection error.
        """
        with self._lock:
            sessions = list(self._sessions)
            for session in sessions:
                session.closed = True
            responses = [r for session in sessions for r in session.responses]

        for session in sessions:
            session.watch.stop()
        for response in responses:
            _interrupt(response)
        if sessions:
            logger.debug("Closed %d open pod watch(es)", len(sessions))


class _WatchSession:
    """One watch_peers() call: its Watch and the responses it opened."""

    def __init__(self, pod_watch: Any) -> None:
        self.watch = pod_watch
        self.responses: list[Any] = []
        self.closed = False


def _interrupt(response: Any) -> None:
    """Unblock a read pending on ``response`` from another thread."""
    shutdown = getattr(response, "shutdown", None)
    try:
        if shutdown is not None:
            shutdown()
        else:
            response.close()
    except OSError as exc:
        logger.debug("Error interrupting watch response: %s", exc)


# Runtime protocol check
assert isinstance(
    KubernetesOrchestratorAdapter.__new__(KubernetesOrchestratorAdapter),
    OrchestratorPort,
), "KubernetesOrchestratorAdapter must implement OrchestratorPort"
