"""FastAPI application factory for a standalone peer-watch service.

Run with ``uvicorn --factory peerwatch_fastapi.app:create_app``; settings
are then read from the environment (see peerwatch.adapters.environment).
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI

from peerwatch import __version__
from peerwatch.adapters.environment import load_settings_from_env
from peerwatch.domain.exceptions import PeerListError
from peerwatch.usecases.initialization_gate import InitializationGate
from peerwatch.watcher import PeerWatcher, enable_debug_logging
from peerwatch_fastapi.routes import create_peers_router

if TYPE_CHECKING:
    from peerwatch.adapters.metrics_port import MetricsPort
    from peerwatch.adapters.ports import OrchestratorPort
    from peerwatch.domain.events import TransitionKind
    from peerwatch.domain.settings import PeerWatchSettings

logger = logging.getLogger(__name__)


def create_app(
    settings: PeerWatchSettings | None = None,
    orchestrator: OrchestratorPort | None = None,
    metrics: MetricsPort | None = None,
) -> FastAPI:
    """Create the peer-watch FastAPI application.

    Settings and the orchestrator are resolved here. Each run of the
    lifespan builds a fresh PeerWatcher, fetches the initial peers, starts
    watching, and stops the watcher on shutdown.
    When the initial listing fails the service starts with just itself as
    a peer and keeps watching.

    Args:
        settings: Settings to use. Defaults to load_settings_from_env().
        orchestrator: Orchestrator port. Defaults to a Kubernetes adapter
            built from the settings.
        metrics: Optional metrics port.

    Returns:
        FastAPI application serving the peer list at ``/``.

    Raises:
        PeerWatchConfigError: If the settings are missing or invalid.
    """
    if settings is None:
        settings = load_settings_from_env()
    if settings.debug:
        enable_debug_logging()
    if orchestrator is None:
        from peerwatch.adapters.kubernetes_orchestrator import (
            KubernetesOrchestratorAdapter,
        )

        orchestrator = KubernetesOrchestratorAdapter.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        def log_membership(address: str, kind: TransitionKind) -> None:
            logger.info("New pod list = %s", watcher.peers())

        watcher = PeerWatcher(
            settings.self_address,
            settings.scope,
            log_membership,
            orchestrator,
            gate=InitializationGate(),
            retry_policy=settings.watch_retry,
            metrics=metrics,
        )
        app.state.watcher = watcher
        try:
            peers = await asyncio.to_thread(watcher.start)
        except PeerListError as exc:
            logger.warning("error getting initial pods: %s", exc)
            peers = watcher.start_with([settings.self_address])
        logger.debug("init %s", settings.self_address)
        logger.info("initial peer list = %s", peers)
        watcher.mark_initialized()
        try:
            yield
        finally:
            logger.info("Received termination, signaling shutdown")
            await asyncio.to_thread(watcher.stop)

    app = FastAPI(title="peer-watch", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.include_router(create_peers_router(_RunningWatcher(app)))
    return app


class _RunningWatcher:
    """Peer source reading the watcher of the app's current lifespan."""

    def __init__(self, app: FastAPI) -> None:
        self._app = app

    def peers(self) -> list[str]:
        return self._app.state.watcher.peers()
