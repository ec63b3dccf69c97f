"""FastAPI routes for peer-watch."""

import logging
from typing import Protocol

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse, Response

logger = logging.getLogger(__name__)


class PeerSource(Protocol):
    """Anything reporting the current membership, such as a PeerWatcher."""

    def peers(self) -> list[str]: ...


def create_peers_router(watcher: PeerSource) -> APIRouter:
    """Create FastAPI router with the peer list endpoint.

    Args:
        watcher: Source whose membership is reported

    Returns:
        APIRouter configured with the / endpoint
    """
    router = APIRouter()

    @router.get("/")
    def get_peers() -> Response:
        """Return the current peers as a sorted JSON array of addresses.

        Self is always included. Any failure while reading the membership
        is reported as a 500 with the error text as body.
        """
        try:
            peers = watcher.peers()
        except Exception as exc:
            logger.exception("Failed to read peer list")
            return PlainTextResponse(str(exc), status_code=500)
        return JSONResponse(peers)

    return router
