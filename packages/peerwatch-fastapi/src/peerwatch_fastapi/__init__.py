"""FastAPI adapter for peer-watch."""

from peerwatch_fastapi.app import create_app
from peerwatch_fastapi.routes import create_peers_router
from peerwatch_fastapi.settings import get_peerwatch_settings

__all__ = ["create_app", "create_peers_router", "get_peerwatch_settings"]
