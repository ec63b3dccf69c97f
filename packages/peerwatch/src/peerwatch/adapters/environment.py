"""Environment-based settings loader.

Reads the variables a peer-watch pod is normally deployed with:

    POD_IP                              self address (downward API)
    POD_CACHE_NAMESPACE                 namespace of the peers
    POD_CACHE_LABEL_SELECTOR            label selector of the peers
    PEERWATCH_USE_CLUSTER_CREDENTIALS   "true" to use the service account
    PEERWATCH_KUBECONFIG                path to a kubeconfig file
    PEERWATCH_DEBUG                     "true" to log the raw event stream
    PEERWATCH_WATCH_RETRIES             reconnect attempts (default 0)
"""

from __future__ import annotations

import os
from typing import Mapping

from peerwatch.adapters.ports import EnvironmentSelfAddressResolver
from peerwatch.domain.exceptions import PeerWatchConfigError
from peerwatch.domain.retry import RetryPolicy
from peerwatch.domain.settings import (
    DEFAULT_LABEL_SELECTOR,
    DEFAULT_NAMESPACE,
    PeerWatchSettings,
)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _parse_bool(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


def load_settings_from_env(environ: Mapping[str, str] | None = None) -> PeerWatchSettings:
    """Build PeerWatchSettings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Validated PeerWatchSettings.

    Raises:
        PeerWatchConfigError: If POD_IP is missing or empty, no credentials
            source is configured, or PEERWATCH_WATCH_RETRIES is not an integer.
    """
    env = os.environ if environ is None else environ

    try:
        self_address = EnvironmentSelfAddressResolver(
            environ=env
        ).resolve_self_address()
    except KeyError as exc:
        raise PeerWatchConfigError("pod ip env value cannot be empty") from exc
    except ValueError as exc:
        raise PeerWatchConfigError(str(exc)) from exc

    raw_retries = env.get("PEERWATCH_WATCH_RETRIES", "0")
    try:
        retries = int(raw_retries)
    except ValueError as exc:
        raise PeerWatchConfigError(
            f"PEERWATCH_WATCH_RETRIES must be an integer, got: {raw_retries!r}"
        ) from exc

    return PeerWatchSettings(
        self_address=self_address,
        namespace=env.get("POD_CACHE_NAMESPACE") or DEFAULT_NAMESPACE,
        label_selector=env.get("POD_CACHE_LABEL_SELECTOR") or DEFAULT_LABEL_SELECTOR,
        use_cluster_credentials=_parse_bool(
            env.get("PEERWATCH_USE_CLUSTER_CREDENTIALS")
        ),
        kubeconfig=env.get("PEERWATCH_KUBECONFIG") or None,
        debug=_parse_bool(env.get("PEERWATCH_DEBUG")),
        watch_retry=RetryPolicy(max_retries=retries),
    )
