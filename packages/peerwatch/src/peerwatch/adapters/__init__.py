"""Interface adapters: ports and their orchestrator, environment and metrics implementations.

The Kubernetes adapter is not imported here so that the core can be used
(and tested) without the ``kubernetes`` client installed. Import it from
``peerwatch.adapters.kubernetes_orchestrator``.
"""

from peerwatch.adapters.environment import load_settings_from_env
from peerwatch.adapters.metrics_port import MetricsPort, NoOpMetricsAdapter
from peerwatch.adapters.ports import (
    EnvironmentSelfAddressResolver,
    OrchestratorPort,
    SelfAddressResolverPort,
)

__all__ = [
    "OrchestratorPort",
    "SelfAddressResolverPort",
    "EnvironmentSelfAddressResolver",
    "MetricsPort",
    "NoOpMetricsAdapter",
    "load_settings_from_env",
]
