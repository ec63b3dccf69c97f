"""Settings reader for FastAPI peer-watch adapter."""

from typing import Any

from peerwatch.domain.exceptions import PeerWatchConfigError
from peerwatch.domain.retry import RetryPolicy
from peerwatch.domain.settings import PeerWatchSettings

# Required fields that must be present in Pydantic settings
_REQUIRED_FIELDS = ("self_address",)

# Optional fields that fall back to the PeerWatchSettings defaults
_OPTIONAL_FIELDS = (
    "namespace",
    "label_selector",
    "use_cluster_credentials",
    "kubeconfig",
    "debug",
)


def get_peerwatch_settings(pydantic_settings: dict[str, Any]) -> PeerWatchSettings:
    """Convert Pydantic settings dict to PeerWatchSettings domain object.

    Keys map directly to domain fields, except ``watch_retries`` which
    becomes the ``max_retries`` of the watch RetryPolicy.

    Args:
        pydantic_settings: Pydantic settings dict with snake_case keys

    Returns:
        PeerWatchSettings domain object

    Raises:
        PeerWatchConfigError: If required settings are missing or invalid
    """
    missing = [key for key in _REQUIRED_FIELDS if key not in pydantic_settings]
    if missing:
        raise PeerWatchConfigError(
            f"Missing required peer-watch settings: {', '.join(sorted(missing))}"
        )

    kwargs: dict[str, Any] = {
        field: pydantic_settings[field] for field in _REQUIRED_FIELDS
    }
    for field in _OPTIONAL_FIELDS:
        if pydantic_settings.get(field) is not None:
            kwargs[field] = pydantic_settings[field]

    retries = pydantic_settings.get("watch_retries")
    if retries is not None:
        if isinstance(retries, bool) or not isinstance(retries, int):
            raise PeerWatchConfigError(
                f"watch_retries must be an integer, got: {retries!r}"
            )
        kwargs["watch_retry"] = RetryPolicy(max_retries=retries)

    # Validation happens in __post_init__
    return PeerWatchSettings(**kwargs)
