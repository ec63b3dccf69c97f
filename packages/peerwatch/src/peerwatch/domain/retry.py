"""Watch reconnect policy domain value object."""

from dataclasses import dataclass

from peerwatch.domain.exceptions import PeerWatchConfigError


@dataclass(frozen=True)
class RetryPolicy:
    """Reconnect policy for a broken watch stream.

    The default (``max_retries=0``) never reconnects: when the watch cannot
    be opened or the stream ends, membership stays frozen at its last known
    state. A positive ``max_retries`` reopens the watch after an exponential
    backoff.

    Attributes:
        max_retries: Maximum number of consecutive reconnect attempts.
                    0 means no reconnects. Must be non-negative.
        backoff_base: Base delay in seconds for exponential backoff.
                     Must be positive. Delay = backoff_base * 2^attempt.
        max_backoff: Maximum backoff delay in seconds. Must be positive.
    """

    max_retries: int = 0
    backoff_base: float = 1.0
    max_backoff: float = 30.0

    def __post_init__(self) -> None:
        """Validate retry policy configuration."""
        self._validate_max_retries()
        self._validate_backoff_base()
        self._validate_max_backoff()

    def _validate_max_retries(self) -> None:
        """Validate max_retries is non-negative."""
        if self.max_retries < 0:
            raise PeerWatchConfigError("max_retries cannot be negative")

    def _validate_backoff_base(self) -> None:
        """Validate backoff_base is positive."""
        if self.backoff_base <= 0:
            raise PeerWatchConfigError("backoff_base must be positive")

    def _validate_max_backoff(self) -> None:
        """Validate max_backoff is positive."""
        if self.max_backoff <= 0:
            raise PeerWatchConfigError("max_backoff must be positive")

    def calculate_backoff(self, attempt: int) -> float:
        """Calculate exponential backoff delay for a given attempt.

        Args:
            attempt: The reconnect attempt number (0-indexed).

        Returns:
            Delay in seconds before the next reconnect, capped at max_backoff.
        """
        delay = self.backoff_base * (2**attempt)
        return float(min(delay, self.max_backoff))

    def should_retry(self, attempt: int) -> bool:
        """Determine if another reconnect attempt should be made.

        Args:
            attempt: The current attempt number (0-indexed).

        Returns:
            True if attempt < max_retries, False otherwise.
        """
        return attempt < self.max_retries
