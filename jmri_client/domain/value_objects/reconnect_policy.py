"""ReconnectPolicy value object.

Encapsulates the exponential backoff used after unsolicited closures.
"""

from dataclasses import dataclass

from ...const import (
    MAX_RECONNECT_ATTEMPTS,
    RECONNECT_BASE_DELAY,
    RECONNECT_MAX_DELAY,
)


@dataclass(frozen=True)
class ReconnectPolicy:
    """Bounded exponential backoff without jitter.

    The delay for attempt ``n`` (1-based) is
    ``min(base_delay * 2 ** n, max_delay)``. With the defaults the
    sequence for attempts 1..5 is 2, 4, 8, 16, 30 seconds.

    Attributes:
        max_attempts: Retries allowed before giving up (0 disables retry)
        base_delay: Backoff base in seconds
        max_delay: Ceiling for any single delay in seconds

    Example:
        >>> policy = ReconnectPolicy()
        >>> [policy.delay_for(n) for n in range(1, 6)]
        [2.0, 4.0, 8.0, 16.0, 30.0]
        >>> policy.should_retry(5)
        False
    """

    max_attempts: int = MAX_RECONNECT_ATTEMPTS
    base_delay: float = RECONNECT_BASE_DELAY
    max_delay: float = RECONNECT_MAX_DELAY

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {self.max_attempts}")
        if self.base_delay <= 0:
            raise ValueError(f"base_delay must be > 0, got {self.base_delay}")
        if self.max_delay < self.base_delay:
            raise ValueError(
                f"max_delay ({self.max_delay}) must be >= base_delay "
                f"({self.base_delay})"
            )

    def should_retry(self, attempts: int) -> bool:
        """Check whether another retry is allowed.

        Args:
            attempts: Retries already scheduled since the last successful open

        Returns:
            True if attempts is below max_attempts
        """
        return attempts < self.max_attempts

    def delay_for(self, attempt: int) -> float:
        """Get the delay before the given retry.

        Args:
            attempt: 1-based retry number

        Returns:
            Delay in seconds, capped at max_delay
        """
        # 2**64 outgrows any delay cap; larger exponents overflow float
        exponent = min(attempt, 64)
        return float(min(self.base_delay * 2**exponent, self.max_delay))
