"""Custom exceptions for the JMRI WebSocket client.

These represent expected transport conditions. Callers that only care
about "did it work" can catch TransportError.
"""


class TransportError(Exception):
    """Base class for transport-level failures."""


class ConnectionFailedError(TransportError):
    """Connection attempt failed before the transport opened.

    The underlying library error is chained as ``__cause__``.

    Example:
        >>> try:
        ...     await client.connect()
        ... except ConnectionFailedError as err:
        ...     print(f"Server unavailable: {err.__cause__}")
    """

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        message = f"Failed to connect to {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotConnectedError(TransportError):
    """Operation needs an open socket but none is available."""


class PayloadEncodeError(TransportError):
    """Outbound payload cannot be represented as JSON text."""
