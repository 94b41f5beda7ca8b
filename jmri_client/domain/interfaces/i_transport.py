"""ITransport interface for message-server connections.

This is the capability contract that application code depends on.
Both the real WebSocketClient and the FakeTransport test double
implement it, so consumers can be tested without a live server.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable

MessageHandler = Callable[[Any], None]
EventHandler = Callable[[], None]
ErrorHandler = Callable[[BaseException], None]


class ITransport(ABC):
    """Interface for a persistent bidirectional message connection.

    Connection lifecycle:
        1. on_*() → register at most one handler per event kind
        2. connect() → resolves once the transport reports open
        3. send(payload) → hand payloads to the transport (many times)
        4. disconnect() → close, cancel any pending reconnect

    Registering a handler replaces the previous one for the same kind.

    Example:
        >>> transport = WebSocketClient("localhost", 12090)
        >>> transport.on_message(print)
        >>> await transport.connect()
        >>> await transport.send({"type": "ping"})
        True
        >>> await transport.disconnect()
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection.

        Returns immediately without side effects when already connected.

        Raises:
            TransportError: If the attempt fails before the transport opens.
                The registered error handler is invoked first.
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection and cancel any pending reconnect.

        Safe to call multiple times, or when never connected.
        """

    @abstractmethod
    async def send(self, payload: Any) -> bool:
        """Send a payload.

        Non-text payloads are JSON-encoded first.

        Args:
            payload: str sent verbatim; anything else JSON-encoded

        Returns:
            True once handed to the transport, False when not connected.
            Never raises.
        """

    @abstractmethod
    def on_message(self, handler: MessageHandler) -> None:
        """Register the handler for inbound payloads."""

    @abstractmethod
    def on_connect(self, handler: EventHandler) -> None:
        """Register the handler for successful opens."""

    @abstractmethod
    def on_disconnect(self, handler: EventHandler) -> None:
        """Register the handler for closures."""

    @abstractmethod
    def on_error(self, handler: ErrorHandler) -> None:
        """Register the handler for pre-open transport failures."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True only while in the connected state."""
