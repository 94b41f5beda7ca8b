"""ISocketConnection interface for raw socket handles.

The connection manager owns exactly one handle at a time and talks to it
only through this contract. Production handles come from
WebsocketsAdapter; tests supply an in-memory fake.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Awaitable, Callable, Union

Frame = Union[str, bytes]


class ISocketConnection(ABC):
    """An open socket to the remote endpoint.

    Iterating the handle yields inbound frames until the peer closes
    the connection, at which point iteration ends.
    """

    @abstractmethod
    async def send(self, message: str) -> None:
        """Write one text frame.

        Raises:
            TransportError: If the socket is no longer open
        """

    @abstractmethod
    async def close(self) -> None:
        """Close the socket. Idempotent."""

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[Frame]:
        """Iterate inbound frames until closure."""


SocketConnector = Callable[[str], Awaitable[ISocketConnection]]
