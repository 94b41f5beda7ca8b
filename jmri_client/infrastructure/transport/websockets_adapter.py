"""Adapter for the websockets library to enable testing.

This adapter wraps a websockets ClientConnection behind the
ISocketConnection contract. In tests, a fake socket is injected instead
of opening a real network connection.
"""

import logging
from typing import AsyncIterator

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed

from ...const import CONNECT_TIMEOUT
from ...domain.exceptions import NotConnectedError
from ...domain.interfaces import Frame, ISocketConnection

_LOGGER = logging.getLogger(__name__)


class WebsocketsAdapter(ISocketConnection):
    """Adapter for websockets ClientConnection.

    This wrapper allows us to:
    1. Inject a fake socket in tests
    2. Translate library close semantics into plain end-of-iteration
    3. Handle websockets API changes in one place

    Example:
        >>> adapter = await connect_websocket("ws://localhost:12090/")
        >>> await adapter.send('{"type":"ping"}')
        >>> async for frame in adapter:
        ...     print(frame)
        >>> await adapter.close()
    """

    def __init__(self, connection: ClientConnection):
        """Initialize adapter with an open connection.

        Args:
            connection: Connection returned by websockets connect()
        """
        self._connection = connection

    async def send(self, message: str) -> None:
        """Send one text frame.

        Raises:
            NotConnectedError: If the connection is already closed
        """
        try:
            await self._connection.send(message)
        except ConnectionClosed as err:
            raise NotConnectedError(f"Socket closed: {err}") from err

    async def close(self) -> None:
        """Close the connection with a normal closure code."""
        await self._connection.close()

    def __aiter__(self) -> AsyncIterator[Frame]:
        return self._frames()

    async def _frames(self) -> AsyncIterator[Frame]:
        """Yield inbound frames until the connection closes.

        Clean and abnormal closures both end iteration; the close code
        is only logged.
        """
        try:
            async for message in self._connection:
                yield message
        except ConnectionClosed as err:
            _LOGGER.debug("Connection closed abnormally: %s", err)


async def connect_websocket(url: str) -> WebsocketsAdapter:
    """Open a WebSocket connection.

    Args:
        url: Endpoint URL (ws:// or wss://)

    Returns:
        Adapter wrapping the open connection

    Raises:
        OSError: If the server is unreachable
        TimeoutError: If the opening handshake exceeds CONNECT_TIMEOUT
        websockets.exceptions.InvalidHandshake: If the server rejects the upgrade
    """
    _LOGGER.debug("Opening WebSocket connection to %s", url)
    connection = await connect(url, open_timeout=CONNECT_TIMEOUT)
    return WebsocketsAdapter(connection)
