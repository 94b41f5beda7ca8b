"""Fake socket handle and connector for WebSocketClient tests.

FakeConnector stands in for the websockets library: the client calls it
with a URL and gets back a FakeSocket whose inbound frames and closure
are driven by the test.
"""

import asyncio
from collections import deque
from typing import AsyncIterator, Deque, List, Optional

from jmri_client.domain.exceptions import NotConnectedError
from jmri_client.domain.interfaces import Frame, ISocketConnection

_CLOSE = object()


async def settle(iterations: int = 5) -> None:
    """Let pending callbacks and tasks run."""
    for _ in range(iterations):
        await asyncio.sleep(0)


class FakeSocket(ISocketConnection):
    """In-memory socket handle.

    Attributes:
        sent: Text frames written by the client
        closed: Whether either side closed the socket
        fail_send: Make send() raise NotConnectedError
    """

    def __init__(self):
        self._inbound: asyncio.Queue = asyncio.Queue()
        self.sent: List[str] = []
        self.closed = False
        self.close_calls = 0
        self.fail_send = False

    async def send(self, message: str) -> None:
        if self.closed or self.fail_send:
            raise NotConnectedError("Socket closed")
        self.sent.append(message)

    async def close(self) -> None:
        self.close_calls += 1
        if not self.closed:
            self.closed = True
            self._inbound.put_nowait(_CLOSE)

    def __aiter__(self) -> AsyncIterator[Frame]:
        return self._frames()

    async def _frames(self) -> AsyncIterator[Frame]:
        while True:
            frame = await self._inbound.get()
            if frame is _CLOSE:
                return
            if isinstance(frame, BaseException):
                raise frame
            yield frame

    # Test helper methods

    def push(self, frame: Frame) -> None:
        """Queue an inbound frame from the server."""
        self._inbound.put_nowait(frame)

    def fail_receive(self, error: BaseException) -> None:
        """Make the receive side raise error while the socket stays open."""
        self._inbound.put_nowait(error)

    def server_close(self) -> None:
        """Simulate the server closing the connection."""
        self.closed = True
        self._inbound.put_nowait(_CLOSE)


class FakeConnector:
    """Callable socket factory recording every connect attempt.

    Example:
        >>> connector = FakeConnector()
        >>> client = WebSocketClient(connector=connector)
        >>> await client.connect()
        >>> connector.last_socket.push('{"type":"hello"}')
    """

    def __init__(self):
        self.calls: List[str] = []
        self.sockets: List[FakeSocket] = []
        self.gate: Optional[asyncio.Event] = None
        self._failures: Deque[BaseException] = deque()

    async def __call__(self, url: str) -> FakeSocket:
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        if self._failures:
            raise self._failures.popleft()
        socket = FakeSocket()
        self.sockets.append(socket)
        return socket

    def fail_next(self, error: Optional[BaseException] = None, times: int = 1) -> None:
        """Make the next connect attempts raise error (default OSError)."""
        for _ in range(times):
            self._failures.append(error or OSError("Connection refused"))

    def hold(self) -> asyncio.Event:
        """Block connect attempts until the returned event is set."""
        self.gate = asyncio.Event()
        return self.gate

    @property
    def last_socket(self) -> FakeSocket:
        return self.sockets[-1]
