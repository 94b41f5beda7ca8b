"""Test doubles for unit testing.

Test doubles are fake implementations of interfaces used for testing.
They're faster and more reliable than mocking, and they implement the
actual interface contracts.

- FakeTransport: ITransport double for application-layer tests
- FakeSocket / FakeConnector: socket handle doubles for WebSocketClient tests

Example:
    >>> from tests.doubles import FakeTransport
    >>> transport = FakeTransport(mock_responses=[{"type": "pong"}])
    >>> await transport.connect()
    >>> await transport.send({"type": "ping"})
    True
"""

from .fake_transport import FakeTransport
from .fake_socket import FakeConnector, FakeSocket, settle

__all__ = [
    "FakeTransport",
    "FakeConnector",
    "FakeSocket",
    "settle",
]
