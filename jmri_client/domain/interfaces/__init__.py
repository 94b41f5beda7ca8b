"""Domain interfaces for the JMRI WebSocket client.

This module defines the contracts that infrastructure implementations
must fulfill. Application code depends on ITransport only, so the real
client and the test double are interchangeable.
"""

from .i_transport import ITransport, MessageHandler, EventHandler, ErrorHandler
from .i_socket_connection import ISocketConnection, SocketConnector, Frame

__all__ = [
    "ITransport",
    "MessageHandler",
    "EventHandler",
    "ErrorHandler",
    "ISocketConnection",
    "SocketConnector",
    "Frame",
]
