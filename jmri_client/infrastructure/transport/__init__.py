"""WebSocket transport implementations.

This module contains the connection manager implementing ITransport and
the adapter over the websockets library it uses by default.
"""

from .websocket_client import WebSocketClient
from .websockets_adapter import WebsocketsAdapter, connect_websocket
from .payload_codec import decode_payload, encode_payload

__all__ = [
    "WebSocketClient",
    "WebsocketsAdapter",
    "connect_websocket",
    "decode_payload",
    "encode_payload",
]
