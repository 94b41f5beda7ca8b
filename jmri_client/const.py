"""Constants for the JMRI WebSocket client.

Timing values are in seconds.
"""

from __future__ import annotations

# Connection target defaults (standard JMRI WebSocket port)
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 12090
DEFAULT_PATH = "/"
URL_SCHEME = "ws"

# Reconnect policy
MAX_RECONNECT_ATTEMPTS = 5
RECONNECT_BASE_DELAY = 1.0
RECONNECT_MAX_DELAY = 30.0

# Opening handshake timeout passed to the websockets library
CONNECT_TIMEOUT = 10.0

# Event kinds accepted by the callback registry
EVENT_MESSAGE = "message"
EVENT_CONNECT = "connect"
EVENT_DISCONNECT = "disconnect"
EVENT_ERROR = "error"
EVENT_GIVE_UP = "give_up"
