"""JMRI WebSocket client.

A persistent, auto-reconnecting WebSocket connection to a JMRI server,
exposed through the ITransport capability interface.
"""

from .config_loader import load_client_config, validate_client_config
from .domain.exceptions import (
    ConnectionFailedError,
    NotConnectedError,
    PayloadEncodeError,
    TransportError,
)
from .domain.interfaces import ITransport
from .domain.value_objects import ConnectionTarget, ReconnectPolicy
from .infrastructure.state_machines import ConnectionState
from .infrastructure.transport import WebSocketClient
from .presentation import create_container

__version__ = "0.1.0"

__all__ = [
    "ConnectionFailedError",
    "ConnectionState",
    "ConnectionTarget",
    "ITransport",
    "NotConnectedError",
    "PayloadEncodeError",
    "ReconnectPolicy",
    "TransportError",
    "WebSocketClient",
    "create_container",
    "load_client_config",
    "validate_client_config",
]
