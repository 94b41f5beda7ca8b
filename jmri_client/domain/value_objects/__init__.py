"""Value Objects for the JMRI WebSocket client.

Immutable, self-validating primitives shared by the transport and
application layers.
"""

from .connection_target import ConnectionTarget
from .reconnect_policy import ReconnectPolicy
from .jmri_command import (
    JMRICommand,
    command_to_json,
    create_ping_command,
    get_ping_json_string,
    is_jmri_command,
    is_pong,
)

__all__ = [
    "ConnectionTarget",
    "ReconnectPolicy",
    "JMRICommand",
    "command_to_json",
    "create_ping_command",
    "get_ping_json_string",
    "is_jmri_command",
    "is_pong",
]
