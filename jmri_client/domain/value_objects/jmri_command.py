"""JMRI command payloads.

Helpers that build outbound payloads for the JMRI JSON protocol.
Payloads are plain dicts; the transport serializes them.

See http://localhost:12080/help/en/html/web/JsonServlet.shtml on a
running JMRI instance for the message reference.
"""

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

PING_TYPE = "ping"
PONG_TYPE = "pong"


@dataclass(frozen=True)
class JMRICommand:
    """A JMRI JSON command.

    Attributes:
        type: Message type (e.g. "ping", "sensor", "hello")
        method: Optional verb (e.g. "get", "post")
        data: Optional object payload
        list: Optional collection name to list

    Example:
        >>> JMRICommand("sensor", method="get", data={"name": "IS1"}).to_dict()
        {'type': 'sensor', 'method': 'get', 'data': {'name': 'IS1'}}
    """

    type: str
    method: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    list: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a wire dict, omitting unset fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}


def is_jmri_command(obj: Any) -> bool:
    """Check whether obj looks like a JMRI command.

    Args:
        obj: Any value, typically a decoded inbound payload

    Returns:
        True if obj is a mapping with a string "type"
    """
    return isinstance(obj, Mapping) and isinstance(obj.get("type"), str)


def create_ping_command() -> Dict[str, Any]:
    """Create a ping command. Only the type field is required."""
    return JMRICommand(PING_TYPE).to_dict()


def command_to_json(command: Any) -> str:
    """Serialize a command to the exact JSON text sent on the wire.

    Args:
        command: JMRICommand or mapping

    Returns:
        Compact JSON string
    """
    if isinstance(command, JMRICommand):
        command = command.to_dict()
    return json.dumps(command, separators=(",", ":"))


def get_ping_json_string() -> str:
    """Get the ping command as a JSON string."""
    return command_to_json(create_ping_command())


def is_pong(payload: Any) -> bool:
    """Check whether an inbound payload is a pong reply."""
    return is_jmri_command(payload) and payload["type"] == PONG_TYPE
