"""Command Result DTO.

Data Transfer Object representing the outcome of sending a command.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class CommandResult:
    """Result of a send operation.

    Attributes:
        success: Whether the transport accepted the payload
        error: Error message if failed
        payload: Payload that was handed to the transport
    """

    success: bool
    error: str = ""
    payload: Dict[str, Any] = field(default_factory=dict)
