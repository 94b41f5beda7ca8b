"""Application services."""

from .command_result import CommandResult
from .jmri_session_service import JMRISessionService

__all__ = [
    "CommandResult",
    "JMRISessionService",
]
