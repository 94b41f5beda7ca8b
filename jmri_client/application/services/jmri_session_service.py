"""JMRISessionService: application consumer of an ITransport.

The service is constructed with any ITransport (real client or fake),
registers its handlers, and derives a human-readable status string from
whatever callbacks arrive. It never inspects the transport beyond the
capability contract.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from ...domain.exceptions import TransportError
from ...domain.interfaces import ITransport
from ...domain.value_objects import create_ping_command, is_pong
from ...infrastructure.decorators import require_connection
from .command_result import CommandResult

_LOGGER = logging.getLogger(__name__)

STATUS_IDLE = "Not connected"
STATUS_CONNECTING = "Connecting to JMRI server..."
STATUS_CONNECTED = "Connected to JMRI server"
STATUS_DISCONNECTED = "Disconnected from JMRI server"
STATUS_ERROR = "Error connecting to JMRI server"
STATUS_CONNECT_FAILED = "Failed to connect to JMRI server"
STATUS_NOT_CONNECTED = "Not connected to JMRI server"
STATUS_SENDING_PING = "Sending ping to JMRI server..."
STATUS_PONG = "Received pong response from JMRI server"


class JMRISessionService:
    """Drives a JMRI connection through the ITransport contract.

    Callbacks may fire zero or more times in any order; each one only
    overwrites the status string, so no ordering is assumed.

    Dependencies (injected):
    - transport: Any ITransport implementation

    Example:
        >>> service = JMRISessionService(WebSocketClient("localhost", 12090))
        >>> await service.initialize()
        >>> result = await service.send_ping()
        >>> service.status
        'Sending ping to JMRI server...'
        >>> await service.cleanup()
    """

    def __init__(self, transport: ITransport):
        """Initialize service with its transport.

        Args:
            transport: Connection to drive
        """
        self._transport = transport
        self._status = STATUS_IDLE
        self._received: List[Any] = []
        self._handlers_registered = False

    def _register_handlers(self) -> None:
        self._transport.on_message(self._handle_message)
        self._transport.on_connect(self._handle_connect)
        self._transport.on_disconnect(self._handle_disconnect)
        self._transport.on_error(self._handle_error)
        self._handlers_registered = True

    async def initialize(self) -> None:
        """Register handlers and connect.

        Raises:
            TransportError: If the connection attempt fails
        """
        self._register_handlers()
        await self._transport.connect()

    async def connect_to_server(self) -> bool:
        """Connect on user request.

        Returns:
            True if connected, False if the attempt failed
        """
        if not self._handlers_registered:
            self._register_handlers()
        if self._transport.is_active:
            return True

        self._set_status(STATUS_CONNECTING)
        try:
            await self._transport.connect()
        except TransportError as err:
            _LOGGER.warning("Connection error: %s", err)
            self._set_status(STATUS_CONNECT_FAILED)
            return False
        return True

    @require_connection(status_message=STATUS_NOT_CONNECTED)
    async def send_command(
        self, command: str, params: Dict[str, Any]
    ) -> CommandResult:
        """Send a command with parameters and a UTC timestamp.

        Args:
            command: Command name
            params: Command parameters

        Returns:
            CommandResult with the payload that was sent
        """
        payload = {
            "command": command,
            "params": params,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if not await self._transport.send(payload):
            return CommandResult(success=False, error="Send failed", payload=payload)
        return CommandResult(success=True, payload=payload)

    @require_connection(status_message=STATUS_NOT_CONNECTED)
    async def send_ping(self) -> CommandResult:
        """Send a JMRI ping.

        Returns:
            CommandResult; the pong arrives later via the message handler
        """
        self._set_status(STATUS_SENDING_PING)
        payload = create_ping_command()
        if not await self._transport.send(payload):
            return CommandResult(success=False, error="Send failed", payload=payload)
        return CommandResult(success=True, payload=payload)

    async def cleanup(self) -> None:
        """Disconnect from the server."""
        await self._transport.disconnect()

    def _handle_message(self, data: Any) -> None:
        _LOGGER.debug("Message received: %s", data)
        self._received.append(data)
        if is_pong(data):
            self._set_status(STATUS_PONG)

    def _handle_connect(self) -> None:
        self._set_status(STATUS_CONNECTED)

    def _handle_disconnect(self) -> None:
        self._set_status(STATUS_DISCONNECTED)

    def _handle_error(self, error: BaseException) -> None:
        _LOGGER.error("Connection error: %s", error)
        self._set_status(STATUS_ERROR)

    def _set_status(self, status: str) -> None:
        self._status = status

    @property
    def status(self) -> str:
        """Status string for display."""
        return self._status

    @property
    def is_connected(self) -> bool:
        """Whether the transport is currently active."""
        return self._transport.is_active

    @property
    def received_messages(self) -> List[Any]:
        """Inbound payloads in arrival order."""
        return list(self._received)
