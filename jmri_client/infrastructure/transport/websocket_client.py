"""WebSocket connection manager.

This module implements the ITransport contract on top of a single
socket handle with:
- Explicit connection state machine
- Bounded exponential backoff after unsolicited closures
- Single-slot event callbacks decoupling transport from application
- Best-effort JSON decoding of inbound frames
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from ...const import (
    DEFAULT_HOST,
    DEFAULT_PATH,
    DEFAULT_PORT,
    EVENT_CONNECT,
    EVENT_DISCONNECT,
    EVENT_ERROR,
    EVENT_GIVE_UP,
    EVENT_MESSAGE,
)
from ...domain.exceptions import ConnectionFailedError, TransportError
from ...domain.interfaces import (
    ErrorHandler,
    EventHandler,
    Frame,
    ISocketConnection,
    ITransport,
    MessageHandler,
    SocketConnector,
)
from ...domain.value_objects import ConnectionTarget, ReconnectPolicy
from ..decorators import handle_transport_errors
from ..state_machines import (
    ConnectionEvent,
    ConnectionState,
    ConnectionStateMachine,
)
from .payload_codec import decode_payload, encode_payload
from .websockets_adapter import connect_websocket

_LOGGER = logging.getLogger(__name__)


class WebSocketClient(ITransport):
    """Persistent WebSocket connection with automatic reconnection.

    The client owns at most one socket handle. When the server closes
    the connection without being asked to, the client schedules a retry
    after ``policy.delay_for(attempt)`` seconds, up to
    ``policy.max_attempts`` retries. A successful open resets the
    counter; an explicit disconnect() cancels any pending retry.

    Attributes:
        _target: Immutable endpoint (host, port, path)
        _connector: Coroutine function opening a socket for a URL
        _policy: Backoff policy
        _socket: Current socket handle, None when not connected
        _reconnect_attempts: Retries scheduled since the last open
        _reconnect_handle: Pending retry timer, if any
        _handlers: Single handler slot per event kind

    Example:
        >>> client = WebSocketClient("localhost", 12090)
        >>> client.on_message(lambda data: print("Received:", data))
        >>> await client.connect()
        >>> await client.send({"type": "ping"})
        True
        >>> await client.disconnect()
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        path: str = DEFAULT_PATH,
        *,
        connector: Optional[SocketConnector] = None,
        policy: Optional[ReconnectPolicy] = None,
    ):
        """Initialize client for one connection target.

        Args:
            host: Server host (default: localhost)
            port: Server port (default: 12090)
            path: Resource path (default: /)
            connector: Socket factory, defaults to the websockets library
            policy: Reconnect policy, defaults to 5 attempts, 1s base, 30s cap
        """
        self._target = ConnectionTarget(host, port, path)
        self._connector = connector or connect_websocket
        self._policy = policy or ReconnectPolicy()
        self._socket: Optional[ISocketConnection] = None
        self._state_machine = ConnectionStateMachine()

        self._reconnect_attempts = 0
        self._next_delay: Optional[float] = None
        self._gave_up = False

        self._connect_task: Optional[asyncio.Task] = None
        self._receive_task: Optional[asyncio.Task] = None
        self._retry_task: Optional[asyncio.Task] = None
        self._reconnect_handle: Optional[asyncio.TimerHandle] = None

        self._handlers: Dict[str, Optional[Callable]] = {
            EVENT_MESSAGE: None,
            EVENT_CONNECT: None,
            EVENT_DISCONNECT: None,
            EVENT_ERROR: None,
            EVENT_GIVE_UP: None,
        }

        # Register state callbacks for logging
        self._state_machine.on_state(ConnectionState.CONNECTED, self._on_connected)
        self._state_machine.on_state(
            ConnectionState.DISCONNECTED, self._on_disconnected
        )

    def _on_connected(self):
        """Callback when connection established."""
        _LOGGER.info("Connected to %s", self.url)

    def _on_disconnected(self):
        """Callback when connection closed or attempt failed."""
        _LOGGER.debug(
            "Disconnected from %s (previous state: %s)",
            self.url,
            self._state_machine.previous_state.name,
        )

    async def connect(self) -> None:
        """Connect to the server.

        Returns at once when already connected. A call made while another
        attempt is in flight waits for that attempt instead of opening a
        second socket.

        Raises:
            ConnectionFailedError: If the socket could not be opened. The
                error handler has already been invoked with the same error.
            asyncio.CancelledError: If disconnect() aborted the attempt
        """
        if self._state_machine.is_connected:
            return

        # An explicit attempt supersedes a scheduled retry
        self._cancel_reconnect()

        if self._connect_task is None:
            self._state_machine.transition(ConnectionEvent.CONNECT)
            self._connect_task = asyncio.create_task(self._open())

        await asyncio.shield(self._connect_task)

    async def _open(self) -> None:
        """Open the socket and enter the connected state."""
        try:
            _LOGGER.debug("Attempting connection to %s", self.url)
            try:
                socket = await self._connector(self.url)
            except asyncio.CancelledError:
                raise
            except Exception as err:
                self._state_machine.transition(ConnectionEvent.CONNECT_FAILED)
                _LOGGER.warning("Connection to %s failed: %s", self.url, err)
                failure = ConnectionFailedError(self.url, str(err))
                failure.__cause__ = err  # visible to the error handler too
                self._emit(EVENT_ERROR, failure)
                raise failure from err
        finally:
            if self._connect_task is asyncio.current_task():
                self._connect_task = None

        self._socket = socket
        self._reconnect_attempts = 0
        self._next_delay = None
        self._gave_up = False
        self._state_machine.transition(ConnectionEvent.CONNECT_SUCCESS)
        self._receive_task = asyncio.create_task(self._receive_loop(socket))
        self._emit(EVENT_CONNECT)

    async def _receive_loop(self, socket: ISocketConnection) -> None:
        """Deliver inbound frames until the socket closes.

        An end of iteration that was not caused by disconnect() is an
        unsolicited closure and starts the reconnect policy.
        """
        try:
            async for frame in socket:
                if socket is not self._socket:
                    return
                self._dispatch_frame(frame)
        except asyncio.CancelledError:
            raise
        except Exception as err:
            _LOGGER.warning("Receive loop for %s failed: %s", self.url, err)
            if socket is self._socket:
                try:
                    await socket.close()
                except Exception as close_err:
                    _LOGGER.debug("Error closing failed socket: %s", close_err)

        if socket is self._socket:
            self._handle_connection_lost()

    def _dispatch_frame(self, frame: Frame) -> None:
        """Decode a frame and hand it to the message handler."""
        if self._handlers[EVENT_MESSAGE] is None:
            _LOGGER.debug("Dropping inbound frame, no message handler registered")
            return
        self._emit(EVENT_MESSAGE, decode_payload(frame))

    def _handle_connection_lost(self) -> None:
        """Handle unsolicited closure.

        Updates state, notifies the disconnect handler, then schedules a
        retry if the policy allows one.
        """
        self._socket = None
        self._receive_task = None
        self._state_machine.transition(ConnectionEvent.CONNECTION_LOST)
        _LOGGER.warning("Connection to %s lost", self.url)
        self._emit(EVENT_DISCONNECT)
        self._schedule_reconnect()

    def _schedule_reconnect(self) -> None:
        """Schedule the next retry, or give up when the budget is spent."""
        if not self._policy.should_retry(self._reconnect_attempts):
            self._next_delay = None
            _LOGGER.warning(
                "Max reconnect attempts (%d) reached for %s",
                self._policy.max_attempts,
                self.url,
            )
            if not self._gave_up:
                self._gave_up = True
                self._emit(EVENT_GIVE_UP)
            return

        self._reconnect_attempts += 1
        delay = self._policy.delay_for(self._reconnect_attempts)
        self._next_delay = delay
        _LOGGER.debug(
            "Reconnect %d/%d scheduled in %.1fs",
            self._reconnect_attempts,
            self._policy.max_attempts,
            delay,
        )
        loop = asyncio.get_running_loop()
        self._reconnect_handle = loop.call_later(delay, self._fire_reconnect)

    def _fire_reconnect(self) -> None:
        """Timer callback: start the background retry."""
        self._reconnect_handle = None
        _LOGGER.info(
            "Attempting to reconnect (%d/%d)...",
            self._reconnect_attempts,
            self._policy.max_attempts,
        )
        self._retry_task = asyncio.create_task(self._retry())

    async def _retry(self) -> None:
        """Run one background connect attempt.

        Nobody awaits this attempt, so a failure is not raised. It
        continues the backoff sequence instead.
        """
        try:
            await self.connect()
        except TransportError as err:
            _LOGGER.debug("Reconnect attempt failed: %s", err)
            if self._retry_task is asyncio.current_task():
                self._schedule_reconnect()
        finally:
            if self._retry_task is asyncio.current_task():
                self._retry_task = None

    def _cancel_reconnect(self) -> None:
        """Cancel the pending retry timer, if any."""
        if self._reconnect_handle is not None:
            self._reconnect_handle.cancel()
            self._reconnect_handle = None
            self._next_delay = None
            _LOGGER.debug("Pending reconnect cancelled")

    async def disconnect(self) -> None:
        """Disconnect from the server.

        This method:
        1. Cancels any pending reconnect timer and background retry
        2. Aborts an in-flight connect attempt
        3. Closes the socket and clears the handle
        4. Notifies the disconnect handler if the client was connected

        It never schedules a reconnect and is safe to call repeatedly.

        Example:
            >>> await client.disconnect()
            >>> assert not client.is_active
        """
        self._cancel_reconnect()

        retry_task, self._retry_task = self._retry_task, None
        connect_task, self._connect_task = self._connect_task, None
        receive_task, self._receive_task = self._receive_task, None
        socket, self._socket = self._socket, None
        was_connected = self._state_machine.is_connected

        self._state_machine.transition(ConnectionEvent.DISCONNECT)

        current = asyncio.current_task()
        for task in (retry_task, connect_task, receive_task):
            if task is not None and task is not current and not task.done():
                task.cancel()

        if socket is not None:
            try:
                await socket.close()
            except Exception as err:
                _LOGGER.warning("Error during disconnect: %s", err)

        if was_connected:
            _LOGGER.info("Disconnected from %s", self.url)
            self._emit(EVENT_DISCONNECT)

    @handle_transport_errors("WebSocket send", default_return=False)
    async def send(self, payload: Any) -> bool:
        """Send a payload to the server.

        Args:
            payload: str sent verbatim, anything else JSON-encoded

        Returns:
            True once the socket accepted the frame, False when not
            connected or when sending failed

        Example:
            >>> await client.send({"type": "ping"})  # sends {"type":"ping"}
            True
        """
        socket = self._socket
        if socket is None or not self._state_machine.is_connected:
            _LOGGER.debug("Send skipped, not connected to %s", self.url)
            return False

        message = encode_payload(payload)
        await socket.send(message)
        _LOGGER.debug("Sent %d chars to %s", len(message), self.url)
        return True

    def on_message(self, handler: MessageHandler) -> None:
        """Set the handler for inbound payloads (replaces any previous one)."""
        self._handlers[EVENT_MESSAGE] = handler

    def on_connect(self, handler: EventHandler) -> None:
        """Set the handler for successful opens (replaces any previous one)."""
        self._handlers[EVENT_CONNECT] = handler

    def on_disconnect(self, handler: EventHandler) -> None:
        """Set the handler for closures (replaces any previous one)."""
        self._handlers[EVENT_DISCONNECT] = handler

    def on_error(self, handler: ErrorHandler) -> None:
        """Set the handler for failed connect attempts (replaces any previous one)."""
        self._handlers[EVENT_ERROR] = handler

    def on_give_up(self, handler: EventHandler) -> None:
        """Set the handler fired once when reconnect attempts are exhausted."""
        self._handlers[EVENT_GIVE_UP] = handler

    def _emit(self, kind: str, *args: Any) -> None:
        """Invoke the handler for an event kind, isolating its failures."""
        handler = self._handlers[kind]
        if handler is None:
            return
        try:
            handler(*args)
        except Exception as err:
            _LOGGER.error("Error in %s handler: %s", kind, err, exc_info=True)

    @property
    def is_active(self) -> bool:
        """True only while in the connected state."""
        return self._state_machine.is_connected

    @property
    def url(self) -> str:
        """Endpoint URL."""
        return self._target.url

    @property
    def target(self) -> ConnectionTarget:
        """Connection target this client was built for."""
        return self._target

    @property
    def policy(self) -> ReconnectPolicy:
        """Reconnect policy in use."""
        return self._policy

    @property
    def connection_state(self) -> str:
        """Get current connection state.

        Returns:
            State: "disconnected", "connecting" or "connected"
        """
        return self._state_machine.state.name.lower()

    @property
    def reconnect_attempts(self) -> int:
        """Retries scheduled since the last successful open."""
        return self._reconnect_attempts

    @property
    def reconnect_pending(self) -> bool:
        """True while a retry timer is scheduled."""
        return self._reconnect_handle is not None

    def get_reconnect_info(self) -> dict:
        """Get current reconnect tracking info.

        Returns:
            Dictionary with reconnect statistics

        Example:
            >>> info = client.get_reconnect_info()
            >>> print(f"Attempts: {info['attempts']}/{info['max_attempts']}")
        """
        return {
            "attempts": self._reconnect_attempts,
            "max_attempts": self._policy.max_attempts,
            "next_delay": self._next_delay,
            "pending": self.reconnect_pending,
            "state": self.connection_state,
            "gave_up": self._gave_up,
        }

    async def __aenter__(self) -> "WebSocketClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    def __repr__(self) -> str:
        return f"WebSocketClient(url={self.url!r}, state={self.connection_state!r})"
