"""Error handling decorators for standardized exception handling."""

import asyncio
import logging
from functools import wraps
from typing import Any, Callable

from websockets.exceptions import WebSocketException

from ...domain.exceptions import TransportError


def handle_transport_errors(
    operation_name: str,
    logger: logging.Logger = None,
    default_return: Any = None,
):
    """Decorator for standardized transport error handling.

    Failures are logged and turned into ``default_return``. Cancellation
    always propagates.

    Args:
        operation_name: Human-readable operation name for logging
        logger: Logger to use (defaults to function's module logger)
        default_return: Value to return on error

    Example:
        @handle_transport_errors("WebSocket send", default_return=False)
        async def send(self, payload) -> bool:
            await self._socket.send(encode_payload(payload))
            return True
    """

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except asyncio.TimeoutError as err:
                log.warning("%s timed out: %s", operation_name, err)
            except TransportError as err:
                # Expected transport condition - log without stack trace
                log.error("%s transport error: %s", operation_name, err)
            except WebSocketException as err:
                log.error("%s WebSocket error: %s", operation_name, err)
            except Exception as err:
                log.error(
                    "%s unexpected error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
            return default_return

        return wrapper

    return decorator
