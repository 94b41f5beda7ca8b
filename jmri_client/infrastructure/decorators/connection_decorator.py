"""Connection guard decorators."""

import logging
from functools import wraps
from typing import Callable

_LOGGER = logging.getLogger(__name__)


def require_connection(
    status_message: str = "Not connected",
    transport_attr: str = "_transport",
):
    """Decorator to short-circuit an operation when the transport is down.

    The decorated method's owner must hold an ITransport in
    ``transport_attr``. If it is not active, the method is skipped and a
    failure result is returned instead. If the owner has a
    ``_set_status`` method it is called with ``status_message``.

    Args:
        status_message: Error text reported when not connected
        transport_attr: Attribute holding the transport

    Example:
        @require_connection(status_message="Not connected to JMRI server")
        async def send_ping(self) -> CommandResult:
            # Transport is active - just do work
            ...
    """

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            transport = getattr(self, transport_attr, None)
            if transport is None or not transport.is_active:
                _LOGGER.debug("%s skipped: %s", func.__name__, status_message)
                set_status = getattr(self, "_set_status", None)
                if callable(set_status):
                    set_status(status_message)

                # Return appropriate error response based on return type
                return_annotation = func.__annotations__.get("return")
                if return_annotation is not None:
                    try:
                        return return_annotation(success=False, error=status_message)
                    except (TypeError, AttributeError):
                        raise RuntimeError(status_message)
                raise RuntimeError(status_message)

            return await func(self, *args, **kwargs)

        return wrapper

    return decorator
