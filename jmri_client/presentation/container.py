"""Dependency Injection Container.

Holds the wired client and service for one connection target. There is
no shared or global instance; each container owns its own client.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..application.services import JMRISessionService
from ..config_loader import (
    CONF_BASE_DELAY,
    CONF_HOST,
    CONF_MAX_ATTEMPTS,
    CONF_MAX_DELAY,
    CONF_PATH,
    CONF_PORT,
    CONF_RECONNECT,
    validate_client_config,
)
from ..domain.interfaces import ITransport, SocketConnector
from ..domain.value_objects import ReconnectPolicy
from ..infrastructure.transport import WebSocketClient


@dataclass
class DIContainer:
    """Dependency Injection Container.

    Attributes:
        config: Validated client configuration
        transport: ITransport implementation (WebSocketClient by default)
        session_service: Application consumer driving the transport

    Example:
        >>> container = create_container({"host": "jmri.local"})
        >>> await container.session_service.initialize()
    """

    config: Dict[str, Any]
    transport: Optional[ITransport] = None
    session_service: Optional[JMRISessionService] = None


def create_container(
    config: Optional[Mapping[str, Any]] = None,
    transport: Optional[ITransport] = None,
    connector: Optional[SocketConnector] = None,
) -> DIContainer:
    """Factory function to create a fully-wired DI container.

    Args:
        config: Raw client configuration (validated here)
        transport: Pre-built transport, e.g. a test double. When given,
            the connection settings in config are not used.
        connector: Socket factory passed to a newly built WebSocketClient

    Returns:
        Fully-wired DIContainer

    Raises:
        ValueError: If config is invalid
    """
    validated = validate_client_config(config)
    container = DIContainer(config=validated)

    container.transport = transport or _create_client(validated, connector)
    container.session_service = JMRISessionService(container.transport)

    return container


def _create_client(
    config: Dict[str, Any], connector: Optional[SocketConnector]
) -> WebSocketClient:
    reconnect = config[CONF_RECONNECT]
    policy = ReconnectPolicy(
        max_attempts=reconnect[CONF_MAX_ATTEMPTS],
        base_delay=reconnect[CONF_BASE_DELAY],
        max_delay=reconnect[CONF_MAX_DELAY],
    )
    return WebSocketClient(
        config[CONF_HOST],
        config[CONF_PORT],
        config[CONF_PATH],
        connector=connector,
        policy=policy,
    )


def validate_container(container: DIContainer) -> bool:
    """Check that every dependency is wired.

    Raises:
        ValueError: If a dependency is missing
    """
    if container.transport is None:
        raise ValueError("Container has no transport")
    if container.session_service is None:
        raise ValueError("Container has no session service")
    return True
