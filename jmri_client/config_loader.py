"""Client configuration loading and validation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import voluptuous as vol
import yaml

from .const import (
    DEFAULT_HOST,
    DEFAULT_PATH,
    DEFAULT_PORT,
    MAX_RECONNECT_ATTEMPTS,
    RECONNECT_BASE_DELAY,
    RECONNECT_MAX_DELAY,
)

_LOGGER = logging.getLogger(__name__)

CONF_HOST = "host"
CONF_PORT = "port"
CONF_PATH = "path"
CONF_RECONNECT = "reconnect"
CONF_MAX_ATTEMPTS = "max_attempts"
CONF_BASE_DELAY = "base_delay"
CONF_MAX_DELAY = "max_delay"


def _absolute_path(value: Any) -> str:
    """Validate a resource path starts with '/'."""
    value = vol.Coerce(str)(value)
    if not value.startswith("/"):
        raise vol.Invalid(f"path must start with '/', got {value!r}")
    return value


def _delay_ordering(value: dict[str, Any]) -> dict[str, Any]:
    """Validate max_delay is not below base_delay."""
    if value[CONF_MAX_DELAY] < value[CONF_BASE_DELAY]:
        raise vol.Invalid(
            f"{CONF_MAX_DELAY} ({value[CONF_MAX_DELAY]}) must be >= "
            f"{CONF_BASE_DELAY} ({value[CONF_BASE_DELAY]})"
        )
    return value


RECONNECT_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Optional(CONF_MAX_ATTEMPTS, default=MAX_RECONNECT_ATTEMPTS): vol.All(
                vol.Coerce(int), vol.Range(min=0)
            ),
            vol.Optional(CONF_BASE_DELAY, default=RECONNECT_BASE_DELAY): vol.All(
                vol.Coerce(float), vol.Range(min=0, min_included=False)
            ),
            vol.Optional(CONF_MAX_DELAY, default=RECONNECT_MAX_DELAY): vol.All(
                vol.Coerce(float), vol.Range(min=0, min_included=False)
            ),
        }
    ),
    _delay_ordering,
)

CLIENT_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_HOST, default=DEFAULT_HOST): vol.All(
            str, vol.Length(min=1)
        ),
        vol.Optional(CONF_PORT, default=DEFAULT_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=65535)
        ),
        vol.Optional(CONF_PATH, default=DEFAULT_PATH): _absolute_path,
        vol.Optional(CONF_RECONNECT, default={}): RECONNECT_SCHEMA,
    }
)


def validate_client_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    """Validate a client configuration mapping and fill defaults.

    Args:
        config: Raw mapping, or None for all defaults

    Returns:
        Validated configuration dict

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        return CLIENT_CONFIG_SCHEMA(dict(config or {}))
    except vol.Invalid as err:
        raise ValueError(f"Invalid client configuration: {err}") from err


def load_client_config(config_file: str | Path) -> dict[str, Any]:
    """Load and validate client configuration from YAML.

    Example file::

        host: jmri.local
        port: 12090
        path: /json/
        reconnect:
          max_attempts: 5
          base_delay: 1.0
          max_delay: 30.0

    Args:
        config_file: Path to YAML file

    Returns:
        Validated configuration dict

    Raises:
        FileNotFoundError: If configuration file not found
        ValueError: If YAML or configuration is invalid
    """
    config_file = Path(config_file)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        raw = yaml.safe_load(config_file.read_text())
    except yaml.YAMLError as err:
        raise ValueError(f"Invalid YAML: {err}") from err

    if raw is not None and not isinstance(raw, Mapping):
        raise ValueError(
            f"Configuration must be a mapping, got {type(raw).__name__}"
        )

    config = validate_client_config(raw)
    _LOGGER.info(
        "Loaded client configuration: %s:%d%s",
        config[CONF_HOST],
        config[CONF_PORT],
        config[CONF_PATH],
    )
    return config
