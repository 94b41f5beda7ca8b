"""Wire payload encoding.

Outbound: text is sent verbatim, everything else as compact JSON.
Inbound: JSON is decoded when possible, otherwise the raw frame is
passed through unchanged. Decoding never fails.
"""

import json
import logging
from typing import Any

from ...domain.exceptions import PayloadEncodeError
from ...domain.interfaces import Frame

_LOGGER = logging.getLogger(__name__)

# Matches JSON.stringify output: no whitespace between tokens
JSON_SEPARATORS = (",", ":")


def encode_payload(payload: Any) -> str:
    """Encode an outbound payload as text.

    Args:
        payload: str (sent as-is) or any JSON-serializable value

    Returns:
        Text frame content

    Raises:
        PayloadEncodeError: If payload is not JSON-serializable, or holds
            NaN or infinite floats

    Example:
        >>> encode_payload({"type": "ping"})
        '{"type":"ping"}'
        >>> encode_payload("raw text")
        'raw text'
    """
    if isinstance(payload, str):
        return payload

    try:
        return json.dumps(payload, separators=JSON_SEPARATORS, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as err:
        raise PayloadEncodeError(
            f"Cannot encode {type(payload).__name__} payload: {err}"
        ) from err


def decode_payload(frame: Frame) -> Any:
    """Decode an inbound frame, best effort.

    Args:
        frame: Text or binary frame from the socket

    Returns:
        Decoded JSON value, or the frame unchanged if it is not JSON

    Example:
        >>> decode_payload('{"type":"pong"}')
        {'type': 'pong'}
        >>> decode_payload("hello")
        'hello'
    """
    try:
        return json.loads(frame)
    except (ValueError, RecursionError):
        _LOGGER.debug("Inbound frame is not decodable JSON, delivering raw")
        return frame
