"""ConnectionTarget value object.

Represents the (host, port, path) endpoint a client connects to.
"""

from dataclasses import dataclass
from typing import ClassVar

from ...const import DEFAULT_HOST, DEFAULT_PATH, DEFAULT_PORT, URL_SCHEME


@dataclass(frozen=True)
class ConnectionTarget:
    """Immutable connection endpoint.

    The URL is derived once from host, port and path; a client keeps the
    same target for its whole lifetime.

    Attributes:
        host: Server host name or IP address
        port: TCP port (1-65535)
        path: Resource path, must start with "/"

    Example:
        >>> target = ConnectionTarget()
        >>> target.url
        'ws://localhost:12090/'
        >>> ConnectionTarget("jmri.local", 12080, "/json/").url
        'ws://jmri.local:12080/json/'

    Raises:
        ValueError: If port is out of range or path is not absolute
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    path: str = DEFAULT_PATH

    MIN_PORT: ClassVar[int] = 1
    MAX_PORT: ClassVar[int] = 65535

    def __post_init__(self) -> None:
        """Validate target fields.

        Raises:
            TypeError: If port is not an int
            ValueError: If host is empty, port out of range or path relative
        """
        if not self.host:
            raise ValueError("Host must not be empty")

        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise TypeError(f"Port must be int, got {type(self.port).__name__}")

        if self.port < self.MIN_PORT or self.port > self.MAX_PORT:
            raise ValueError(
                f"Port must be between {self.MIN_PORT} and {self.MAX_PORT}, "
                f"got {self.port}"
            )

        if not self.path.startswith("/"):
            raise ValueError(f"Path must start with '/', got {self.path!r}")

    @property
    def url(self) -> str:
        """Endpoint URL, e.g. ``ws://localhost:12090/``."""
        return f"{URL_SCHEME}://{self.host}:{self.port}{self.path}"

    def __str__(self) -> str:
        return self.url
