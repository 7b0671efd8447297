"""HTTP transport configuration settings."""

from pydantic import BaseModel, Field


class HTTPSettings(BaseModel):
    """Settings for the ``httpx.AsyncClient`` behind the default transport.

    These govern connection handling only; the per-request timeout that
    races the network call is ``FetcherSettings.timeout``.
    """

    timeout_connect: float = Field(
        default=5.0,
        gt=0,
        description="Connection timeout in seconds",
    )

    timeout_read: float = Field(
        default=60.0,
        gt=0,
        description="Read timeout in seconds",
    )

    max_keepalive_connections: int = Field(
        default=20,
        ge=0,
        description="Maximum number of idle keep-alive connections",
    )

    max_connections: int = Field(
        default=100,
        ge=1,
        description="Maximum number of concurrent connections",
    )

    http2: bool = Field(
        default=False,
        description="Enable HTTP/2 (requires the httpx[http2] extra)",
    )

    verify: bool | str = Field(
        default=True,
        description="SSL verification: True/False or a path to a CA bundle",
    )
