# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

from cdapi.utils.env_parse_utils import get_env_bool, get_env_float, get_env_int


@dataclass
class TransportRequest:
    url: str
    method: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    form_data: Optional[Dict[str, str]] = None


@dataclass
class TransportResponse:
    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    url: Optional[str] = None
    elapsed_time: Optional[float] = None

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class HttpTransport(Protocol):
    """
    Issues one HTTP exchange.

    Implementations raise :class:`cdapi.errors.TransportError` when no usable
    response was received. Any response, whatever its status code, is
    returned as a :class:`TransportResponse`.
    """

    async def request(self, request: TransportRequest) -> TransportResponse: ...

    async def aclose(self) -> None: ...


@dataclass(frozen=True)
class TransportSettings:
    """Session-level options for the default transport"""

    timeout: float = 30.0
    verify_ssl: bool = True
    follow_redirects: bool = True
    max_connections: int = 100
    max_keepalive_connections: int = 20

    @classmethod
    def from_env(cls) -> "TransportSettings":
        return cls(
            timeout=get_env_float("CDAPI_HTTP_TIMEOUT", cls.timeout),
            verify_ssl=get_env_bool("CDAPI_HTTP_VERIFY_SSL", cls.verify_ssl),
            follow_redirects=get_env_bool(
                "CDAPI_HTTP_REDIRECTS", cls.follow_redirects
            ),
            max_connections=get_env_int(
                "CDAPI_HTTP_MAX_CONNECTIONS", cls.max_connections
            ),
            max_keepalive_connections=get_env_int(
                "CDAPI_HTTP_MAX_KEEPALIVE", cls.max_keepalive_connections
            ),
        )


__all__ = [
    "TransportRequest",
    "TransportResponse",
    "HttpTransport",
    "TransportSettings",
]
