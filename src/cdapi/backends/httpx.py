# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import ssl
import time
from types import TracebackType
from typing import Any, Optional

import httpx

from cdapi.errors import TransportError
from cdapi.transport import (
    HttpTransport,
    TransportRequest,
    TransportResponse,
    TransportSettings,
)

logger = logging.getLogger(__name__)

TrustPolicy = bool | str | ssl.SSLContext


class HttpxTransport(HttpTransport):
    """
    Transport backed by one shared ``httpx.AsyncClient``.

    ``verify`` is the trust policy (a flag, a CA bundle path or an
    ``ssl.SSLContext``) and takes precedence over ``settings.verify_ssl``.
    A client passed in by the caller is used as-is and left open by
    :meth:`aclose`.
    """

    def __init__(
        self,
        settings: Optional[TransportSettings] = None,
        *,
        verify: Optional[TrustPolicy] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or TransportSettings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self.settings.timeout,
            verify=verify if verify is not None else self.settings.verify_ssl,
            follow_redirects=self.settings.follow_redirects,
            limits=httpx.Limits(
                max_connections=self.settings.max_connections,
                max_keepalive_connections=self.settings.max_keepalive_connections,
            ),
        )

    async def request(self, request: TransportRequest) -> TransportResponse:
        start_time = time.monotonic()

        request_kwargs: dict[str, Any] = {
            "method": request.method,
            "url": request.url,
            "headers": request.headers,
        }

        if request.form_data is not None:
            request_kwargs["data"] = request.form_data
        elif request.body is not None:
            request_kwargs["content"] = request.body

        try:
            response = await self._client.request(**request_kwargs)
        except httpx.TimeoutException as err:
            raise TransportError(f"Request timed out: {err}") from err
        except httpx.HTTPError as err:
            raise TransportError(str(err) or type(err).__name__) from err

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            url=str(response.url),
            elapsed_time=time.monotonic() - start_time,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()


__all__ = ["HttpxTransport", "TrustPolicy"]
