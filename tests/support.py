# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Shared models, fake transports and helpers for cdapi tests.
"""

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional

import httpx
from pydantic import BaseModel

from cdapi import (
    ApiCaller,
    ApiResponse,
    HttpxTransport,
    TransportRequest,
    TransportResponse,
)

BASE_URL = "https://api.example.com"


class User(BaseModel):
    id: int
    name: str


class UserResponse(ApiResponse[User]):
    pass


class StubTransport:
    """Records requests and answers with a fixed response or error."""

    def __init__(
        self,
        response: Optional[TransportResponse] = None,
        error: Optional[BaseException] = None,
    ):
        self.response = response
        self.error = error
        self.requests: list[TransportRequest] = []
        self.closed = False

    async def request(self, request: TransportRequest) -> TransportResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response

    async def aclose(self) -> None:
        self.closed = True


class BlockingTransport:
    """Never answers; records whether the pending request was cancelled."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.calls = 0
        self.cancelled = False

    async def request(self, request: TransportRequest) -> TransportResponse:
        self.calls += 1
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        raise AssertionError("unreachable")

    async def aclose(self) -> None:
        return None


def json_response(payload: Any, status_code: int = 200) -> TransportResponse:
    return TransportResponse(
        status_code=status_code,
        content=json.dumps(payload).encode(),
        headers={"content-type": "application/json"},
    )


@asynccontextmanager
async def mock_caller(
    handler: Callable[[httpx.Request], httpx.Response],
) -> AsyncIterator[ApiCaller]:
    """Caller wired to an httpx client answering through ``handler``."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    try:
        async with ApiCaller(HttpxTransport(client=client)) as caller:
            yield caller
    finally:
        await client.aclose()


