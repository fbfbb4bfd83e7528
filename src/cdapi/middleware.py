# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Protocol

from cdapi.endpoint import ApiConfig
from cdapi.transport import TransportRequest


class RequestMiddleware(Protocol):
    """Rewrites a request after it was built from its endpoint"""

    def on_request(self, request: TransportRequest) -> TransportRequest: ...


class SharedConfigHeaders(RequestMiddleware):
    """
    Adds the headers of a shared :class:`~cdapi.endpoint.ApiConfig` to every
    request.

    Headers already present on the request, typically from the endpoint's own
    config, win. Names are compared case-insensitively. The config is read on
    every request, so a provider whose headers change over time (a rotating
    token, for instance) is picked up without rebuilding the caller.
    """

    def __init__(self, config: ApiConfig):
        self.config = config

    def on_request(self, request: TransportRequest) -> TransportRequest:
        shared = self.config.headers
        if not shared:
            return request

        present = {name.lower() for name in request.headers}
        for name, value in shared.items():
            if name.lower() not in present:
                request.headers[name] = value
        return request


__all__ = ["RequestMiddleware", "SharedConfigHeaders"]
