# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from opentelemetry import context
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from cdapi.middleware import RequestMiddleware
from cdapi.transport import TransportRequest


class TracePropagationMiddleware(RequestMiddleware):
    """Injects the active trace context and baggage into outgoing headers"""

    def __init__(self) -> None:
        self._propagators = (TraceContextTextMapPropagator(), W3CBaggagePropagator())

    def on_request(self, request: TransportRequest) -> TransportRequest:
        ctx = context.get_current()

        headers: dict[str, str] = {}
        for propagator in self._propagators:
            propagator.inject(headers, ctx)

        for key, value in headers.items():
            request.headers.setdefault(key, value)

        return request
