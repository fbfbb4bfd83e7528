# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Typed REST calls over an async HTTP transport.

This package provides:
- Endpoint descriptors (path, method, parameters, response type, config)
- Configuration providers for base URL and headers
- A caller that decodes JSON bodies into typed envelopes
- Callback and cold single-shot stream delivery
- Request middleware (shared config headers, trace propagation)
"""

from .backends.httpx import HttpxTransport
from .caller import ApiCaller, CompletionHandler
from .endpoint import (
    ApiConfig,
    Endpoint,
    EndpointDescriptor,
    HttpMethod,
    StaticApiConfig,
)
from .errors import (
    DECODE_ERROR_CODES,
    DECODING_ERROR_MESSAGE,
    UNKNOWN_STATUS_CODE,
    ErrorKind,
    InvalidAddressError,
    TransportError,
)
from .middleware import RequestMiddleware, SharedConfigHeaders
from .query import encode_query
from .response import ApiResponse, ErrorStatus, OkStatus, ResponseStatus
from .stream import CallStream, Subscription
from .transport import (
    HttpTransport,
    TransportRequest,
    TransportResponse,
    TransportSettings,
)

__all__ = [
    # Descriptors and configuration
    "Endpoint",
    "EndpointDescriptor",
    "HttpMethod",
    "ApiConfig",
    "StaticApiConfig",
    "encode_query",
    # Envelope
    "ApiResponse",
    "ResponseStatus",
    "OkStatus",
    "ErrorStatus",
    # Caller
    "ApiCaller",
    "CompletionHandler",
    "CallStream",
    "Subscription",
    # Transport
    "HttpTransport",
    "HttpxTransport",
    "TransportRequest",
    "TransportResponse",
    "TransportSettings",
    # Middleware
    "RequestMiddleware",
    "SharedConfigHeaders",
    # Errors
    "ErrorKind",
    "TransportError",
    "InvalidAddressError",
    "DECODE_ERROR_CODES",
    "DECODING_ERROR_MESSAGE",
    "UNKNOWN_STATUS_CODE",
]
