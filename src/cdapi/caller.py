# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import asyncio
import inspect
import logging
from types import TracebackType
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar, Union

import httpx
from pydantic_core import PydanticSerializationError, to_json

from cdapi.backends.httpx import HttpxTransport, TrustPolicy
from cdapi.decoding import classify_decode_error, decode_response
from cdapi.endpoint import (
    DEFAULT_ENCODING,
    DEFAULT_SUCCESS_STATUSES,
    EndpointDescriptor,
    HttpMethod,
)
from cdapi.errors import (
    DECODING_ERROR_MESSAGE,
    EMPTY_BODY_MESSAGE,
    UNKNOWN_STATUS_CODE,
    ErrorKind,
    InvalidAddressError,
    TransportError,
)
from cdapi.middleware import RequestMiddleware
from cdapi.query import stringify_value
from cdapi.response import ApiResponse, OkStatus
from cdapi.stream import CallStream, report_task_failure
from cdapi.transport import (
    HttpTransport,
    TransportRequest,
    TransportResponse,
    TransportSettings,
)

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=ApiResponse)

CompletionHandler = Callable[[ResponseT], Union[None, Awaitable[None]]]


def validate_address(address: str) -> None:
    try:
        httpx.URL(address)
    except httpx.InvalidURL as err:
        raise InvalidAddressError(address, str(err)) from err


class ApiCaller:
    """
    Executes endpoint descriptors and turns every outcome into an envelope.

    One instance may serve any number of concurrent calls; the only shared
    resource is the transport. Without an explicit transport an
    :class:`~cdapi.backends.httpx.HttpxTransport` is created from ``settings``
    and ``verify`` and closed by :meth:`aclose`.
    """

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        *,
        middlewares: Sequence[RequestMiddleware] = (),
        settings: Optional[TransportSettings] = None,
        verify: Optional[TrustPolicy] = None,
    ):
        if transport is None:
            transport = HttpxTransport(settings, verify=verify)
            self._owns_transport = True
        else:
            self._owns_transport = False

        self._transport = transport
        self._middlewares = list(middlewares)
        self.tasks: set[asyncio.Task[Any]] = set()

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    def build_request(self, endpoint: EndpointDescriptor[Any]) -> TransportRequest:
        address = endpoint.address
        validate_address(address)

        headers: dict[str, str] = {}
        if endpoint.config is not None and endpoint.config.headers:
            headers.update(endpoint.config.headers)

        method = HttpMethod(endpoint.method)
        request = TransportRequest(url=address, method=method.value, headers=headers)

        if method != HttpMethod.GET and endpoint.parameters:
            if getattr(endpoint, "encoding", DEFAULT_ENCODING) == "form":
                request.form_data = {
                    key: stringify_value(value)
                    for key, value in endpoint.parameters.items()
                }
            else:
                request.body = to_json(dict(endpoint.parameters))
                if not any(name.lower() == "content-type" for name in headers):
                    headers["Content-Type"] = "application/json"

        return request

    async def fetch(
        self,
        endpoint: EndpointDescriptor[ResponseT],
        *,
        detailed_decode_errors: bool = True,
    ) -> ResponseT:
        """
        Run one call and classify its outcome.

        With ``detailed_decode_errors`` decoding failures carry the numeric
        decode codes (7771-7775); without it they carry the HTTP status code
        and the raw decoder message.
        """
        response_type = endpoint.response_type

        try:
            request = self.build_request(endpoint)
        except PydanticSerializationError as err:
            logger.error("Could not encode parameters for %s: %s", endpoint.path, err)
            return response_type.error(
                UNKNOWN_STATUS_CODE,
                f"could not encode parameters: {err}",
                ErrorKind.INVALID_PARAMETERS,
            )

        for middleware in self._middlewares:
            request = middleware.on_request(request)

        logger.debug(
            "Prepared request: %s %s\nParameters: %s\nHeaders: %s",
            request.method,
            request.url,
            endpoint.parameters,
            request.headers,
        )

        try:
            response = await self._transport.request(request)
        except TransportError as err:
            code = err.status_code if err.status_code is not None else UNKNOWN_STATUS_CODE
            logger.error(
                "Request %s %s failed: %s", request.method, request.url, err.message
            )
            return response_type.error(code, err.message, ErrorKind.TRANSPORT_FAILURE)
        except Exception as err:
            logger.exception("Transport raised while calling %s", request.url)
            return response_type.error(
                UNKNOWN_STATUS_CODE,
                str(err) or type(err).__name__,
                ErrorKind.TRANSPORT_FAILURE,
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Received response: status=%s\n%s", response.status_code, response.text
            )

        return self._classify(endpoint, response, detailed_decode_errors)

    def _classify(
        self,
        endpoint: EndpointDescriptor[ResponseT],
        response: TransportResponse,
        detailed_decode_errors: bool,
    ) -> ResponseT:
        response_type = endpoint.response_type
        success_statuses = getattr(
            endpoint, "success_statuses", DEFAULT_SUCCESS_STATUSES
        )

        if response.status_code not in success_statuses:
            logger.warning(
                "Response status %s not in success statuses for %s",
                response.status_code,
                endpoint.address,
            )
            return response_type.error(
                response.status_code,
                f"unacceptable status code {response.status_code}",
                ErrorKind.TRANSPORT_FAILURE,
            )

        if not response.content:
            return response_type.error(
                UNKNOWN_STATUS_CODE, EMPTY_BODY_MESSAGE, ErrorKind.EMPTY_BODY
            )

        try:
            decoded = decode_response(response_type, response.content)
        except Exception as exc:
            failure = classify_decode_error(exc)
            logger.warning(
                "Could not decode %s: %s", response_type.__name__, failure.message
            )
            if detailed_decode_errors:
                return response_type.error(failure.code, failure.message, failure.kind)
            return response_type.error(
                response.status_code, str(exc) or failure.message, failure.kind
            )

        if isinstance(decoded.status, OkStatus) and decoded.data is None:
            logger.warning("Decoded %s without payload", response_type.__name__)
            return response_type.error(
                UNKNOWN_STATUS_CODE, DECODING_ERROR_MESSAGE, ErrorKind.MISSING_PAYLOAD
            )

        return decoded

    def call(
        self,
        endpoint: EndpointDescriptor[ResponseT],
        on_complete: CompletionHandler[ResponseT],
    ) -> "asyncio.Task[None]":
        """
        Start a call and return immediately.

        ``on_complete`` receives the envelope exactly once, on the running
        event loop. Cancelling the returned task cancels the request and the
        callback is not invoked.
        """
        validate_address(endpoint.address)

        async def run() -> None:
            envelope = await self.fetch(endpoint, detailed_decode_errors=False)
            result = on_complete(envelope)
            if inspect.isawaitable(result):
                await result

        task = asyncio.get_running_loop().create_task(run())
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)
        task.add_done_callback(report_task_failure)
        return task

    def stream(self, endpoint: EndpointDescriptor[ResponseT]) -> CallStream[ResponseT]:
        return CallStream(
            lambda: self.fetch(endpoint, detailed_decode_errors=True), self.tasks
        )

    async def aclose(self) -> None:
        for task in list(self.tasks):
            task.cancel()
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "ApiCaller":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()


__all__ = ["ApiCaller", "CompletionHandler", "validate_address"]
