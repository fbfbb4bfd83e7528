# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import (
    Any,
    Collection,
    Generic,
    Literal,
    Mapping,
    Optional,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from cdapi.query import encode_query
from cdapi.response import ApiResponse
from cdapi.utils.env_parse_utils import get_env_dict, get_env_str

ResponseT = TypeVar("ResponseT", bound=ApiResponse)
ResponseT_co = TypeVar("ResponseT_co", bound=ApiResponse, covariant=True)

ParameterEncoding = Literal["json", "form"]

DEFAULT_ENCODING: ParameterEncoding = "form"

DEFAULT_SUCCESS_STATUSES: Collection[int] = range(200, 300)


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


@runtime_checkable
class ApiConfig(Protocol):
    """Supplies the base URL and default headers for a group of endpoints"""

    @property
    def base_url(self) -> str: ...

    @property
    def headers(self) -> Optional[Mapping[str, str]]: ...


@dataclass(frozen=True)
class StaticApiConfig:
    base_url: str
    headers: Optional[Mapping[str, str]] = None

    def __post_init__(self) -> None:
        if self.headers is not None:
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def from_env(cls, prefix: str = "CDAPI") -> "StaticApiConfig":
        """
        Build a config from ``<prefix>_BASE_URL`` and ``<prefix>_HEADERS``.

        Headers are written as ``Name=value,Other=value``.
        """
        headers = get_env_dict(f"{prefix}_HEADERS")
        return cls(
            base_url=get_env_str(f"{prefix}_BASE_URL", ""),
            headers=headers or None,
        )


class EndpointDescriptor(Protocol[ResponseT_co]):
    """
    Anything the caller can turn into a request.

    Descriptors may also expose ``encoding`` and ``success_statuses``; when
    absent the caller uses :data:`DEFAULT_ENCODING` and
    :data:`DEFAULT_SUCCESS_STATUSES`.
    """

    @property
    def path(self) -> str: ...

    @property
    def method(self) -> HttpMethod: ...

    @property
    def parameters(self) -> Optional[Mapping[str, Any]]: ...

    @property
    def config(self) -> Optional[ApiConfig]: ...

    @property
    def response_type(self) -> type[ResponseT_co]: ...

    @property
    def address(self) -> str: ...


@dataclass(frozen=True)
class Endpoint(Generic[ResponseT]):
    """
    Immutable description of one API call.

    The final address is derived on every access from the attached config,
    the path and, for GET requests, the encoded parameters. Non-GET
    parameters travel in the request body using ``encoding``.
    """

    path: str
    response_type: type[ResponseT]
    method: HttpMethod = HttpMethod.GET
    parameters: Optional[Mapping[str, Any]] = None
    config: Optional[ApiConfig] = None
    encoding: ParameterEncoding = DEFAULT_ENCODING
    success_statuses: Collection[int] = DEFAULT_SUCCESS_STATUSES

    def __post_init__(self) -> None:
        if not isinstance(self.method, HttpMethod):
            object.__setattr__(self, "method", HttpMethod(str(self.method).upper()))
        if self.encoding not in ("json", "form"):
            raise ValueError(f"Invalid parameter encoding: {self.encoding}")

    @property
    def base_url(self) -> str:
        return self.config.base_url if self.config is not None else ""

    @property
    def headers(self) -> dict[str, str]:
        if self.config is None or not self.config.headers:
            return {}
        return dict(self.config.headers)

    @property
    def address(self) -> str:
        if self.method == HttpMethod.GET:
            return self.base_url + self.path + encode_query(self.parameters)
        return self.base_url + self.path

    def with_config(self, config: Optional[ApiConfig]) -> "Endpoint[ResponseT]":
        return replace(self, config=config)

    def with_parameters(
        self, parameters: Optional[Mapping[str, Any]]
    ) -> "Endpoint[ResponseT]":
        return replace(self, parameters=parameters)


__all__ = [
    "HttpMethod",
    "ApiConfig",
    "StaticApiConfig",
    "EndpointDescriptor",
    "Endpoint",
    "ParameterEncoding",
    "DEFAULT_ENCODING",
    "DEFAULT_SUCCESS_STATUSES",
]
