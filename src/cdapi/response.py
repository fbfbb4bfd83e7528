# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Response envelope returned by every call.

An envelope pairs a tagged status with an optional payload. The default wire
shape is ``{"status": {"kind": "ok", "message": ...}, "data": ...}`` where the
status may be omitted, so ``{"data": {...}}`` decodes to a successful
envelope. Services with a different envelope subclass :class:`ApiResponse`
and translate their JSON in a ``model_validator(mode="before")``.
"""

from typing import Annotated, Any, Generic, Literal, Optional, Self, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cdapi.errors import ErrorKind

DataT = TypeVar("DataT")


class OkStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["ok"] = "ok"
    message: Optional[str] = None


class ErrorStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    code: int
    message: Optional[str] = None
    reason: Optional[ErrorKind] = None


ResponseStatus = Annotated[Union[OkStatus, ErrorStatus], Field(discriminator="kind")]


class ApiResponse(BaseModel, Generic[DataT]):

    status: ResponseStatus = Field(default_factory=OkStatus)
    data: Optional[DataT] = None

    @model_validator(mode="after")
    def _errors_carry_no_payload(self) -> Self:
        if isinstance(self.status, ErrorStatus) and self.data is not None:
            raise ValueError("error responses cannot carry a payload")
        return self

    @property
    def is_ok(self) -> bool:
        return isinstance(self.status, OkStatus)

    @property
    def message(self) -> Optional[str]:
        return self.status.message

    @property
    def code(self) -> Optional[int]:
        if isinstance(self.status, ErrorStatus):
            return self.status.code
        return None

    @property
    def reason(self) -> Optional[ErrorKind]:
        if isinstance(self.status, ErrorStatus):
            return self.status.reason
        return None

    @classmethod
    def ok(cls, data: Any, message: Optional[str] = None) -> Self:
        return cls(status=OkStatus(message=message), data=data)

    @classmethod
    def error(
        cls,
        code: int,
        message: Optional[str] = None,
        reason: Optional[ErrorKind] = None,
    ) -> Self:
        # Unvalidated: subclass before-validators only ever see wire payloads.
        return cls.model_construct(
            status=ErrorStatus(code=code, message=message, reason=reason),
            data=None,
        )


__all__ = [
    "OkStatus",
    "ErrorStatus",
    "ResponseStatus",
    "ApiResponse",
]
