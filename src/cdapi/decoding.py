# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
from dataclasses import dataclass
from typing import Any, Sequence, TypeVar

from pydantic import ValidationError

from cdapi.errors import DECODE_ERROR_CODES, ErrorKind
from cdapi.response import ApiResponse

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=ApiResponse)

ROOT_SHAPE_ERRORS = {
    "json_invalid",
    "json_type",
    "model_type",
    "model_attributes_type",
    "dict_type",
}

TYPE_MISMATCH_ERRORS = {
    "literal_error",
    "enum",
    "union_tag_invalid",
    "is_instance_of",
}


@dataclass(frozen=True)
class DecodeFailure:
    kind: ErrorKind
    message: str

    @property
    def code(self) -> int:
        return DECODE_ERROR_CODES[self.kind]


def decode_response(response_type: type[ResponseT], body: bytes) -> ResponseT:
    return response_type.model_validate_json(body)


def _location(loc: Sequence[Any]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def _context(error: Any) -> str:
    return f"{error['msg']} (at {_location(error['loc'])})"


def _key(error: Any) -> str:
    loc = error["loc"]
    return str(loc[-1]) if loc else "<root>"


def _expected_type(error: Any) -> str:
    ctx = error.get("ctx") or {}
    for name in ("class_name", "expected", "class"):
        if name in ctx:
            return str(ctx[name])
    error_type: str = error["type"]
    for suffix in ("_type", "_parsing"):
        if error_type.endswith(suffix):
            return error_type[: -len(suffix)]
    return error_type


def classify_validation_error(error: Any) -> DecodeFailure:
    """Classify a single pydantic error entry."""
    error_type: str = error["type"]

    if error_type == "missing":
        return DecodeFailure(
            ErrorKind.DECODE_KEY_NOT_FOUND,
            f"could not find key '{_key(error)}' in JSON: {_context(error)}",
        )

    if error_type == "union_tag_not_found":
        discriminator = str((error.get("ctx") or {}).get("discriminator", _key(error)))
        return DecodeFailure(
            ErrorKind.DECODE_KEY_NOT_FOUND,
            f"could not find key {discriminator} in JSON: {_context(error)}",
        )

    if error_type == "json_invalid" or (
        not error["loc"] and error_type in ROOT_SHAPE_ERRORS
    ):
        return DecodeFailure(
            ErrorKind.DECODE_CORRUPTED,
            f"data corrupted in JSON: {_context(error)}",
        )

    is_type_error = (
        error_type.endswith("_type")
        or error_type.endswith("_parsing")
        or error_type in TYPE_MISMATCH_ERRORS
    )

    if is_type_error and error.get("input", ...) is None:
        return DecodeFailure(
            ErrorKind.DECODE_VALUE_NOT_FOUND,
            f"could not find value for key '{_key(error)}' in JSON: {_context(error)}",
        )

    if is_type_error:
        return DecodeFailure(
            ErrorKind.DECODE_TYPE_MISMATCH,
            f"type mismatch, expected {_expected_type(error)}: {_context(error)}",
        )

    return DecodeFailure(ErrorKind.DECODE_OTHER, error["msg"])


def classify_decode_error(exc: Exception) -> DecodeFailure:
    """
    Map a decoding exception onto the decode error taxonomy.

    Only the first validation error is classified; pydantic reports them in
    field order, so that is the first field the decoder tripped over.
    """
    if isinstance(exc, ValidationError):
        errors = exc.errors()
        if errors:
            return classify_validation_error(errors[0])

    return DecodeFailure(ErrorKind.DECODE_OTHER, str(exc) or type(exc).__name__)


__all__ = [
    "DecodeFailure",
    "decode_response",
    "classify_decode_error",
    "classify_validation_error",
]
