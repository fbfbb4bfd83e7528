# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from enum import Enum
from typing import Optional

UNKNOWN_STATUS_CODE = -1
DECODING_ERROR_MESSAGE = "decoding error"
EMPTY_BODY_MESSAGE = "response body is empty"


class ErrorKind(str, Enum):
    """Named classification of every way a call can fail."""

    TRANSPORT_FAILURE = "transport_failure"
    EMPTY_BODY = "empty_body"
    MISSING_PAYLOAD = "missing_payload"
    DECODE_KEY_NOT_FOUND = "decode_key_not_found"
    DECODE_VALUE_NOT_FOUND = "decode_value_not_found"
    DECODE_TYPE_MISMATCH = "decode_type_mismatch"
    DECODE_CORRUPTED = "decode_corrupted"
    DECODE_OTHER = "decode_other"
    INVALID_PARAMETERS = "invalid_parameters"

    @property
    def is_decode_error(self) -> bool:
        return self in DECODE_ERROR_CODES


# Numeric codes reported by the stream form; downstream consumers match on them.
DECODE_ERROR_CODES: dict[ErrorKind, int] = {
    ErrorKind.DECODE_KEY_NOT_FOUND: 7771,
    ErrorKind.DECODE_VALUE_NOT_FOUND: 7772,
    ErrorKind.DECODE_TYPE_MISMATCH: 7773,
    ErrorKind.DECODE_CORRUPTED: 7774,
    ErrorKind.DECODE_OTHER: 7775,
}


class TransportError(Exception):
    """Raised by transports when no usable HTTP exchange took place"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidAddressError(ValueError):
    """Raised when an endpoint address cannot be parsed as a URL"""

    def __init__(self, address: str, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(f"Invalid endpoint address {address!r}: {reason}")


__all__ = [
    "UNKNOWN_STATUS_CODE",
    "DECODING_ERROR_MESSAGE",
    "EMPTY_BODY_MESSAGE",
    "DECODE_ERROR_CODES",
    "ErrorKind",
    "TransportError",
    "InvalidAddressError",
]
