# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Query string encoding for GET endpoints.

Keys keep the iteration order of the mapping they come from, so callers that
need a deterministic address must pass an ordered mapping (a plain ``dict``
already is one).
"""

import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)

# Non-alphanumeric characters allowed verbatim inside a URL query.
QUERY_SAFE_CHARACTERS = "!$&'()*+,-./:;=?@_~"


def stringify_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(parameters: Optional[Mapping[str, Any]]) -> str:
    if not parameters:
        return ""

    raw_query = "?" + "&".join(
        f"{key}={stringify_value(value)}" for key, value in parameters.items()
    )

    try:
        return quote(raw_query, safe=QUERY_SAFE_CHARACTERS)
    except UnicodeEncodeError:
        logger.debug("Could not percent-encode query %r, using it as-is", raw_query)
        return raw_query


__all__ = ["encode_query", "stringify_value", "QUERY_SAFE_CHARACTERS"]
