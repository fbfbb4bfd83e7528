# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import os
from typing import Optional, TypeVar, overload

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ("1", "true", "yes", "on")
FALSY_VALUES = ("0", "false", "no", "off")


def get_env_bool(var_name: str, default: bool) -> bool:
    value = os.getenv(var_name)
    if value is None:
        return default
    value_lower = value.strip().lower()
    if value_lower in TRUTHY_VALUES:
        return True
    if value_lower in FALSY_VALUES:
        return False
    logger.warning("Ignoring invalid boolean %s=%r", var_name, value)
    return default


def get_env_int(var_name: str, default: int) -> int:
    value = os.getenv(var_name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring invalid integer %s=%r", var_name, value)
        return default


def get_env_float(var_name: str, default: float) -> float:
    value = os.getenv(var_name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring invalid float %s=%r", var_name, value)
        return default


DF_STR_T = TypeVar("DF_STR_T", bound="Optional[str]")


@overload
def get_env_str(var_name: str, default: None = None) -> str | None: ...


@overload
def get_env_str(var_name: str, default: DF_STR_T) -> DF_STR_T | str: ...


def get_env_str(var_name: str, default: DF_STR_T = None) -> DF_STR_T | str:  # type: ignore[assignment]
    value = os.getenv(var_name)
    if value is None:
        return default
    return value


def get_env_dict(
    var_name: str, item_separator: str = ",", key_value_separator: str = "="
) -> dict[str, str]:
    value = os.getenv(var_name, "")
    result: dict[str, str] = {}
    if not value:
        return result
    items = [item.strip() for item in value.split(item_separator) if item.strip()]
    for item in items:
        if key_value_separator not in item:
            logger.warning("Ignoring malformed entry %r in %s", item, var_name)
            continue
        key, val = item.split(key_value_separator, 1)
        result[key.strip()] = val.strip()
    return result
