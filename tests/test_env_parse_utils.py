# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import pytest

from cdapi.utils.env_parse_utils import (
    get_env_bool,
    get_env_dict,
    get_env_float,
    get_env_int,
    get_env_str,
)


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("TRUE", True), (" yes ", True), ("off", False), ("0", False)],
)
def test_get_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("CDAPI_FLAG", raw)

    assert get_env_bool("CDAPI_FLAG", not expected) is expected


def test_get_env_bool_invalid_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CDAPI_FLAG", "perhaps")

    assert get_env_bool("CDAPI_FLAG", True) is True


def test_get_env_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CDAPI_INT", "42")
    monkeypatch.setenv("CDAPI_FLOAT", "0.5")
    monkeypatch.setenv("CDAPI_BAD", "x")

    assert get_env_int("CDAPI_INT", 0) == 42
    assert get_env_float("CDAPI_FLOAT", 0.0) == 0.5
    assert get_env_int("CDAPI_BAD", 7) == 7
    assert get_env_float("CDAPI_BAD", 1.5) == 1.5


def test_get_env_str(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CDAPI_MISSING", raising=False)
    monkeypatch.setenv("CDAPI_NAME", "svc")

    assert get_env_str("CDAPI_MISSING") is None
    assert get_env_str("CDAPI_MISSING", "fallback") == "fallback"
    assert get_env_str("CDAPI_NAME", "fallback") == "svc"


def test_get_env_dict(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CDAPI_HEADERS", "Accept=application/json, X-Env = dev ,broken")

    assert get_env_dict("CDAPI_HEADERS") == {
        "Accept": "application/json",
        "X-Env": "dev",
    }
