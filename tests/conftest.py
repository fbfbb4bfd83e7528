# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Pytest configuration and fixtures for cdapi tests.
"""

import pytest

from cdapi import Endpoint, HttpMethod, StaticApiConfig
from tests.support import BASE_URL, UserResponse


@pytest.fixture
def config() -> StaticApiConfig:
    return StaticApiConfig(base_url=BASE_URL, headers={"X-Client": "tests"})


@pytest.fixture
def user_endpoint(config: StaticApiConfig) -> Endpoint[UserResponse]:
    return Endpoint(
        path="/users/1",
        response_type=UserResponse,
        method=HttpMethod.GET,
        config=config,
    )
