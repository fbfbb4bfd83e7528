# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Transport implementations for the caller.
"""

from .httpx import HttpxTransport

__all__ = [
    "HttpxTransport",
]
