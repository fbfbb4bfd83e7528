# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Tests for query string encoding.
"""

from collections import OrderedDict

import pytest

from cdapi.query import encode_query, stringify_value


class TestEncodeQuery:
    """Test suite for encode_query."""

    @pytest.mark.parametrize("parameters", [None, {}, OrderedDict()])
    def test_empty_parameters_produce_empty_string(self, parameters: object) -> None:
        """Absent or empty mappings encode to an empty string without '?'."""
        assert encode_query(parameters) == ""  # type: ignore[arg-type]

    def test_pairs_are_joined_in_iteration_order(self) -> None:
        """Each entry becomes key=value, joined by '&', in mapping order."""
        query = encode_query({"page": 2, "limit": 10, "sort": "name"})

        assert query == "?page=2&limit=10&sort=name"

    def test_ordered_mapping_is_respected(self) -> None:
        """An explicitly ordered mapping controls the output order."""
        parameters = OrderedDict([("b", 1), ("a", 2)])

        assert encode_query(parameters) == "?b=1&a=2"

    def test_values_are_percent_encoded(self) -> None:
        """Characters outside the query-allowed set are percent-encoded."""
        query = encode_query({"q": "hello world", "city": "São Paulo", "tag": "#1"})

        assert query == "?q=hello%20world&city=S%C3%A3o%20Paulo&tag=%231"

    def test_query_allowed_characters_are_kept(self) -> None:
        """Reserved characters allowed in queries stay verbatim."""
        query = encode_query({"path": "a/b", "expr": "x:y;z@w", "email": "a+b@c.io"})

        assert query == "?path=a/b&expr=x:y;z@w&email=a+b@c.io"

    def test_percent_sign_is_encoded(self) -> None:
        """A literal '%' is escaped rather than treated as an escape."""
        assert encode_query({"discount": "10%"}) == "?discount=10%25"

    def test_unencodable_input_falls_back_to_raw_string(self) -> None:
        """If percent-encoding fails the raw query is returned."""
        query = encode_query({"bad": "\ud800"})

        assert query == "?bad=\ud800"

    def test_query_has_one_pair_per_entry(self) -> None:
        """Every entry contributes exactly one key=value pair."""
        parameters = {f"key{i}": i for i in range(5)}

        query = encode_query(parameters)

        assert query.startswith("?")
        pairs = query[1:].split("&")
        assert pairs == [f"key{i}={i}" for i in range(5)]


class TestStringifyValue:
    """Test suite for parameter value rendering."""

    def test_booleans_render_lowercase(self) -> None:
        assert stringify_value(True) == "true"
        assert stringify_value(False) == "false"

    def test_none_renders_empty(self) -> None:
        assert stringify_value(None) == ""

    def test_other_values_use_str(self) -> None:
        assert stringify_value(3.5) == "3.5"
        assert stringify_value("text") == "text"
