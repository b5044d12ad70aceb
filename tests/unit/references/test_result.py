"""Unit tests for the size-bounded result sink."""

import pytest

from src.references.result import QueryResult, ResultSinkProtocol, value_size


class TestValueSize:
    """Tests for value_size."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("abc", 3),
            (12, 2),
            (None, 0),
            (False, 0),
            (True, 1),
            ([], 0),
            ({"long-key-not-counted": "ab"}, 2),
            ({"a": {"b": ["x", "yz", 100]}}, 6),
        ],
    )
    def test_sizes(self, value, expected) -> None:
        assert value_size(value) == expected


class TestQueryResult:
    """Tests for QueryResult."""

    def test_implements_protocol(self) -> None:
        assert isinstance(QueryResult(), ResultSinkProtocol)

    def test_append_within_limit(self) -> None:
        result = QueryResult(max_size=10)

        assert result.append(1, {"a": {"text": "hello"}}) is True
        assert result.size == 5
        assert result.pages == {1: {"a": {"text": "hello"}}}

    def test_append_over_limit_adds_nothing(self) -> None:
        result = QueryResult(max_size=10)
        result.append(1, {"a": {"text": "hello"}})

        assert result.append(2, {"b": {"text": "world!"}}) is False
        assert 2 not in result.pages
        assert result.size == 5

    def test_exact_limit_fits(self) -> None:
        result = QueryResult(max_size=5)

        assert result.append(1, {"a": "hello"}) is True

    def test_empty_collection_always_fits(self) -> None:
        result = QueryResult(max_size=1)
        result.append(1, {"a": "x"})

        assert result.append(2, {}) is True
        assert result.pages[2] == {}

    def test_continue_block(self) -> None:
        result = QueryResult()
        assert result.batch_complete is True
        assert result.continue_block() is None

        result.set_continue("rfcontinue", 12)

        assert result.batch_complete is False
        assert result.continue_block() == {"rfcontinue": "12", "continue": "||"}
