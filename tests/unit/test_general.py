from typing import Any, Callable

import pytest

from cpsparse import Cursor, ParseRecursionError, Parser, literal, parse_all, parse_matches, transform
from cpsparse.general import any_of, concat, first_of, join, many, optional, seq_all, whole

from tests.helpers import Spy


def test_concat_and_join() -> None:
    assert concat(("Hello", "World")) == "HelloWorld"
    assert join(("a", "b", "c")) == "abc"
    assert join(()) == ""


@pytest.mark.parametrize("factory", [any_of, first_of, seq_all])
def test_factories_need_two_parsers(factory: Callable[..., Parser[Any]]) -> None:
    with pytest.raises(ValueError, match="At least two"):
        factory("a")


def test_any_of_reports_every_branch() -> None:
    assert parse_all(any_of("a", "ab", "abc", "x"), "abc") == ["a", "ab", "abc"]


def test_first_of_stops_at_first_match() -> None:
    last = Spy("never")
    assert parse_all(first_of("x", "ab", last), "abc") == ["ab"]
    assert last.calls == []
    assert parse_all(first_of("x", "y", "a"), "abc") == ["a"]


def test_seq_all_flattens() -> None:
    assert parse_all(seq_all("a", "b", "c"), "abc") == [("a", "b", "c")]
    assert parse_all(seq_all("a", "b"), "ab") == [("a", "b")]
    assert parse_all(seq_all("a", "b", "c"), "abd") == []


def test_optional_reports_both() -> None:
    assert parse_matches(optional("a"), "ab") == [("a", Cursor("ab", 1)), (None, Cursor("ab"))]
    assert parse_all(optional("x", default=""), "ab") == [""]


def test_many_longest_first() -> None:
    assert parse_all(many("a"), "aab") == [("a", "a"), ("a",), ()]


def test_many_with_transform() -> None:
    assert parse_all(whole(transform(many("ab"), join)), "ababab") == ["ababab"]


def test_many_of_empty_match_raises() -> None:
    with pytest.raises(ParseRecursionError):
        parse_all(many(literal("")), "abc", max_depth=200)


def test_whole_requires_end() -> None:
    parser = whole(any_of("a", "ab"))
    assert parse_all(parser, "ab") == ["ab"]
    assert parse_all(parser, "abc") == []


def test_many_repetitions_are_bounded_by_max_depth() -> None:
    parser = whole(transform(many("a"), join))
    assert parse_all(parser, "a" * 8, max_depth=40) == ["a" * 8]
    with pytest.raises(ParseRecursionError):
        parse_all(parser, "a" * 20, max_depth=40)
    assert parse_all(parser, "a" * 20, max_depth=100) == ["a" * 20]
