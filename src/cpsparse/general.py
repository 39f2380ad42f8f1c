"""
General purpose parsers, built only out of the combinators in `cpsparse.main`.
"""

from __future__ import annotations
from typing import Any, TypeVar

from collections.abc import Sequence

from cpsparse import *

_T = TypeVar("_T")
_D = TypeVar("_D")


def _cons(pair: tuple[Any, tuple[Any, ...]]) -> tuple[Any, ...]:
    head, tail = pair
    return (head, *tail)

def _first(pair: tuple[_T, Any]) -> _T:
    return pair[0]

# string helpers, for use with `transform()`

def concat(pair: tuple[str, str]) -> str:
    """Joins the two strings produced by `seq()`."""
    return pair[0] + pair[1]

def join(values: Sequence[str]) -> str:
    """Joins the strings produced by `seq_all()` or `many()`."""
    return "".join(values)

# folds

def any_of(*parsers: FactoryParameter) -> Parser[Any]:
    """
    Parser factory.

    `choice()` over all the given parsers. Reports the matches of every parser, in order.
    """
    if len(parsers) < 2:
        raise ValueError("At least two parsers required.")
    result = as_parser(parsers[-1])
    for parser in reversed(parsers[:-1]):
        result = choice(parser, result)
    return result

def first_of(*parsers: FactoryParameter) -> Parser[Any]:
    """
    Parser factory.

    `biased_choice()` over all the given parsers. Reports the matches of the first parser that matches at all.
    """
    if len(parsers) < 2:
        raise ValueError("At least two parsers required.")
    result = as_parser(parsers[-1])
    for parser in reversed(parsers[:-1]):
        result = biased_choice(parser, result)
    return result

def seq_all(*parsers: FactoryParameter) -> Parser[tuple[Any, ...]]:
    """
    Parser factory.

    All the given parsers must match in sequence. Produces a flat tuple with one value per parser.
    """
    if len(parsers) < 2:
        raise ValueError("At least two parsers required.")
    result: Parser[tuple[Any, ...]] = transform(parsers[-1], lambda value: (value,))
    for parser in reversed(parsers[:-1]):
        result = transform(seq(parser, result), _cons)
    return result

# repetition

def optional(parser: Parser[_T] | str, default: _D = None) -> Parser[_T | _D]:
    """
    Parser factory.

    Reports the matches of `parser`, followed by `default` without consuming anything.

    Both are reported even if `parser` matched. Wrap it in `biased_choice()` manually if only one is wanted.
    """
    return choice(parser, succeed(default))

def many(parser: Parser[_T] | str) -> Parser[tuple[_T, ...]]:
    """
    Parser factory.

    Matches `parser` zero or more times in a row. Produces a tuple of the values.

    Every possible repetition count is reported, longest first:
    ```
    parse_all(many("a"), "aa")  # [("a", "a"), ("a",), ()]
    ```

    Each repetition nests four combinators deeper, so at the default `max_depth` of 500 about 125 repetitions fit. Pass a larger `max_depth` to the entry point for longer inputs.

    If `parser` can match without consuming anything, this never stops repeating and raises `ParseRecursionError`.
    """
    item = as_parser(parser)
    def inner(cursor: Cursor, sink: Sink[tuple[_T, ...]]) -> None:
        rest(cursor, sink)
    rest = choice(transform(seq(item, inner), _cons), succeed(()))
    return inner

def whole(parser: Parser[_T] | str) -> Parser[_T]:
    """
    Parser factory.

    Only keeps the matches of `parser` that consumed the entire remaining input.
    """
    return transform(seq(parser, eof), _first)
