from typing import Any

from cpsparse import Cursor, Parser


class Spy:
    """A parser that records the cursors it was run with, and emits each of `values` without consuming."""

    def __init__(self, *values: Any) -> None:
        self.values = values
        self.calls: list[Cursor] = []

    def __call__(self, cursor: Cursor, sink: Any) -> None:
        self.calls.append(cursor)
        for value in self.values:
            sink(value, cursor)


def collect(parser: Parser[Any], cursor: Cursor) -> list[tuple[Any, Cursor]]:
    """Runs `parser` directly on `cursor` and returns every `(value, cursor)` it reported."""
    results: list[tuple[Any, Cursor]] = []
    parser(cursor, lambda value, after: results.append((value, after)))
    return results
