"""
The implementations of the cursor, the parser protocols and the combinators.
"""

from __future__ import annotations
from typing import Any, Callable, Protocol, TypeVar, overload

import logging

import cpsparse.const as const


logger = logging.getLogger(__name__)

_T = TypeVar("_T")
_U = TypeVar("_U")
_A = TypeVar("_A")
_B = TypeVar("_B")
_T_co = TypeVar("_T_co", covariant=True)
_T_contra = TypeVar("_T_contra", contravariant=True)



class ParseRecursionError(RecursionError):
    """
    Raised when a parse nests deeper than the cursor's `max_depth`.

    Usually caused by a grammar that re-enters itself without consuming input (left recursion), or by repeating a parser that matches the empty string.
    """

    def __init__(self, pos: int, depth: int, msg: str | None = None) -> None:
        """
        `pos`: The position of the cursor when the limit was hit.
        `depth`: The depth that was refused.
        """
        if msg is None:
            msg = f"Parser nesting exceeded {depth - 1} levels at position {pos}."
        super().__init__(msg)
        self.pos: int = pos
        self.depth: int = depth



class Cursor:
    """
    An immutable position in a string.

    Every operation that moves the cursor returns a new cursor. The source string is shared between all of them and never modified.

    ```
    c = Cursor("HelloWorld")
    if (after := c.try_consume_prefix("Hello")) is not None:
        after.remaining()   # "World"
    c.remaining()           # still "HelloWorld"
    ```
    """
    __slots__ = ("src", "pos", "depth", "max_depth")

    src: str
    """The string that's being parsed."""
    pos: int
    """The current position."""
    depth: int
    max_depth: int

    def __init__(self, src: str, pos: int = 0, *, depth: int = 0, max_depth: int = const.DEFAULT_MAX_DEPTH) -> None:
        """
        `src`: The string that's being parsed.
        `pos`: The starting position.
        `depth`: How many combinators deep this cursor was handed down. Managed by `descend()`.
        `max_depth`: The nesting depth at which `descend()` raises `ParseRecursionError`.
        """
        if not 0 <= pos <= len(src):
            raise ValueError(f"Position {pos} is outside of the source (length {len(src)}).")
        object.__setattr__(self, "src", src)
        object.__setattr__(self, "pos", pos)
        object.__setattr__(self, "depth", depth)
        object.__setattr__(self, "max_depth", max_depth)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Cursors are immutable, can't set `{name}`. Use `advance()` to get a moved cursor.")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Cursors are immutable, can't delete `{name}`.")

    def _moved(self, pos: int) -> Cursor:
        return Cursor(self.src, pos, depth=self.depth, max_depth=self.max_depth)

    def remaining(self) -> str:
        """The part of the source that hasn't been consumed yet."""
        return self.src[self.pos:]

    def consumed(self) -> str:
        """The part of the source before the current position."""
        return self.src[:self.pos]

    def is_empty(self) -> bool:
        """Whether the end of the input has been reached. The opposite of `__bool__()`"""
        return self.pos >= len(self.src)

    def __bool__(self) -> bool:
        """Whether there are any characters left. The opposite of `is_empty()`"""
        return self.pos < len(self.src)

    def __len__(self) -> int:
        """The amount of characters left."""
        return len(self.src) - self.pos

    def try_consume_prefix(self, value: str) -> Cursor | None:
        """
        Attempts to match the given string at the current position. Case sensitive.

        Returns a new cursor positioned after the match, or `None` if it didn't match.
        """
        if not self.src.startswith(value, self.pos):
            return None
        return self._moved(self.pos + len(value))

    def advance(self, amount: int) -> Cursor:
        """
        Returns a new cursor moved forward by the specified amount of characters.

        Cursors never move backwards. Raises `ValueError` if the amount is negative or goes past the end.
        """
        if amount < 0:
            raise ValueError("Cursors can't move backwards.")
        if amount > len(self):
            raise ValueError(f"Can't advance by {amount}, only {len(self)} characters left.")
        return self._moved(self.pos + amount)

    def copy(self) -> Cursor:
        """An equal, independent cursor."""
        return self._moved(self.pos)

    def descend(self) -> Cursor:
        """
        Returns the same position one nesting level deeper.

        Combinators call this on every cursor they hand to a sub-parser.

        Raises `ParseRecursionError` if that would exceed `max_depth`.
        """
        depth = self.depth + 1
        if depth > self.max_depth:
            raise ParseRecursionError(self.pos, depth)
        return Cursor(self.src, self.pos, depth=depth, max_depth=self.max_depth)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Cursor):
            return self.src == other.src and self.pos == other.pos
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.src, self.pos))

    def __repr__(self) -> str:
        return f"<Cursor {self.pos}/{len(self.src)} {self.remaining()[:20]!r}>"


class Sink(Protocol[_T_contra]):
    """
    Receives the alternatives a parser finds.

    Called once per successful match, with the matched value and the cursor positioned after the match. May be called any number of times, including zero.
    """
    def __call__(self, value: _T_contra, cursor: Cursor, /) -> None: ...

class Parser(Protocol[_T_co]):
    """
    A protocol for parsers.

    A parser looks for matches at the cursor's position and reports each one to the sink. Not calling the sink at all means there was no match.

    Any function with this signature is a parser:
    ```
    def digit(cursor: Cursor, sink: Sink[str]) -> None:
        if cursor and cursor.remaining()[0].isdigit():
            sink(cursor.remaining()[0], cursor.advance(1))
    ```
    """
    def __call__(self, cursor: Cursor, sink: Sink[_T_co], /) -> None: ...

FactoryParameter = Parser[Any] | str

@overload
def as_parser(parser: str) -> Parser[str]: ...
@overload
def as_parser(parser: Parser[_T]) -> Parser[_T]: ...

def as_parser(parser: FactoryParameter) -> Parser[Any]:
    """Strings are converted into `literal()` parsers, parsers are returned as-is."""
    if isinstance(parser, str):
        return literal(parser)
    else:
        assert callable(parser)
        return parser


# primitives

def eof(cursor: Cursor, sink: Sink[None]) -> None:
    """A pre-defined parser (not a factory). Matches `None` if the end of the input has been reached."""
    if cursor.is_empty():
        logger.debug("eof matched at %d", cursor.pos)
        sink(None, cursor)

def literal(value: str) -> Parser[str]:
    """
    Parser factory.

    Matches the given string exactly, and produces the matched string.
    """
    def inner(cursor: Cursor, sink: Sink[str]) -> None:
        after = cursor.try_consume_prefix(value)
        if after is not None:
            logger.debug("literal(%r) matched at %d", value, cursor.pos)
            sink(value, after)
    return inner

def succeed(value: _T) -> Parser[_T]:
    """
    Parser factory.

    Always matches exactly once without consuming anything, and produces `value`.
    """
    def inner(cursor: Cursor, sink: Sink[_T]) -> None:
        sink(value, cursor)
    return inner


# combinators

def seq(first: Parser[_A] | str, second: Parser[_B] | str) -> Parser[tuple[_A, _B]]:
    """
    Parser factory.

    Matches `first`, then `second` starting from where that match ended, and produces both values as a pair.

    Every match of `first` is continued separately, so the result is every combination of a `first` match with the `second` matches that follow it. They are reported depth-first: all the pairs for the first match of `first`, then all the pairs for its second match, and so on.
    """
    p1 = as_parser(first)
    p2 = as_parser(second)
    def inner(cursor: Cursor, sink: Sink[tuple[_A, _B]]) -> None:
        def on_first(a: _A, after_first: Cursor) -> None:
            logger.debug("seq: first parser matched at %d..%d", cursor.pos, after_first.pos)
            def on_second(b: _B, after_second: Cursor) -> None:
                logger.debug("seq: second parser matched at %d..%d", after_first.pos, after_second.pos)
                sink((a, b), after_second)
            p2(after_first.descend(), on_second)
        p1(cursor.descend(), on_first)
    return inner

def choice(first: Parser[_T] | str, second: Parser[_T] | str) -> Parser[_T]:
    """
    Parser factory.

    Runs both parsers from the same position and reports the matches of both, `first`'s before `second`'s.

    `second` is tried even if `first` matched. Use `biased_choice()` to stop at the first branch that matches.
    """
    p1 = as_parser(first)
    p2 = as_parser(second)
    def inner(cursor: Cursor, sink: Sink[_T]) -> None:
        def on_first(value: _T, after: Cursor) -> None:
            logger.debug("choice: first branch matched at %d..%d", cursor.pos, after.pos)
            sink(value, after)
        def on_second(value: _T, after: Cursor) -> None:
            logger.debug("choice: second branch matched at %d..%d", cursor.pos, after.pos)
            sink(value, after)
        p1(cursor.descend(), on_first)
        p2(cursor.descend(), on_second)
    return inner

def biased_choice(first: Parser[_T] | str, second: Parser[_T] | str) -> Parser[_T]:
    """
    Parser factory.

    Runs `first`, and reports its matches. Only if it didn't match at all, runs `second` from the same starting position and reports its matches instead.

    Whether `first` matched is only known once it has returned, which is why this relies on sinks being called synchronously. A parser that defers its sink calls until after it returns would make `second` run every time.
    """
    p1 = as_parser(first)
    p2 = as_parser(second)
    def inner(cursor: Cursor, sink: Sink[_T]) -> None:
        matched = False
        def on_first(value: _T, after: Cursor) -> None:
            nonlocal matched
            matched = True
            sink(value, after)
        p1(cursor.descend(), on_first)
        if not matched:
            logger.debug("biased_choice: first branch failed at %d, trying second", cursor.pos)
            p2(cursor.descend(), sink)
    return inner

def transform(parser: Parser[_T] | str, func: Callable[[_T], _U]) -> Parser[_U]:
    """
    Parser factory.

    Matches `parser` and produces `func(value)` for each of its matches.

    Exceptions raised by `func` are not caught, they abort the whole parse.
    """
    p = as_parser(parser)
    def inner(cursor: Cursor, sink: Sink[_U]) -> None:
        def on_value(value: _T, after: Cursor) -> None:
            sink(func(value), after)
        p(cursor.descend(), on_value)
    return inner


# entry points

def _start(parser: Parser[_T], src: str, sink: Sink[_T], max_depth: int) -> None:
    parser(Cursor(src, max_depth=max_depth), sink)

def run(parser: Parser[_T] | str, src: str, sink: Callable[[_T], Any], *, max_depth: int = const.DEFAULT_MAX_DEPTH) -> None:
    """
    Parses `src` from the start, calling `sink` with the value of every match.

    ```
    run(choice("Hello", "World"), "World", print)
    ```
    """
    _start(as_parser(parser), src, lambda value, cursor: sink(value), max_depth)

def parse_all(parser: Parser[_T] | str, src: str, *, max_depth: int = const.DEFAULT_MAX_DEPTH) -> list[_T]:
    """Parses `src` from the start and returns the value of every match, in the order they were found."""
    results: list[_T] = []
    _start(as_parser(parser), src, lambda value, cursor: results.append(value), max_depth)
    return results

def parse_matches(parser: Parser[_T] | str, src: str, *, max_depth: int = const.DEFAULT_MAX_DEPTH) -> list[tuple[_T, Cursor]]:
    """Like `parse_all()`, but also returns the cursor each match ended at."""
    results: list[tuple[_T, Cursor]] = []
    _start(as_parser(parser), src, lambda value, cursor: results.append((value, cursor)), max_depth)
    return results
