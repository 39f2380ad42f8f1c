"""
Continuation-passing parser combinators.

A parser doesn't return its result. It calls a sink once for every way it can match, with the value and the cursor after the match. No calls means no match. Combinators explore every alternative, so a grammar can be ambiguous and report all of its parses.

See the `cpsparse.general` module for parsers built out of the combinators.

Defining parsers:
```
greeting = transform(seq("Hello", choice(" World", " there")), concat)

def digit(cursor: Cursor, sink: Sink[str]) -> None:
    if cursor and cursor.remaining()[0].isdigit():
        sink(cursor.remaining()[0], cursor.advance(1))
```

Using parsers:
```
run(greeting, "Hello there", print)     # prints "Hello there"

parse_all(choice("a", "ab"), "ab")      # ["a", "ab"]
parse_all(biased_choice("a", "ab"), "ab")   # ["a"]
parse_all(greeting, "Goodbye")          # []
```

Combinator debug output goes to the `cpsparse.main` logger.
"""

import cpsparse.const as const
import cpsparse.main
from cpsparse.main import (
    ParseRecursionError,
    Cursor,
    Sink,
    Parser,
    FactoryParameter,
    as_parser,
    eof,
    literal,
    succeed,
    seq,
    choice,
    biased_choice,
    transform,
    run,
    parse_all,
    parse_matches,
)
import cpsparse.general as general
