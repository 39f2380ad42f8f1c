"""
Runs two small grammars over some strings and prints what they matched.

```
python -m cpsparse [--verbose] [INPUT ...]
```
"""

from __future__ import annotations

from collections.abc import Sequence

import argparse
import logging

import cpsparse.const as const
from cpsparse.main import Parser, choice, literal, run, seq, transform
from cpsparse.general import concat


def hello_or_world() -> Parser[str]:
    return choice(literal("Hello"), literal("World"))

def hello_world() -> Parser[str]:
    return transform(seq(literal("Hello"), literal("World")), concat)

def main(argv: Sequence[str] | None = None) -> int:
    arg_parser = argparse.ArgumentParser(prog="cpsparse", description="Prints every match of the demo grammars.")
    arg_parser.add_argument("inputs", nargs="*", default=list(const.DEMO_INPUTS), help="strings to parse")
    arg_parser.add_argument("-v", "--verbose", action="store_true", help="log every combinator step")
    args = arg_parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    grammars = {
        "hello_or_world": hello_or_world(),
        "hello_world": hello_world(),
    }
    for src in args.inputs:
        for name, grammar in grammars.items():
            def show(value: str, src: str = src, name: str = name) -> None:
                print(f"{src} {name}: {value}")
            run(grammar, src, show)
    return 0
