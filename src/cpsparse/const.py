"""
General use constants.
"""

from __future__ import annotations
from typing import Final

DEFAULT_MAX_DEPTH: Final[int] = 500
"""How deep combinators may nest within one parse before `ParseRecursionError` is raised."""

DEMO_INPUTS: Final[tuple[str, ...]] = ("World", "HelloWorld")
"""The inputs the demo parses when none are given on the command line."""
