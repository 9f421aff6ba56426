"""Identifier values.

The parser wraps every identifier in a Symbol; the evaluator resolves it
through the Environment chain, and Environments key their bindings by it.
"""

from __future__ import annotations

import sys


class Symbol:
    __slots__ = ("name",)

    def __init__(self, name: str):
        # interned, so equal names share one string object
        self.name = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.name is other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"

    def __str__(self) -> str:
        return self.name
