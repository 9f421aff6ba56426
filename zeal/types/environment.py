"""Runtime environment for zeal.

The Environment stores bindings of Symbols to evaluated values and supports
nested lexical scopes via an `outer` link. Scopes are shared by reference:
a block scope captured by a Lambda stays alive for as long as the Lambda
does, which is what gives closures their by-reference capture.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from zeal import ZealValue
from zeal.errors import ZealNameError, ZealUnboundSymbol
from zeal.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, ZealValue] = {}
        self.outer: Environment | None = outer

    def child(self) -> Environment:
        """Return a fresh scope whose parent is this one."""
        return Environment(outer=self)

    def define(self, name: Symbol, value: ZealValue) -> None:
        """Bind `name` to `value` in this (innermost) scope.

        An existing binding in this scope is overwritten; a binding of the same
        name in an enclosing scope is shadowed, never mutated.
        """
        self.vars[name] = value

    def find(self, name: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def set(self, name: Symbol, value: ZealValue) -> None:
        """Update the nearest existing binding for `name` in the chain.

        Raises ZealUnboundSymbol if no scope defines the name.
        """
        env = self.find(name)
        if env is None:
            raise ZealUnboundSymbol(f"Cannot assign to undefined variable '{name}'")
        env.vars[name] = value

    def get(self, name: Symbol) -> ZealValue:
        """Look up the value bound to `name`, innermost scope first.

        Raises ZealNameError if not found.
        """
        env = self.find(name)
        if env is None:
            raise ZealNameError(f"Undefined variable '{name}'")
        return env.vars[name]

    def depth(self) -> int:
        n = 0
        env = self.outer
        while env is not None:
            n += 1
            env = env.outer
        return n

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.outer
        return f"<Environment chain: {' -> '.join(chain)}>"
