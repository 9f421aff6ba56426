"""Lambda closure representation and argument binding for zeal."""

from __future__ import annotations

from io import StringIO

from zeal import ZealValue, Statement
from zeal.errors import ZealArityError
from zeal.types.environment import Environment
from zeal.types.symbol import Symbol


class Lambda:
    """A first-class function with parameters, a statement body and its closure env."""

    __slots__ = ("params", "body", "env")

    def __init__(self, params: list[Symbol], body: list[Statement], env: Environment):
        self.params: list[Symbol] = params
        self.body: list[Statement] = body
        # Captured by reference: the scope active where the lambda was created
        self.env: Environment = env

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<fn")
            for p in self.params:
                buffer.write(f" {p}")
            buffer.write(">")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Lambda({[str(p) for p in self.params]}, {len(self.body)} statement(s))"

    def extend_env(self, args: list[ZealValue]) -> Environment:
        """
        Bind the argument values positionally to this lambda's parameters in a
        fresh frame whose parent is the captured scope (never the caller's).
        """
        if len(args) != len(self.params):
            raise ZealArityError(
                f"{self} expects {len(self.params)} argument(s), got {len(args)}"
            )
        frame = Environment(outer=self.env)
        for name, value in zip(self.params, args):
            frame.define(name, value)
        return frame
