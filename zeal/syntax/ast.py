"""AST node types produced by the parser and walked by the evaluator.

Each node owns its children. `location` points at the token that started the
node and is excluded from equality so trees can be compared structurally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from zeal import ZealValue
from zeal.reader.tokens import Location, Token, TokenType
from zeal.types.symbol import Symbol


@dataclass
class Expr:
    location: Optional[Location] = field(default=None, compare=False, repr=False, kw_only=True)


@dataclass
class Literal(Expr):
    value: ZealValue


@dataclass
class Group(Expr):
    expr: Expr


@dataclass
class Unary(Expr):
    op: TokenType
    operand: Expr


@dataclass
class Binary(Expr):
    left: Expr
    op: TokenType
    right: Expr


@dataclass
class Get(Expr):
    receiver: Expr
    name: str


@dataclass
class FunctionCall(Expr):
    callee: Expr
    args: list[Expr]


@dataclass
class Declaration(Expr):
    target: Symbol
    initializer: Optional[Expr] = None


@dataclass
class Assignment(Expr):
    target: Symbol
    value: Expr


@dataclass
class Block(Expr):
    statements: list[Expr]


@dataclass
class While(Expr):
    condition: Expr
    body: Expr


@dataclass
class If(Expr):
    condition: Expr
    then_branch: Expr
    else_branch: Optional[Expr] = None


@dataclass
class BuiltinFunction(Expr):
    token: Token

    @property
    def name(self) -> str:
        return self.token.lexeme


@dataclass
class LambdaExpr(Expr):
    params: list[Symbol]
    body: list[Expr]
