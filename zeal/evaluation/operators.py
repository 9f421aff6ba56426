"""Operator semantics for zeal values.

Integers are signed 32-bit. Any result outside that range raises
ZealOverflowError instead of wrapping. `//` truncates toward zero and `%`
takes the sign of the dividend, so `a == (a // b) * b + a % b` always holds.
"""

from __future__ import annotations

import operator
from typing import Callable

from zeal import ZealValue
from zeal.errors import ZealOverflowError, ZealTypeError, ZealZeroDivisionError
from zeal.reader.tokens import LEXEMES, Location, TokenType
from zeal.types.lambda_fn import Lambda
from zeal.types.symbol import Symbol
from zeal.types.unit import UnitType

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def is_int(value: ZealValue) -> bool:
    """True for Int values; bool is excluded even though Python subclasses it from int."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_bool(value: ZealValue) -> bool:
    return isinstance(value, bool)


def type_name(value: ZealValue) -> str:
    if is_bool(value):
        return "Bool"
    if is_int(value):
        return "Int"
    if isinstance(value, str):
        return "String"
    if isinstance(value, Lambda):
        return "Function"
    if isinstance(value, UnitType):
        return "Unit"
    if isinstance(value, Symbol):
        return "Identifier"
    return type(value).__name__


def trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def trunc_mod(a: int, b: int) -> int:
    return a - b * trunc_div(a, b)


ARITHMETIC: dict[TokenType, Callable[[int, int], int]] = {
    TokenType.PLUS: operator.add,
    TokenType.MINUS: operator.sub,
    TokenType.STAR: operator.mul,
    TokenType.SLASH_SLASH: trunc_div,
    TokenType.MOD: trunc_mod,
}

COMPARISON: dict[TokenType, Callable[[int, int], bool]] = {
    TokenType.GREATER: operator.gt,
    TokenType.GREATER_EQUAL: operator.ge,
    TokenType.LESS: operator.lt,
    TokenType.LESS_EQUAL: operator.le,
}

EQUALITY: dict[TokenType, Callable[[ZealValue, ZealValue], bool]] = {
    TokenType.EQUAL_EQUAL: operator.eq,
    TokenType.BANG_EQUAL: operator.ne,
}

LOGICAL: dict[TokenType, Callable[[bool, bool], bool]] = {
    TokenType.AND_AND: lambda a, b: a and b,
    TokenType.OR_OR: lambda a, b: a or b,
}

EQUATABLE = ("Int", "Bool", "String")


def check_i32(value: int, location: Location | None = None) -> int:
    if not INT32_MIN <= value <= INT32_MAX:
        raise ZealOverflowError(f"Integer overflow: {value} is outside the 32-bit range", location)
    return value


def _mismatch(op: TokenType, left: ZealValue, right: ZealValue, location) -> ZealTypeError:
    return ZealTypeError(
        f"Unsupported operand types for {LEXEMES[op]}: {type_name(left)} and {type_name(right)}",
        location,
    )


def binary(op: TokenType, left: ZealValue, right: ZealValue, location: Location | None = None) -> ZealValue:
    """Apply a binary operator to two evaluated operands."""
    if op in ARITHMETIC:
        if not (is_int(left) and is_int(right)):
            raise _mismatch(op, left, right, location)
        if op in (TokenType.SLASH_SLASH, TokenType.MOD) and right == 0:
            raise ZealZeroDivisionError("Integer division or modulo by zero", location)
        return check_i32(ARITHMETIC[op](left, right), location)

    if op in COMPARISON:
        if not (is_int(left) and is_int(right)):
            raise _mismatch(op, left, right, location)
        return COMPARISON[op](left, right)

    if op in EQUALITY:
        kind = type_name(left)
        if kind not in EQUATABLE or kind != type_name(right):
            raise _mismatch(op, left, right, location)
        return EQUALITY[op](left, right)

    if op in LOGICAL:
        if not (is_bool(left) and is_bool(right)):
            raise _mismatch(op, left, right, location)
        return LOGICAL[op](left, right)

    raise ZealTypeError(f"Unknown binary operator {LEXEMES.get(op, op.name)}", location)


def unary(op: TokenType, operand: ZealValue, location: Location | None = None) -> ZealValue:
    """Apply `-` to an Int or `!` to a Bool."""
    if op is TokenType.MINUS and is_int(operand):
        return check_i32(-operand, location)
    if op is TokenType.BANG and is_bool(operand):
        return not operand
    raise ZealTypeError(
        f"Unsupported operand type for unary {LEXEMES.get(op, op.name)}: {type_name(operand)}",
        location,
    )
