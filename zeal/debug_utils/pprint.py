from __future__ import annotations

from typing import Iterable

from zeal.reader.tokens import LEXEMES, Token
from zeal.syntax.ast import (
    Assignment,
    Binary,
    Block,
    BuiltinFunction,
    Declaration,
    Expr,
    FunctionCall,
    Get,
    Group,
    If,
    LambdaExpr,
    Literal,
    Unary,
    While,
)
from zeal.types.symbol import Symbol

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_SYMBOL = "\033[94m"
COLOR_LAMBDA = "\033[92m"
COLOR_BUILTIN = "\033[95m"
COLOR_FORM = "\033[90m"
COLOR_LITERAL = "\033[93m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "color": True,
}


# ----------------- Colorize utility -----------------
def colorize(text: str, color: str, options: dict = DEFAULT_OPTIONS) -> str:
    if options.get("color", True):
        return f"{color}{text}{RESET}"
    return text


def _atom(value, options: dict) -> str:
    if isinstance(value, Symbol):
        return colorize(str(value), COLOR_SYMBOL, options)
    if isinstance(value, bool):
        return colorize("true" if value else "false", COLOR_LITERAL, options)
    if isinstance(value, str):
        return colorize(f'"{value}"', COLOR_LITERAL, options)
    return colorize(str(value), COLOR_LITERAL, options)


def _form(expr: Expr, options: dict) -> tuple[str, list]:
    """Split a node into its head label and its children (nodes or rendered strings)."""
    match expr:
        case Group(expr=inner):
            return "group", [inner]
        case Unary(op=op, operand=operand):
            return LEXEMES[op], [operand]
        case Binary(left=left, op=op, right=right):
            return LEXEMES[op], [left, right]
        case Get(receiver=receiver, name=name):
            return ".", [receiver, name]
        case FunctionCall(callee=callee, args=args):
            return "call", [callee, *args]
        case Declaration(target=target, initializer=initializer):
            return ":=", [_atom(target, options), *([initializer] if initializer else [])]
        case Assignment(target=target, value=value):
            return "=", [_atom(target, options), value]
        case Block(statements=statements):
            return "block", list(statements)
        case While(condition=condition, body=body):
            return "while", [condition, body]
        case If(condition=condition, then_branch=then_branch, else_branch=else_branch):
            return "if", [condition, then_branch, *([else_branch] if else_branch else [])]
        case LambdaExpr(params=params, body=body):
            head = colorize("fn", COLOR_LAMBDA, options)
            param_list = "(" + " ".join(_atom(p, options) for p in params) + ")"
            return head, [param_list, *body]
    raise TypeError(f"Not an AST node: {expr!r}")


# ----------------- Pretty printer -----------------
def pprint_expr(expr, indent: int = 0, options: dict = DEFAULT_OPTIONS) -> str:
    """Render an AST node as an S-expression, wrapping long forms one child per line."""
    if isinstance(expr, str):
        return expr
    if isinstance(expr, Literal):
        return _atom(expr.value, options)
    if isinstance(expr, BuiltinFunction):
        return colorize(expr.name, COLOR_BUILTIN, options)

    head, children = _form(expr, options)
    if not isinstance(expr, LambdaExpr):
        head = colorize(head, COLOR_FORM, options)
    parts = [head] + [pprint_expr(c, indent + 1, options) for c in children]

    single_line = "(" + " ".join(parts) + ")"
    if "\n" not in single_line and len(single_line) + indent * 2 <= options.get("max_line_length", 80):
        return single_line

    aligned_lines = ["(" + parts[0]]
    for part in parts[1:]:
        aligned_lines.append("  " * (indent + 1) + part)
    aligned_lines[-1] += ")"
    return "\n".join(aligned_lines)


def pprint_program(statements: Iterable[Expr], options: dict = DEFAULT_OPTIONS) -> str:
    return "\n".join(pprint_expr(s, 0, options) for s in statements)


def format_tokens(tokens: Iterable[Token]) -> str:
    """One token per line: location, kind and lexeme."""
    lines = []
    for token in tokens:
        loc = token.location
        lines.append(f"{loc.line:>4}:{loc.col + 1:<4} {token.type.name:<14} {token.lexeme}")
    return "\n".join(lines)
