"""Tree-walking evaluator for zeal.

Children are evaluated before their parent (binary operands left to right)
and each statement produces one value. Names resolve through the Environment
chain; blocks push a child scope and lambdas capture the scope they were
created in.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

from zeal import ZealValue, config
from zeal.errors import ZealNameError, ZealRecursionError, ZealTypeError, ZealUnboundSymbol
from zeal.evaluation import operators
from zeal.evaluation.apply import apply, apply_builtin
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
from zeal.types.environment import Environment
from zeal.types.lambda_fn import Lambda
from zeal.types.symbol import Symbol
from zeal.types.unit import Unit

logger = logging.getLogger(__name__)


def evaluate(
    statements: Iterable[Expr],
    env: Optional[Environment] = None,
    output=None,
) -> list[ZealValue]:
    """
    Evaluate top-level statements in order, returning one value per statement.
    A fresh root scope is created unless `env` is given; `print` writes to
    `output` (stdout by default).
    """
    if env is None:
        env = Environment()
    if output is None:
        output = sys.stdout

    results: list[ZealValue] = []
    with config.recursion_limit():
        try:
            for statement in statements:
                results.append(evaluate_node(statement, env, output))
        except RecursionError:
            raise ZealRecursionError("Maximum call depth exceeded") from None
    logger.debug("evaluated %d statements", len(results))
    return results


def check_condition(expr: Expr, env: Environment, output, construct: str) -> bool:
    value = evaluate_node(expr, env, output)
    if not operators.is_bool(value):
        raise ZealTypeError(
            f"{construct} condition must be Bool, got {operators.type_name(value)}",
            expr.location,
        )
    return value


def evaluate_node(expr: Expr, env: Environment, output) -> ZealValue:
    """Evaluate a single AST node in `env`."""
    match expr:
        case Literal(value=Symbol() as name):
            try:
                return env.get(name)
            except ZealNameError as e:
                raise e.at(expr.location)

        case Literal(value=value):
            return value

        case Group(expr=inner):
            return evaluate_node(inner, env, output)

        case Unary(op=op, operand=operand):
            return operators.unary(op, evaluate_node(operand, env, output), expr.location)

        case Binary(left=left, op=op, right=right):
            lhs = evaluate_node(left, env, output)
            rhs = evaluate_node(right, env, output)
            return operators.binary(op, lhs, rhs, expr.location)

        case Declaration(target=name, initializer=initializer):
            value = Unit if initializer is None else evaluate_node(initializer, env, output)
            env.define(name, value)
            return Unit

        case Assignment(target=name, value=value_expr):
            value = evaluate_node(value_expr, env, output)
            try:
                env.set(name, value)
            except ZealUnboundSymbol as e:
                raise e.at(expr.location)
            return value

        case Block(statements=statements):
            scope = env.child()
            for statement in statements:
                evaluate_node(statement, scope, output)
            return Unit

        case While(condition=condition, body=body):
            while check_condition(condition, env, output, "while"):
                evaluate_node(body, env, output)
            return Unit

        case If(condition=condition, then_branch=then_branch, else_branch=else_branch):
            if check_condition(condition, env, output, "if"):
                return evaluate_node(then_branch, env, output)
            if else_branch is not None:
                return evaluate_node(else_branch, env, output)
            return Unit

        case LambdaExpr(params=params, body=body):
            return Lambda(params, body, env)

        case FunctionCall(callee=BuiltinFunction() as builtin, args=arg_exprs):
            args = [evaluate_node(a, env, output) for a in arg_exprs]
            return apply_builtin(builtin.name, args, output, expr.location)

        case FunctionCall(callee=callee_expr, args=arg_exprs):
            callee = evaluate_node(callee_expr, env, output)
            # arguments are evaluated in the caller's scope
            args = [evaluate_node(a, env, output) for a in arg_exprs]
            return apply(callee, args, output, evaluate_node, expr.location)

        case BuiltinFunction(name=name):
            raise ZealTypeError(f"Builtin '{name}' can only be called", expr.location)

        case Get(name=name, receiver=receiver):
            value = evaluate_node(receiver, env, output)
            raise ZealTypeError(
                f"{operators.type_name(value)} value has no field '{name}'", expr.location
            )

    raise ZealTypeError(f"Cannot evaluate {type(expr).__name__}", getattr(expr, "location", None))
