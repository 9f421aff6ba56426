"""Application engine for zeal.

Centralizes call semantics for the evaluator:
- Builtins are dispatched by their reserved name.
- Lambdas bind their already-evaluated arguments in a fresh frame whose parent
  is the captured scope, then run the body statements there. The value of the
  last statement is the call's result.
- Anything else in callee position is a type error.
"""

from __future__ import annotations

import logging

from zeal import EvaluatorFn, ZealValue
from zeal.builtin.env_builtin import call_builtin, format_value
from zeal.errors import ZealArityError, ZealTypeError
from zeal.types.lambda_fn import Lambda
from zeal.types.unit import Unit

logger = logging.getLogger(__name__)


def apply_lambda(
    fn: Lambda,
    args: list[ZealValue],
    output,
    evaluate_fn: EvaluatorFn,
    location=None,
) -> ZealValue:
    """Apply a Lambda value to evaluated arguments.

    Too few or too many arguments raise ZealArityError.
    """
    if not fn.body:
        raise ZealArityError(f"{fn} has an empty body", location)
    try:
        frame = fn.extend_env(args)
    except ZealArityError as e:
        raise e.at(location)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("call %s with %d argument(s), scope depth %d", fn, len(args), frame.depth())

    result: ZealValue = Unit
    for statement in fn.body:
        result = evaluate_fn(statement, frame, output)
    return result


def apply(
    head: ZealValue,
    args: list[ZealValue],
    output,
    evaluate_fn: EvaluatorFn,
    location=None,
) -> ZealValue:
    """Apply a callee value; only Lambdas are callable values."""
    if isinstance(head, Lambda):
        return apply_lambda(head, args, output, evaluate_fn, location)
    raise ZealTypeError(f"Cannot call non-function value {format_value(head)!r}", location)


def apply_builtin(name: str, args: list[ZealValue], output, location=None) -> ZealValue:
    return call_builtin(name, output, args, location)
