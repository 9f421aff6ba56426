"""Built-in functions for the zeal runtime.

Builtins are reserved words dispatched by name rather than bindings in the
environment, so user code can neither shadow nor rebind them. The only one is
`print`, which writes to the runtime's output sink.
"""
from __future__ import annotations

import logging
from typing import Callable

from zeal import ZealValue
from zeal.errors import ZealTypeError
from zeal.types.unit import Unit

logger = logging.getLogger(__name__)


def format_value(value: ZealValue) -> str:
    """Render a value the way `print` shows it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def print_values(output, args: list[ZealValue]) -> ZealValue:
    """Write the arguments separated by spaces plus a newline; return the last one."""
    output.write(" ".join(format_value(a) for a in args))
    output.write("\n")
    return args[-1] if args else Unit


BUILTINS: dict[str, Callable] = {
    "print": print_values,
}


def call_builtin(name: str, output, args: list[ZealValue], location=None) -> ZealValue:
    fn = BUILTINS.get(name)
    if fn is None:
        raise ZealTypeError(f"Unknown builtin '{name}'", location)
    logger.debug("builtin %s with %d argument(s)", name, len(args))
    return fn(output, args)
