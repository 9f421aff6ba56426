# Core type aliases for zeal's data model.
# Runtime values are plain Python objects (int, bool, str) plus a few
# dedicated types: Symbol for identifiers, Lambda for closures and the Unit
# singleton for statements with no natural result.
#
# Naming guidance:
# - Statement:  an AST node at statement level (parser output).
# - ZealValue:  an evaluated runtime value (evaluator output).

import logging
from typing import Any, Callable

# Runtime value alias
ZealValue = Any
# Parser output: one AST node per statement
Statement = Any

# Evaluator function type: used by apply/builtins to re-enter evaluation
EvaluatorFn = Callable[..., ZealValue]

logging.getLogger(__name__).addHandler(logging.NullHandler())
