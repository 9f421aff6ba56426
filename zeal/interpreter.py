from __future__ import annotations

import logging
import sys
from pathlib import Path

from zeal import ZealValue
from zeal.evaluation.evaluator import evaluate
from zeal.reader.parser import parse
from zeal.reader.scanner import Scanner
from zeal.reader.tokens import Token
from zeal.syntax.ast import Expr
from zeal.types.environment import Environment

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Runs zeal source through scan -> parse -> evaluate.
    Maintains one root Environment across calls so definitions persist, which
    is what a REPL or language host needs. `print` writes to `output`.
    """

    def __init__(self, output=None, tab_width: int | None = None):
        self.output = output if output is not None else sys.stdout
        self.scanner = Scanner(tab_width)
        self.env: Environment = Environment()

    def reset(self) -> None:
        """Drop every binding made so far."""
        self.env = Environment()

    def scan(self, code: str) -> list[Token]:
        return self.scanner.scan(code)

    def parse(self, code: str) -> list[Expr]:
        return parse(self.scan(code))

    def eval(self, code: str) -> list[ZealValue]:
        """Evaluate every statement in `code`, returning one value per statement.

        Errors propagate as ZealError subclasses; statements that ran before
        the failing one keep their effects on the session.
        """
        return evaluate(self.parse(code), self.env, self.output)

    def eval_file(self, path: str | Path) -> list[ZealValue]:
        path = Path(path)
        logger.debug("evaluating %s", path)
        return self.eval(path.read_text(encoding="utf-8"))


def run(code: str, output=None) -> list[ZealValue]:
    """Evaluate `code` in a fresh session."""
    return Interpreter(output=output).eval(code)
