from __future__ import annotations

import logging
from typing import Optional

from monkey.evaluation.evaluator import evaluate, eval_program_string_output
from monkey.reader.ast import Program
from monkey.reader.parser import parse
from monkey.types.environment import Environment
from monkey.types.values import Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Parses and evaluates Monkey code against one long-lived Environment, so
    `let` bindings persist across calls.
    """

    def __init__(self, env: Optional[Environment] = None, max_depth: Optional[int] = None):
        self.env: Environment = env if env is not None else Environment()
        self.max_depth = max_depth

    def parse(self, code: str) -> Program:
        program = parse(code)
        logger.debug("parsed %d statement(s)", len(program.statements))
        return program

    def eval(self, code: str) -> Value:
        """Evaluate a chunk of code and return the value of its last statement."""
        return evaluate(self.parse(code), self.env, self.max_depth)

    def eval_lines(self, code: str) -> list[str]:
        """Evaluate a chunk of code and return each statement's display text."""
        return eval_program_string_output(self.parse(code), self.env, self.max_depth)

    def reset(self) -> None:
        """Drop every binding made so far."""
        logger.debug("resetting environment (%d binding(s))", len(self.env.vars))
        self.env = Environment()
