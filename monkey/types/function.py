"""Function values (closures) for Monkey."""

from __future__ import annotations

from io import StringIO
from typing import Sequence

from monkey.errors import ArityMismatch
from monkey.reader.ast import BlockStatement, Identifier
from monkey.types.environment import Environment
from monkey.types.values import Value


class Function:
    """A first-class function with parameters, body, and closure env."""

    __slots__ = ("parameters", "body", "env")

    type_name = "FUNCTION"

    def __init__(
        self, parameters: Sequence[Identifier], body: BlockStatement, env: Environment
    ):
        self.parameters: tuple[Identifier, ...] = tuple(parameters)
        self.body: BlockStatement = body
        # Defining environment, shared with every other closure made there.
        self.env: Environment = env

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("fn(")
            buffer.write(", ".join(str(p) for p in self.parameters))
            buffer.write(")")
            buffer.write(str(self.body))
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Function({str(self)!r})"

    def extend_env(self, args: Sequence[Value]) -> Environment:
        """
        Bind argument values to the parameters in a fresh Environment whose
        outer is the captured environment, not the caller's.

        Raises ArityMismatch unless exactly one value is given per parameter.
        """
        if len(args) != self.arity:
            raise ArityMismatch(self.arity, len(args))
        local_env = self.env.extend()
        for param, arg in zip(self.parameters, args):
            local_env.define(param.name, arg)
        return local_env
