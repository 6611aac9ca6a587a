"""Abstract syntax tree for Monkey.

Nodes are frozen dataclasses split into two disjoint families, Statement and
Expression. Child sequences are tuples, so a Program is immutable once the
parser returns it and every sub-node has exactly one owner.

str(node) renders a source-like form with explicit parentheses reflecting
the parsed precedence: `(left OP right)`, `(OPoperand)`, `{stmt\\nstmt}`,
`fn(a, b){body}`, `callee(x, y)`. It is meant for debugging and tests, not for
re-parsing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PrefixOperator(Enum):
    NOT = "!"
    NEGATE = "-"

    def __str__(self):
        return self.value


class InfixOperator(Enum):
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    LESS_THAN = "<"
    GREATER_THAN = ">"
    EQUAL = "=="
    NOT_EQUAL = "!="

    def __str__(self):
        return self.value


class Node:
    __slots__ = ()


class Statement(Node):
    __slots__ = ()


class Expression(Node):
    __slots__ = ()


# --- Expressions ---

@dataclass(frozen=True)
class Identifier(Expression):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: PrefixOperator
    right: Expression

    def __str__(self):
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    left: Expression
    operator: InfixOperator
    right: Expression

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self):
        text = f"if {self.condition} {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self):
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}){self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    function: Expression
    arguments: tuple[Expression, ...]

    def __str__(self):
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# --- Statements ---

@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self):
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Expression

    def __str__(self):
        return f"return {self.value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self):
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: tuple[Statement, ...] = ()

    def __str__(self):
        return "{" + "\n".join(str(s) for s in self.statements) + "}"


@dataclass(frozen=True)
class Program(Node):
    statements: tuple[Statement, ...] = ()

    def __str__(self):
        return "\n".join(str(s) for s in self.statements)

    def __len__(self):
        return len(self.statements)

    def __iter__(self):
        return iter(self.statements)
