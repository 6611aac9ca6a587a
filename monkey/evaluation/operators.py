"""Operator semantics for the Monkey evaluator.

Arithmetic and ordering are defined on Integer pairs only, equality on
Integer pairs and Boolean pairs. Every other pairing is a TypeMismatch.
Integers are signed 64-bit: results outside that range raise IntegerOverflow
and division truncates toward zero.
"""

from __future__ import annotations

import operator as op
from typing import Callable

from monkey.errors import TypeMismatch, UnknownOperator, DivisionByZero, IntegerOverflow
from monkey.reader.ast import PrefixOperator, InfixOperator
from monkey.types.nil import NullType
from monkey.types.values import Value, Integer, Boolean, type_name, I64_MIN, I64_MAX


def is_truthy(value: Value) -> bool:
    # Boolean(b) -> b, Null -> false, Integer(n) -> n != 0, functions are truthy
    if isinstance(value, Boolean):
        return value.value
    if isinstance(value, NullType):
        return False
    if isinstance(value, Integer):
        return value.value != 0
    return True


def _checked(left: int, symbol: str, right: int, result: int) -> Integer:
    if not I64_MIN <= result <= I64_MAX:
        raise IntegerOverflow(left, symbol, right)
    return Integer(result)


def _truncating_div(left: int, right: int) -> int:
    if right == 0:
        raise DivisionByZero(left)
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


_ARITHMETIC: dict[InfixOperator, Callable[[int, int], int]] = {
    InfixOperator.PLUS: op.add,
    InfixOperator.MINUS: op.sub,
    InfixOperator.MULTIPLY: op.mul,
    InfixOperator.DIVIDE: _truncating_div,
}

_COMPARISON: dict[InfixOperator, Callable[[object, object], bool]] = {
    InfixOperator.LESS_THAN: op.lt,
    InfixOperator.GREATER_THAN: op.gt,
    InfixOperator.EQUAL: op.eq,
    InfixOperator.NOT_EQUAL: op.ne,
}


def eval_prefix(operator: PrefixOperator, right: Value) -> Value:
    if operator is PrefixOperator.NOT:
        return Boolean.of(not is_truthy(right))
    if operator is PrefixOperator.NEGATE:
        if not isinstance(right, Integer):
            raise UnknownOperator(f"{operator}{type_name(right)}")
        return _checked(0, "-", right.value, -right.value)
    raise UnknownOperator(f"{operator}{type_name(right)}")


def eval_infix(left: Value, operator: InfixOperator, right: Value) -> Value:
    if isinstance(left, Integer) and isinstance(right, Integer):
        return _eval_integer_infix(left.value, operator, right.value)
    if (
        isinstance(left, Boolean)
        and isinstance(right, Boolean)
        and operator in (InfixOperator.EQUAL, InfixOperator.NOT_EQUAL)
    ):
        return Boolean.of(_COMPARISON[operator](left.value, right.value))
    raise TypeMismatch(type_name(left), str(operator), type_name(right))


def _eval_integer_infix(left: int, operator: InfixOperator, right: int) -> Value:
    if operator in _ARITHMETIC:
        return _checked(left, str(operator), right, _ARITHMETIC[operator](left, right))
    if operator in _COMPARISON:
        return Boolean.of(_COMPARISON[operator](left, right))
    raise UnknownOperator(f"INTEGER {operator} INTEGER")

