"""Core tree-walking evaluator for the Monkey interpreter.

Walks the AST against an Environment and produces a runtime value. Errors
are raised as MonkeyRuntimeError subclasses and propagate untouched to the
caller of evaluate(). Early return is not an error: a `return` statement
produces a ReturnValue wrapper that blocks hand upward unchanged until a
function-call boundary (or the top-level program) unwraps it.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from monkey.config import get_max_call_depth
from monkey.errors import NotAFunction, RecursionLimitExceeded
from monkey.evaluation.operators import eval_infix, eval_prefix, is_truthy
from monkey.reader.ast import (
    Node,
    Program,
    BlockStatement,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
)
from monkey.types.environment import Environment
from monkey.types.function import Function
from monkey.types.nil import Null
from monkey.types.return_value import ReturnValue
from monkey.types.values import Value, Integer, Boolean, type_name

# Python frames one Monkey call may take, nested blocks in its body included.
FRAMES_PER_CALL = 32
# Ceiling for the raised Python recursion limit.
MAX_PYTHON_FRAMES = 200_000


class CallStack:
    """Tracks nesting of function calls against a depth limit."""

    __slots__ = ("limit", "depth", "deepest")

    def __init__(self, limit: int):
        self.limit = limit
        self.depth = 0
        self.deepest = 0

    @contextmanager
    def enter(self) -> Iterator[None]:
        if self.depth >= self.limit:
            raise RecursionLimitExceeded(self.limit)
        self.depth += 1
        self.deepest = max(self.deepest, self.depth)
        try:
            yield
        finally:
            self.depth -= 1

    @contextmanager
    def guard(self) -> Iterator[None]:
        """
        Give the Python stack room for `limit` Monkey calls for the duration
        of one evaluation. If Python still runs out first, report the call
        depth that was actually reached.
        """
        previous = sys.getrecursionlimit()
        wanted = min(previous + self.limit * FRAMES_PER_CALL, MAX_PYTHON_FRAMES)
        sys.setrecursionlimit(max(previous, wanted))
        try:
            yield
        except RecursionError:
            raise RecursionLimitExceeded(self.limit, self.deepest) from None
        finally:
            sys.setrecursionlimit(previous)


def evaluate(node: Node, env: Environment, max_depth: Optional[int] = None) -> Value:
    """
    Evaluate a Program (or any single node) in `env` and return its value.

    Bindings made by top-level `let` statements land in `env`, so a caller can
    keep one Environment across calls. Raises MonkeyRuntimeError subclasses.
    """
    calls = CallStack(max_depth if max_depth is not None else get_max_call_depth())
    with calls.guard():
        if isinstance(node, Program):
            return eval_program(node, env, calls)
        result = evaluate0(node, env, calls)
    return result.value if isinstance(result, ReturnValue) else result


def eval_program(program: Program, env: Environment, calls: CallStack) -> Value:
    result: Value | ReturnValue = Null
    for statement in program.statements:
        result = evaluate0(statement, env, calls)
        if isinstance(result, ReturnValue):
            return result.value
    return result


def eval_program_string_output(
    program: Program, env: Environment, max_depth: Optional[int] = None
) -> list[str]:
    """
    Evaluate top-level statements one at a time and return the display text
    of each expression or return statement's value. `let` statements
    contribute no output; a top-level `return` ends the program.
    """
    calls = CallStack(max_depth if max_depth is not None else get_max_call_depth())
    output: list[str] = []
    with calls.guard():
        for statement in program.statements:
            result = evaluate0(statement, env, calls)
            if isinstance(result, ReturnValue):
                output.append(str(result.value))
                break
            if not isinstance(statement, LetStatement):
                output.append(str(result))
    return output


def eval_block(block: BlockStatement, env: Environment, calls: CallStack) -> Value | ReturnValue:
    result: Value | ReturnValue = Null
    for statement in block.statements:
        result = evaluate0(statement, env, calls)
        # Leave the ReturnValue wrapped so enclosing blocks stop too.
        if isinstance(result, ReturnValue):
            return result
    return result


def evaluate0(node: Node, env: Environment, calls: CallStack) -> Value | ReturnValue:
    """
    Single-node evaluation. Returns either a value or a ReturnValue that
    must keep unwinding.
    """
    match node:
        # --- Statements ---
        case ExpressionStatement(expression):
            return evaluate0(expression, env, calls)

        case LetStatement(name, value_expr):
            value = evaluate0(value_expr, env, calls)
            if isinstance(value, ReturnValue):
                return value
            env.define(name.name, value)
            return Null

        case ReturnStatement(value_expr):
            value = evaluate0(value_expr, env, calls)
            if isinstance(value, ReturnValue):
                return value
            return ReturnValue(value)

        case BlockStatement():
            return eval_block(node, env, calls)

        # --- Expressions ---
        case IntegerLiteral(value):
            return Integer(value)

        case BooleanLiteral(value):
            return Boolean.of(value)

        case Identifier(name):
            return env.lookup(name)

        case PrefixExpression(operator, right_expr):
            right = evaluate0(right_expr, env, calls)
            if isinstance(right, ReturnValue):
                return right
            return eval_prefix(operator, right)

        case InfixExpression(left_expr, operator, right_expr):
            left = evaluate0(left_expr, env, calls)
            if isinstance(left, ReturnValue):
                return left
            right = evaluate0(right_expr, env, calls)
            if isinstance(right, ReturnValue):
                return right
            return eval_infix(left, operator, right)

        case IfExpression(condition_expr, consequence, alternative):
            condition = evaluate0(condition_expr, env, calls)
            if isinstance(condition, ReturnValue):
                return condition
            if is_truthy(condition):
                return eval_block(consequence, env, calls)
            if alternative is not None:
                return eval_block(alternative, env, calls)
            return Null

        case FunctionLiteral(parameters, body):
            # Capture the defining environment, not the one it is later called from.
            return Function(parameters, body, env)

        case CallExpression(function_expr, argument_exprs):
            return eval_call(function_expr, argument_exprs, env, calls)

    raise TypeError(f"Cannot evaluate node of type {type(node).__name__}")


def eval_call(function_expr, argument_exprs, env: Environment, calls: CallStack) -> Value | ReturnValue:
    callee = evaluate0(function_expr, env, calls)
    if isinstance(callee, ReturnValue):
        return callee
    if not isinstance(callee, Function):
        raise NotAFunction(type_name(callee))

    args: list[Value] = []
    for argument_expr in argument_exprs:
        arg = evaluate0(argument_expr, env, calls)
        if isinstance(arg, ReturnValue):
            return arg
        args.append(arg)

    return apply_function(callee, args, calls)


def apply_function(fn: Function, args: Sequence[Value], calls: CallStack) -> Value:
    """Bind `args` in a child of the closure env and run the body.

    The body's ReturnValue is unwrapped here; it never escapes a call.
    """
    call_env = fn.extend_env(args)
    with calls.enter():
        result = eval_block(fn.body, call_env, calls)
    return result.value if isinstance(result, ReturnValue) else result
