"""Error hierarchy for Monkey.

Two disjoint families hang off MonkeyError: ParseError for anything the
parser rejects and MonkeyRuntimeError for anything the evaluator rejects.
Every error keeps the context it was raised with as attributes so callers can
build their own messages without looking at the AST again.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from monkey.reader.token import Token


class MonkeyError(Exception):
    """ Base class for all Monkey errors"""
    pass


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------

class ParseError(MonkeyError):
    """ Raised when the token stream does not match the grammar"""

    def __init__(self, message: str, token: Optional[Token] = None):
        super().__init__(message)
        self.token = token

    @property
    def position(self) -> Optional[tuple[int, int]]:
        """(line, column) of the offending token, 0-based, if known."""
        if self.token is None:
            return None
        return self.token.line, self.token.column


class UnexpectedToken(ParseError):
    """ Raised when a token is found where the grammar expects something else"""

    def __init__(self, literal: str, token: Optional[Token] = None):
        super().__init__(f"unexpected token: {literal}", token)
        self.literal = literal


class MissingToken(ParseError):
    """ Raised when the input ends where a token is required"""

    def __init__(self):
        super().__init__("expected token, found none")


class InvalidIntegerValue(ParseError):
    """ Raised when an integer literal does not fit in a signed 64-bit integer"""

    def __init__(self, text: str, token: Optional[Token] = None):
        super().__init__(f"failed to convert {text} to i64 value", token)
        self.text = text


class InvalidBooleanValue(ParseError):
    """ Raised when a boolean literal rule sees a non-boolean token"""

    def __init__(self, text: str, token: Optional[Token] = None):
        super().__init__(f"failed to convert {text} to boolean value", token)
        self.text = text


class InvalidPrefixOperator(ParseError):
    """ Raised when a token cannot be used as a prefix operator"""

    def __init__(self, text: str, token: Optional[Token] = None):
        super().__init__(f"failed to convert {text} to prefix operator", token)
        self.text = text


class InvalidInfixOperator(ParseError):
    """ Raised when a token cannot be used as an infix operator"""

    def __init__(self, text: str, token: Optional[Token] = None):
        super().__init__(f"failed to convert {text} to infix operator", token)
        self.text = text


class NestingTooDeep(ParseError):
    """ Raised when source nests deeper than the parser can follow"""

    def __init__(self, token: Optional[Token] = None):
        super().__init__("expression nested too deeply", token)


# ---------------------------------------------------------------------------
# Runtime errors
# ---------------------------------------------------------------------------

class MonkeyRuntimeError(MonkeyError):
    """ Raised when evaluation of a well-formed program fails"""
    pass


class TypeMismatch(MonkeyRuntimeError):
    """ Raised when operand types are incompatible for an infix operator"""

    def __init__(self, left: str, operator: str, right: str):
        super().__init__(f"type mismatch: {left} {operator} {right}")
        self.left = left
        self.operator = operator
        self.right = right


class UnknownOperator(MonkeyRuntimeError):
    """ Raised when an operator is not defined for the operand type"""

    def __init__(self, description: str):
        super().__init__(f"unknown operator: {description}")
        self.description = description


class NotAFunction(UnknownOperator):
    """ Raised when a call expression targets a value that is not a function"""

    def __init__(self, type_name: str):
        super().__init__(f"not a function: {type_name}")
        self.type_name = type_name


class IdentifierNotFound(MonkeyRuntimeError):
    """ Raised when a name is used before it is bound"""

    def __init__(self, name: str):
        super().__init__(f"identifier not found: {name}")
        self.name = name


class ArityMismatch(MonkeyRuntimeError):
    """ Raised when the number of arguments passed to a function is incorrect"""

    def __init__(self, expected: int, got: int):
        super().__init__(
            f"wrong number of arguments: expected {expected}, got {got}"
        )
        self.expected = expected
        self.got = got


class DivisionByZero(MonkeyRuntimeError):
    """ Raised when an integer is divided by zero"""

    def __init__(self, left: int):
        super().__init__(f"division by zero: {left} / 0")
        self.left = left


class IntegerOverflow(MonkeyRuntimeError):
    """ Raised when integer arithmetic leaves the signed 64-bit range"""

    def __init__(self, left: int, operator: str, right: int):
        super().__init__(f"integer overflow: {left} {operator} {right}")
        self.left = left
        self.operator = operator
        self.right = right


class RecursionLimitExceeded(MonkeyRuntimeError):
    """ Raised when nested function calls exceed the configured depth

    `depth` is the call depth actually reached. It is below `limit` when the
    Python stack ran out first.
    """

    def __init__(self, limit: int, depth: Optional[int] = None):
        self.limit = limit
        self.depth = limit if depth is None else depth
        if self.depth < limit:
            message = f"stack exhausted at call depth {self.depth} (limit {limit})"
        else:
            message = f"maximum call depth exceeded: {limit}"
        super().__init__(message)
