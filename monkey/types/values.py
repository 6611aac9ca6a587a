"""Runtime values for Monkey.

The value set is closed: Integer, Boolean, Function (see
monkey.types.function) and the Null singleton (see monkey.types.nil).
Integer and Boolean are immutable and compared by value; every value class
carries a `type_name` used in runtime error messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union, TYPE_CHECKING

from monkey.types.nil import NullType

if TYPE_CHECKING:
    from monkey.types.function import Function

# Integers are signed 64-bit.
I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class Integer:
    type_name: ClassVar[str] = "INTEGER"
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Boolean:
    type_name: ClassVar[str] = "BOOLEAN"
    value: bool

    @staticmethod
    def of(value: bool) -> Boolean:
        return TRUE if value else FALSE

    def __str__(self):
        return "true" if self.value else "false"


TRUE = Boolean(True)
FALSE = Boolean(False)

Value = Union[Integer, Boolean, "Function", NullType]


def type_name(value: Value) -> str:
    """Upper-case type name of a runtime value, e.g. INTEGER."""
    return value.type_name
