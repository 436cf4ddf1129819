"""
Runtime values for the WeeBasic interpreter.

The only data type in the language is the integer. Values are still
modelled as a discriminated type so that an unwritten local slot can be
told apart from an integer.

Integers use the full signed 64-bit range and wrap around on overflow,
the way the machine arithmetic of a two's-complement int64 does.

Author: xwest
"""

from dataclasses import dataclass
from enum import Enum

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int64(value: int) -> int:
    """Reduce an arbitrary Python int to the signed 64-bit range."""
    return ((value - INT64_MIN) % (1 << 64)) + INT64_MIN


class ValueKind(Enum):
    """Discriminant of a runtime value."""
    INT = "int"
    UNDEFINED = "undefined"


@dataclass(frozen=True)
class Value:
    """A tagged runtime value."""
    kind: ValueKind
    payload: int = 0

    @classmethod
    def integer(cls, value: int) -> 'Value':
        return cls(ValueKind.INT, wrap_int64(value))

    @classmethod
    def boolean(cls, flag: bool) -> 'Value':
        return cls(ValueKind.INT, 1 if flag else 0)

    def is_int(self) -> bool:
        return self.kind is ValueKind.INT

    def as_int(self) -> int:
        if not self.is_int():
            raise ValueError(f"{self.kind.value} value is not an integer")
        return self.payload

    def __str__(self) -> str:
        if self.is_int():
            return str(self.payload)
        return self.kind.value


UNDEFINED = Value(ValueKind.UNDEFINED)
