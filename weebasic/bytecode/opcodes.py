"""
Instruction set of the WeeBasic stack machine.

Author: xwest
"""

from dataclasses import dataclass
from enum import Enum, auto


class Opcode(Enum):
    """Kinds of instructions the interpreter supports."""
    EXIT = auto()       # Halt normally
    ERROR = auto()      # Halt with a run-time error
    PUSH = auto()       # Push the immediate constant
    GETLOCAL = auto()   # Push locals[immediate]
    SETLOCAL = auto()   # Pop into locals[immediate]
    ADD = auto()
    SUB = auto()
    EQ = auto()
    LT = auto()
    IF = auto()         # Pop; jump by immediate when nonzero
    IFNOT = auto()      # Pop; jump by immediate when zero
    READINT = auto()    # Prompt and push an integer read from stdin
    PRINT = auto()      # Pop and print

    @property
    def has_immediate(self) -> bool:
        return self in _IMMEDIATE_OPCODES

    @property
    def is_jump(self) -> bool:
        return self in (Opcode.IF, Opcode.IFNOT)


_IMMEDIATE_OPCODES = frozenset({
    Opcode.PUSH, Opcode.GETLOCAL, Opcode.SETLOCAL, Opcode.IF, Opcode.IFNOT
})


@dataclass(frozen=True)
class Instruction:
    """
    One bytecode instruction.

    The immediate is a constant for PUSH, a slot index for GETLOCAL and
    SETLOCAL, and for IF/IFNOT a signed offset added to the normal advance
    of one, so a taken jump at index i lands on i + 1 + immediate.
    """
    opcode: Opcode
    immediate: int = 0

    def __str__(self) -> str:
        if self.opcode.has_immediate:
            return f"{self.opcode.name} {self.immediate}"
        return self.opcode.name
