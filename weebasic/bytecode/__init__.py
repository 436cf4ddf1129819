"""
WeeBasic Bytecode Package

Instruction set, runtime values, and the program container shared by the
parser (which builds programs) and the interpreter (which runs them).

Author: xwest
"""

from .values import Value, ValueKind, UNDEFINED, wrap_int64, INT64_MIN, INT64_MAX
from .opcodes import Opcode, Instruction
from .program import Program, ProgramBuilder

__all__ = [
    "Opcode",
    "Instruction",
    "Program",
    "ProgramBuilder",
    "Value",
    "ValueKind",
    "UNDEFINED",
    "wrap_int64",
    "INT64_MIN",
    "INT64_MAX",
]
