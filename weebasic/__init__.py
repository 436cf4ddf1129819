"""
WeeBasic Package

A single-pass compiler and stack-based bytecode interpreter for WeeBasic,
a minimal imperative toy language with integer locals, one-operator
expressions, `if ... then`, `begin ... end` blocks, `assert`, `print` and
`read_int`.

Architecture:
    weebasic/
    ├── lexer/           # Scanner driven in place by the parser
    ├── analyzer/        # Local variable declarations and slot allocation
    ├── bytecode/        # Opcodes, instructions, values, programs
    ├── parser/          # Recursive descent parser emitting bytecode
    ├── vm/              # Stack machine
    ├── config.py        # Fixed capacities
    └── cli.py           # Command line entry point

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

# Core exports
from .config import Limits, DEFAULT_LIMITS
from .lexer import Scanner, WeeBasicError
from .bytecode import Opcode, Instruction, Program
from .parser import Parser, compile_source, compile_file
from .vm import Interpreter, run_program

__all__ = [
    # Core classes
    "Scanner",
    "Parser",
    "Interpreter",
    "Program",
    "Instruction",
    "Opcode",
    "Limits",
    "DEFAULT_LIMITS",
    "WeeBasicError",

    # Pipeline helpers
    "compile_source",
    "compile_file",
    "run_program",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
