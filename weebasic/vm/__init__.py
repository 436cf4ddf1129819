"""
WeeBasic VM Package

Stack-based bytecode interpreter for compiled WeeBasic programs.

Author: xwest
"""

from .interpreter import Interpreter, ExecutionResult, run_program
from .errors import VMError, AssertionFault, RuntimeFault

__all__ = [
    "Interpreter",
    "ExecutionResult",
    "run_program",
    "VMError",
    "AssertionFault",
    "RuntimeFault",
]
