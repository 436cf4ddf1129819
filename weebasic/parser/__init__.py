"""
WeeBasic Parser Package

Single-pass recursive descent compiler: parses WeeBasic source and emits
bytecode directly, with no intermediate syntax tree.

Author: xwest
"""

from .parser import Parser, CompileResult, compile_source, compile_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "CompileResult",
    "compile_source",
    "compile_file",

    # Error handling
    "ParseError",
]
