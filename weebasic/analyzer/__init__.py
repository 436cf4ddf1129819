"""
WeeBasic Analyzer Package

Parse-time name resolution: the chain of local declarations and the
errors raised for undeclared or duplicate names.

Author: xwest
"""

from .symbol_table import SymbolTable, LocalDeclaration
from .errors import SymbolError

__all__ = [
    "SymbolTable",
    "LocalDeclaration",
    "SymbolError",
]
