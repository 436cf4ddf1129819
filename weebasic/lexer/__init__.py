"""
WeeBasic Lexer Package

Implements the scanner the parser drives in place: whitespace and comment
skipping, literal matching, identifiers and integer literals. There is no
separate token stream.

Author: xwest
"""

from .tokens import SourceLocation, KEYWORDS, BINARY_OPERATORS
from .scanner import Scanner
from .errors import (
    Diagnostic, WeeBasicError, ScanError, CapacityError, SourceFileError
)

__all__ = [
    "Scanner",
    "SourceLocation",
    "KEYWORDS",
    "BINARY_OPERATORS",
    "Diagnostic",
    "WeeBasicError",
    "ScanError",
    "CapacityError",
    "SourceFileError",
]
