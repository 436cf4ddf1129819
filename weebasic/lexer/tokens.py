"""
Literal tables for the WeeBasic scanner.

WeeBasic has no separate token stream: the parser asks the scanner to match
literal text in place. This module holds the keyword and operator spellings
the parser matches against, the character classes the scanner uses, and the
source location type attached to every diagnostic.

Author: xwest
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and debugging information.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of file

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


# ============================================================================
# Keywords
# ============================================================================

LET = "let"
IF = "if"
THEN = "then"
BEGIN = "begin"
END = "end"
PRINT = "print"
ASSERT = "assert"
READ_INT = "read_int"

KEYWORDS = (LET, IF, THEN, BEGIN, END, PRINT, ASSERT, READ_INT)

# ============================================================================
# Punctuation and operators
# ============================================================================

ASSIGN = "="
COMMENT_START = "#"

PLUS = "+"
MINUS = "-"
EQUAL = "=="
LESS_THAN = "<"

# Order matters: the parser tries them front to back
BINARY_OPERATORS = (PLUS, MINUS, EQUAL, LESS_THAN)

# ============================================================================
# Character classes
# ============================================================================

WHITESPACE = frozenset(" \t\r\n")
NEWLINE_CHARS = frozenset("\r\n")
DIGITS = frozenset("0123456789")


def is_identifier_start(char: str) -> bool:
    """Check if character can start an identifier reference."""
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")


def is_identifier_char(char: str) -> bool:
    """Check if character can appear anywhere in an identifier."""
    return is_identifier_start(char) or char in DIGITS
