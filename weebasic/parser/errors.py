"""
Error handling for the WeeBasic parser.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import SourceLocation, LET, IF, BEGIN, PRINT, ASSERT, READ_INT
from ..lexer.errors import WeeBasicError


class ParseError(WeeBasicError):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Carries the text found at the error position, truncated for display.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        found: Optional[str] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, location, code, help_text, suggestions)
        self.found = found


# Common error codes for categorization
ERROR_CODES = {
    "P001": "Invalid statement",
    "P002": "Invalid expression",
}

STATEMENT_KEYWORDS = (LET, IF, BEGIN, PRINT, ASSERT)


def create_invalid_statement_error(found: str, location: SourceLocation) -> ParseError:
    """Create an error for text that does not start any statement."""
    suggestions = [f"Start the statement with '{kw}'" for kw in STATEMENT_KEYWORDS
                   if found.strip() and kw.startswith(found.strip()[:1])]

    return ParseError(
        message=f'invalid statement: "{found} [...]"',
        location=location,
        found=found,
        code="P001",
        help_text="Statements start with one of: " + ", ".join(STATEMENT_KEYWORDS) + ", or '#'.",
        suggestions=suggestions or None
    )


def create_invalid_expression_error(found: str, location: SourceLocation) -> ParseError:
    """Create an error for an expression that does not start with an atom."""
    return ParseError(
        message="invalid expression",
        location=location,
        found=found,
        code="P002",
        help_text=f"Expressions start with an integer, a variable name or {READ_INT}.",
        suggestions=["An expression has at most one operator: a + b, a - b, a == b or a < b"]
    )
