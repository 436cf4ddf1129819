"""
Symbol resolution error handling for WeeBasic.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import SourceLocation
from ..lexer.errors import WeeBasicError


class SymbolError(WeeBasicError):
    """
    Exception raised when a local variable reference or declaration is invalid.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation],
        name: str,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        related_locations: Optional[List[SourceLocation]] = None
    ):
        super().__init__(message, location, code, help_text, suggestions)
        self.name = name
        self.related_locations = related_locations or []

    def __str__(self) -> str:
        result = str(self.diagnostic)

        # Add related locations if any
        if self.related_locations:
            result += "\nRelated locations:\n"
            for loc in self.related_locations:
                result += f"  --> {loc}\n"

        return result


ERROR_CODES = {
    "S001": "Reference to undeclared variable",
    "S002": "Local variable already declared",
}


def create_undeclared_variable_error(
    name: str,
    location: SourceLocation,
    similar_names: Optional[List[str]] = None
) -> SymbolError:
    """Create an error for a reference to a name that was never declared."""
    suggestions = []
    if similar_names:
        suggestions.extend([f"Did you mean '{other}'?" for other in similar_names[:3]])

    suggestions.append(f"Declare '{name}' with 'let' before using it")

    return SymbolError(
        message=f'reference to undeclared variable "{name}"',
        location=location,
        name=name,
        code="S001",
        help_text="Variables must be declared with 'let' earlier in the program.",
        suggestions=suggestions
    )


def create_already_declared_error(
    name: str,
    location: SourceLocation,
    previous: Optional[SourceLocation] = None
) -> SymbolError:
    """Create an error for a second 'let' of the same name."""
    return SymbolError(
        message=f'local variable "{name}" already declared',
        location=location,
        name=name,
        code="S002",
        help_text="Every local variable name can be declared only once per program.",
        related_locations=[previous] if previous else None
    )
