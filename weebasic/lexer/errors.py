"""
Error handling for the WeeBasic scanner.

Defines the diagnostic record shared by every compiler stage, the root of
the WeeBasic exception hierarchy, and the errors raised while reading and
scanning source text.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class WeeBasicError(Exception):
    """
    Root of every error raised by the compiler and the interpreter.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class ScanError(WeeBasicError):
    """Raised when the scanner cannot read the token the parser asked for."""


class CapacityError(WeeBasicError):
    """Raised when a fixed-size buffer would overflow."""


class SourceFileError(WeeBasicError):
    """Raised when a source file cannot be read."""


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Expected token",
    "L002": "Expected identifier",
    "L003": "Identifier too long",
    "L004": "Failed to open source file",
    "C001": "Capacity exceeded",
}


# Helper functions for creating common errors
def create_expected_token_error(expected: str, location: SourceLocation) -> ScanError:
    """Create an error for a literal the parser required but did not find."""
    return ScanError(
        message=f'expected token "{expected}"',
        location=location,
        code="L001",
        help_text=f"The parser expected to see '{expected}' at this position."
    )


def create_expected_identifier_error(location: SourceLocation) -> ScanError:
    """Create an error for an empty identifier."""
    return ScanError(
        message="expected identifier",
        location=location,
        code="L002",
        help_text="Identifiers are made of letters, digits and underscores."
    )


def create_identifier_too_long_error(max_len: int, location: SourceLocation) -> ScanError:
    """Create an error for an identifier that does not fit the identifier buffer."""
    return ScanError(
        message="identifier too long",
        location=location,
        code="L003",
        help_text=f"Identifiers may be at most {max_len - 1} characters long.",
        suggestions=["Use a shorter name"]
    )


def create_source_file_error(path: str, reason: str) -> SourceFileError:
    """Create an error for a source file that cannot be opened."""
    return SourceFileError(
        message=f'failed to open source file "{path}"',
        code="L004",
        help_text=reason
    )


def create_capacity_error(
    what: str,
    limit: int,
    location: Optional[SourceLocation] = None
) -> CapacityError:
    """Create an error for a fixed-capacity buffer overflow."""
    return CapacityError(
        message=f"too many {what} (limit is {limit})",
        location=location,
        code="C001",
        help_text="Capacities are fixed when the compiler is constructed; see weebasic.config.Limits."
    )
