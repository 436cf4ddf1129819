"""
WeeBasic scanner - cursor over in-memory source text

There is no token list here. The parser drives the scanner directly,
asking it to match a keyword or operator in place, or to read an
identifier or an integer, and emits bytecode as it goes.

xwest
"""

from typing import Optional

from ..config import Limits, DEFAULT_LIMITS
from ..bytecode.values import wrap_int64
from .tokens import (
    SourceLocation, WHITESPACE, NEWLINE_CHARS, DIGITS, COMMENT_START,
    is_identifier_char
)
from .errors import (
    create_expected_token_error, create_expected_identifier_error,
    create_identifier_too_long_error
)


class Scanner:
    """
    WeeBasic scanner.

    Skips whitespace and comments, matches literal text case-sensitively and
    reads identifiers and unsigned integer literals. Keeps line and column
    information so that every error can point at the offending text.
    """

    def __init__(self, source: str, filename: str = "<string>", limits: Optional[Limits] = None):
        """
        Initialize the scanner with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
            limits: Capacity configuration (identifier length)
        """
        self.source = source
        self.filename = filename
        self.limits = limits or DEFAULT_LIMITS
        self.pos = 0
        self.line = 1
        self.column = 1

    def at_end(self) -> bool:
        """Check if the cursor has reached the end of the input."""
        return self.pos >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        """Peek at a character without advancing; '\\0' past the end."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'

    def location(self) -> SourceLocation:
        """Location of the cursor."""
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def skip_whitespace(self):
        """Consume a run of spaces, tabs, carriage returns and newlines."""
        while self.pos < len(self.source) and self.source[self.pos] in WHITESPACE:
            self._advance()

    def skip_comment(self):
        """Consume a '#' comment up to and including the end of the line."""
        if self.peek() != COMMENT_START:
            return

        while self.pos < len(self.source):
            char = self.source[self.pos]
            self._advance()
            if char == '\n':
                break

    def match(self, text: str) -> bool:
        """
        Try to consume `text` at the cursor.

        Leading whitespace is skipped first. On a match, the text and any
        whitespace after it are consumed. Otherwise the cursor stays put.
        """
        self.skip_whitespace()

        if not self.source.startswith(text, self.pos):
            return False

        self._advance_by(len(text))
        self.skip_whitespace()
        return True

    def expect(self, text: str):
        """Consume `text` or fail."""
        if not self.match(text):
            raise create_expected_token_error(text, self.location())

    def parse_identifier(self) -> str:
        """
        Read a maximal run of identifier characters.

        Raises:
            ScanError: If the run is empty or does not fit the identifier buffer
        """
        start = self.location()
        end = self.pos

        while end < len(self.source) and is_identifier_char(self.source[end]):
            end += 1
            if end - self.pos >= self.limits.max_ident_len:
                raise create_identifier_too_long_error(self.limits.max_ident_len, start)

        if end == self.pos:
            raise create_expected_identifier_error(start)

        ident = self.source[self.pos:end]
        self._advance_by(len(ident))
        return ident

    def parse_integer(self) -> int:
        """
        Read a maximal run of decimal digits.

        No sign handling. Values past the 64-bit range wrap around silently.
        """
        value = 0
        while self.pos < len(self.source) and self.source[self.pos] in DIGITS:
            value = wrap_int64(10 * value + int(self.source[self.pos]))
            self._advance()
        return value

    def remaining_preview(self, limit: int = 10) -> str:
        """The next `limit` characters with line breaks shown as spaces."""
        preview = self.source[self.pos:self.pos + limit]
        return "".join(' ' if char in NEWLINE_CHARS else char for char in preview)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()
