"""
WeeBasic single-pass compiler

Recursive descent over the source text, emitting bytecode as each
construct is recognised. There is no syntax tree: statements and
expressions go straight from the scanner into a ProgramBuilder, with
forward jumps back-patched once the body they skip has been compiled.

Grammar:
    program     ::= statement*
    statement   ::= comment | let-decl | if-stmt | begin-block | print-stmt | assert-stmt
    let-decl    ::= 'let' ident '=' expr
    if-stmt     ::= 'if' expr 'then' statement
    begin-block ::= 'begin' statement* 'end'
    print-stmt  ::= 'print' expr
    assert-stmt ::= 'assert' expr
    expr        ::= atom (('+'|'-'|'=='|'<') atom)?
    atom        ::= 'read_int' | integer-literal | ident

Expressions take at most one operator. Anything after the second atom is
left for the next statement.

Author: xwest
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ..config import Limits, DEFAULT_LIMITS
from ..lexer.scanner import Scanner
from ..lexer.tokens import (
    SourceLocation, LET, IF, THEN, BEGIN, END, PRINT, ASSERT, READ_INT,
    ASSIGN, COMMENT_START, PLUS, MINUS, EQUAL, LESS_THAN, BINARY_OPERATORS,
    DIGITS, is_identifier_start
)
from ..lexer.errors import (
    WeeBasicError, create_expected_token_error, create_source_file_error, create_capacity_error
)
from ..analyzer.symbol_table import SymbolTable
from ..bytecode.opcodes import Opcode
from ..bytecode.program import Program, ProgramBuilder
from .errors import create_invalid_statement_error, create_invalid_expression_error

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Results of compiling one source text."""
    program: Optional[Program]
    source_name: str
    errors: List[WeeBasicError] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if compilation failed."""
        return len(self.errors) > 0


class Parser:
    """
    WeeBasic recursive descent parser and code generator.

    One Parser compiles one source text. Errors are raised as soon as they
    are found; there is no recovery.
    """

    def __init__(self, source: str, filename: str = "<string>", limits: Optional[Limits] = None):
        """
        Initialize parser with source code.

        Args:
            source: Program text
            filename: Name used in diagnostics and on the compiled program
            limits: Capacity configuration shared by every buffer
        """
        self.filename = filename
        self.limits = limits or DEFAULT_LIMITS
        self.scanner = Scanner(source, filename, self.limits)
        self.symbols = SymbolTable(self.limits)
        self.builder = ProgramBuilder(self.limits)
        self.depth = 0

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize statement keyword and operator tables."""

        # Tried in order; the first keyword that matches picks the statement
        self.statement_parsers: List[Tuple[str, Callable[[SourceLocation], None]]] = [
            (LET, self._parse_let),
            (IF, self._parse_if),
            (BEGIN, self._parse_begin),
            (PRINT, self._parse_print),
            (ASSERT, self._parse_assert),
        ]

        self.binary_opcodes: Dict[str, Opcode] = {
            PLUS: Opcode.ADD,
            MINUS: Opcode.SUB,
            EQUAL: Opcode.EQ,
            LESS_THAN: Opcode.LT,
        }

    def parse(self) -> Program:
        """
        Compile the whole source text.

        Returns:
            The frozen Program

        Raises:
            WeeBasicError: On the first syntax, name or capacity error
        """
        while True:
            self.scanner.skip_whitespace()
            if self.scanner.at_end():
                break
            self.parse_statement()

        return self.builder.finish(self.symbols.num_locals, self.filename)

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self):
        """
        Parse one statement and emit its code.

        Statements nest through begin blocks and if bodies; nesting deeper
        than max_depth is a capacity error.
        """
        self.scanner.skip_whitespace()
        location = self.scanner.location()

        if self.scanner.peek() == COMMENT_START:
            self.scanner.skip_comment()
            return

        if self.depth >= self.limits.max_depth:
            raise create_capacity_error("nested statements", self.limits.max_depth, location)

        self.depth += 1
        try:
            for keyword, parse_fn in self.statement_parsers:
                if self.scanner.match(keyword):
                    parse_fn(location)
                    return
        finally:
            self.depth -= 1

        raise create_invalid_statement_error(self.scanner.remaining_preview(), location)

    def _parse_let(self, location: SourceLocation):
        """let ident = expr"""
        name_location = self.scanner.location()
        name = self.scanner.parse_identifier()
        self.scanner.expect(ASSIGN)

        # Value first, declaration second: `let x = x` is an undeclared reference
        self.parse_expression()

        decl = self.symbols.declare(name, name_location)
        self._emit(Opcode.SETLOCAL, decl.slot, location)

    def _parse_if(self, location: SourceLocation):
        """if expr then statement"""
        self.parse_expression()
        self.scanner.expect(THEN)

        # Skip the body when the test is false
        jump = self._emit(Opcode.IFNOT, 0, location)
        self.parse_statement()
        self.builder.patch_jump(jump)

    def _parse_begin(self, location: SourceLocation):
        """begin statement* end"""
        while not self.scanner.match(END):
            if self.scanner.at_end():
                raise create_expected_token_error(END, self.scanner.location())
            self.parse_statement()

    def _parse_print(self, location: SourceLocation):
        """print expr"""
        self.parse_expression()
        self._emit(Opcode.PRINT, 0, location)

    def _parse_assert(self, location: SourceLocation):
        """assert expr"""
        self.parse_expression()

        # Jump over the ERROR when the test holds
        self._emit(Opcode.IF, 1, location)
        self._emit(Opcode.ERROR, 0, location)

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expression(self):
        """atom, optionally followed by one operator and a second atom."""
        self.parse_atom()
        self.scanner.skip_whitespace()

        for operator in BINARY_OPERATORS:
            location = self.scanner.location()
            if self.scanner.match(operator):
                self.parse_atom()
                self._emit(self.binary_opcodes[operator], 0, location)
                return

    def parse_atom(self):
        """read_int, an integer literal, or a variable reference."""
        if self.scanner.match(READ_INT):
            self._emit(Opcode.READINT)
            return

        location = self.scanner.location()
        char = self.scanner.peek()

        if char in DIGITS:
            self._emit(Opcode.PUSH, self.scanner.parse_integer(), location)
            return

        if is_identifier_start(char):
            name = self.scanner.parse_identifier()
            decl = self.symbols.resolve(name, location)
            self._emit(Opcode.GETLOCAL, decl.slot, location)
            return

        raise create_invalid_expression_error(self.scanner.remaining_preview(), location)

    def _emit(self, opcode: Opcode, immediate: int = 0,
              location: Optional[SourceLocation] = None) -> int:
        return self.builder.emit(opcode, immediate, location or self.scanner.location())


def compile_source(source: str, filename: str = "<string>",
                   limits: Optional[Limits] = None) -> CompileResult:
    """
    Convenience function to compile a source string.

    Args:
        source: Program text
        filename: Filename for error reporting
        limits: Capacity configuration, DEFAULT_LIMITS when omitted

    Returns:
        CompileResult holding either the program or the error that stopped compilation
    """
    try:
        program = Parser(source, filename, limits).parse()
    except WeeBasicError as e:
        logger.debug("compilation of %s failed: %s", filename, e.message)
        return CompileResult(None, filename, [e])

    return CompileResult(program, filename)


def compile_file(filepath: str, limits: Optional[Limits] = None) -> CompileResult:
    """
    Convenience function to compile a source file.

    Args:
        filepath: Path to source file
        limits: Capacity configuration, DEFAULT_LIMITS when omitted

    Returns:
        CompileResult; a file that cannot be read is reported as a SourceFileError
    """
    try:
        with open(filepath, 'rb') as f:
            data = f.read()
        source = data.decode('utf-8')
    except (OSError, UnicodeDecodeError) as e:
        reason = getattr(e, "strerror", None) or str(e)
        return CompileResult(None, filepath, [create_source_file_error(filepath, reason)])

    logger.debug("read %d bytes from %s", len(data), filepath)
    return compile_source(source, filepath, limits)
