"""
Test suite for the WeeBasic scanner.

Tests cover:
- Whitespace and comment skipping
- Literal matching and expectation
- Identifier and integer scanning
- Diagnostic helpers

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from weebasic.config import Limits
from weebasic.lexer.scanner import Scanner
from weebasic.lexer.errors import ScanError
from weebasic.bytecode.values import INT64_MIN


class TestScanner(unittest.TestCase):
    """Test cases for the scanner."""

    def test_skip_whitespace(self):
        """Spaces, tabs, carriage returns and newlines are all skipped."""
        scanner = Scanner(" \t\r\n  x")
        scanner.skip_whitespace()
        self.assertEqual(scanner.peek(), "x")

    def test_skip_comment_to_end_of_line(self):
        """A comment runs to the end of the line, newline included."""
        scanner = Scanner("# a comment\nprint 1")
        scanner.skip_comment()
        self.assertEqual(scanner.peek(), "p")
        self.assertEqual(scanner.line, 2)

    def test_skip_comment_to_end_of_input(self):
        """A comment on the last line runs to the end of the input."""
        scanner = Scanner("# no newline")
        scanner.skip_comment()
        self.assertTrue(scanner.at_end())

    def test_match_consumes_surrounding_whitespace(self):
        """A successful match eats whitespace on both sides."""
        scanner = Scanner("  let   x")
        self.assertTrue(scanner.match("let"))
        self.assertEqual(scanner.peek(), "x")

    def test_failed_match_does_not_consume_text(self):
        """A failed match leaves the text where it was."""
        scanner = Scanner("print 1")
        self.assertFalse(scanner.match("let"))
        self.assertEqual(scanner.pos, 0)

    def test_match_is_case_sensitive(self):
        """Keywords are matched exactly."""
        self.assertFalse(Scanner("LET").match("let"))

    def test_match_is_a_prefix_comparison(self):
        """'letter' starts with 'let', and the rest is left for the caller."""
        scanner = Scanner("letter")
        self.assertTrue(scanner.match("let"))
        self.assertEqual(scanner.parse_identifier(), "ter")

    def test_expect_reports_missing_token(self):
        """expect raises a ScanError naming the missing text."""
        scanner = Scanner("print")
        with self.assertRaises(ScanError) as ctx:
            scanner.expect("then")
        self.assertIn('expected token "then"', ctx.exception.message)
        self.assertEqual(ctx.exception.code, "L001")

    def test_parse_identifier(self):
        """Identifiers are maximal runs of letters, digits and underscores."""
        scanner = Scanner("foo_1 = 2")
        self.assertEqual(scanner.parse_identifier(), "foo_1")
        self.assertEqual(scanner.peek(), " ")

    def test_parse_identifier_empty(self):
        """An empty identifier is an error."""
        with self.assertRaises(ScanError) as ctx:
            Scanner("= 2").parse_identifier()
        self.assertEqual(ctx.exception.code, "L002")

    def test_parse_identifier_length_limit(self):
        """Identifiers must be shorter than the identifier buffer."""
        limits = Limits(max_ident_len=8)
        self.assertEqual(Scanner("abcdefg", limits=limits).parse_identifier(), "abcdefg")

        with self.assertRaises(ScanError) as ctx:
            Scanner("abcdefgh", limits=limits).parse_identifier()
        self.assertEqual(ctx.exception.code, "L003")

    def test_parse_integer(self):
        """Integers are maximal runs of decimal digits."""
        scanner = Scanner("12345x")
        self.assertEqual(scanner.parse_integer(), 12345)
        self.assertEqual(scanner.peek(), "x")

    def test_parse_integer_wraps_silently(self):
        """Literals past the 64-bit range wrap around."""
        self.assertEqual(Scanner("18446744073709551616").parse_integer(), 0)
        self.assertEqual(Scanner("9223372036854775808").parse_integer(), INT64_MIN)

    def test_remaining_preview(self):
        """Previews are cut to ten characters with line breaks as spaces."""
        scanner = Scanner("foo\nbar\r\nbazqux")
        self.assertEqual(scanner.remaining_preview(), "foo bar  b")

    def test_location_tracking(self):
        """Line and column follow the cursor."""
        scanner = Scanner("\n\n  print", filename="demo.wb")
        scanner.skip_whitespace()
        location = scanner.location()
        self.assertEqual((location.line, location.column, location.offset), (3, 3, 4))
        self.assertEqual(str(location), "demo.wb:3:3")

    def test_peek_past_end(self):
        """Peeking past the end returns a NUL character."""
        scanner = Scanner("")
        self.assertTrue(scanner.at_end())
        self.assertEqual(scanner.peek(), "\0")


if __name__ == '__main__':
    unittest.main()
