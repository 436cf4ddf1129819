"""
Test suite for the WeeBasic interpreter.

Programs are assembled by hand so that every opcode, and every way the
machine can fail, is exercised independently of the parser.

Author: xwest
"""

import io
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from weebasic.config import Limits
from weebasic.lexer.errors import CapacityError
from weebasic.bytecode import Opcode, Instruction, Program, INT64_MAX, INT64_MIN
from weebasic.vm import Interpreter, AssertionFault, RuntimeFault, run_program

Insn = Instruction
Op = Opcode


def assemble(*instructions, num_locals=0):
    return Program(tuple(instructions), num_locals, "<test>")


class TestInterpreter(unittest.TestCase):
    """Test cases for bytecode execution."""

    def _run(self, program, stdin_text="", limits=None):
        """Helper to execute a program, returning (result, stdout text)."""
        out = io.StringIO()
        result = run_program(program, limits, stdin=io.StringIO(stdin_text), stdout=out)
        return result, out.getvalue()

    def _output(self, *instructions, num_locals=0):
        result, out = self._run(assemble(*instructions, num_locals=num_locals))
        self.assertFalse(result.has_errors(), f"Unexpected error: {result.error}")
        return out

    def test_print(self):
        self.assertEqual(self._output(Insn(Op.PUSH, 7), Insn(Op.PRINT)), "print: 7\n")

    def test_arithmetic_operand_order(self):
        """The right operand is on top of the stack."""
        self.assertEqual(self._output(Insn(Op.PUSH, 10), Insn(Op.PUSH, 3), Insn(Op.SUB), Insn(Op.PRINT)),
                         "print: 7\n")
        self.assertEqual(self._output(Insn(Op.PUSH, 10), Insn(Op.PUSH, 3), Insn(Op.ADD), Insn(Op.PRINT)),
                         "print: 13\n")

    def test_comparisons(self):
        self.assertEqual(self._output(Insn(Op.PUSH, 1), Insn(Op.PUSH, 2), Insn(Op.LT), Insn(Op.PRINT)),
                         "print: 1\n")
        self.assertEqual(self._output(Insn(Op.PUSH, 2), Insn(Op.PUSH, 1), Insn(Op.LT), Insn(Op.PRINT)),
                         "print: 0\n")
        self.assertEqual(self._output(Insn(Op.PUSH, 4), Insn(Op.PUSH, 4), Insn(Op.EQ), Insn(Op.PRINT)),
                         "print: 1\n")
        self.assertEqual(self._output(Insn(Op.PUSH, 4), Insn(Op.PUSH, 5), Insn(Op.EQ), Insn(Op.PRINT)),
                         "print: 0\n")

    def test_addition_wraps(self):
        out = self._output(Insn(Op.PUSH, INT64_MAX), Insn(Op.PUSH, 1), Insn(Op.ADD), Insn(Op.PRINT))
        self.assertEqual(out, f"print: {INT64_MIN}\n")

    def test_locals(self):
        out = self._output(
            Insn(Op.PUSH, 5), Insn(Op.SETLOCAL, 1), Insn(Op.GETLOCAL, 1), Insn(Op.PRINT),
            num_locals=2
        )
        self.assertEqual(out, "print: 5\n")

    def test_if_taken_skips(self):
        """A taken jump lands on index + 1 + offset."""
        out = self._output(
            Insn(Op.PUSH, 1), Insn(Op.IF, 1), Insn(Op.PUSH, 5), Insn(Op.PUSH, 6), Insn(Op.PRINT)
        )
        self.assertEqual(out, "print: 6\n")

    def test_if_not_taken(self):
        out = self._output(
            Insn(Op.PUSH, 0), Insn(Op.IF, 2), Insn(Op.PUSH, 5), Insn(Op.PRINT)
        )
        self.assertEqual(out, "print: 5\n")

    def test_ifnot(self):
        skipped = self._output(Insn(Op.PUSH, 0), Insn(Op.IFNOT, 2), Insn(Op.PUSH, 9), Insn(Op.PRINT))
        self.assertEqual(skipped, "")
        executed = self._output(Insn(Op.PUSH, 3), Insn(Op.IFNOT, 2), Insn(Op.PUSH, 9), Insn(Op.PRINT))
        self.assertEqual(executed, "print: 9\n")

    def test_exit(self):
        out = self._output(
            Insn(Op.PUSH, 1), Insn(Op.PRINT), Insn(Op.EXIT), Insn(Op.PUSH, 2), Insn(Op.PRINT)
        )
        self.assertEqual(out, "print: 1\n")

    def test_empty_program(self):
        result, out = self._run(assemble())
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.steps, 0)
        self.assertEqual(out, "")

    def test_jump_past_end_halts(self):
        out = self._output(Insn(Op.PUSH, 1), Insn(Op.IF, 100), Insn(Op.PUSH, 2), Insn(Op.PRINT))
        self.assertEqual(out, "")

    def test_read_int(self):
        result, out = self._run(assemble(Insn(Op.READINT), Insn(Op.PRINT)), stdin_text="42\n")
        self.assertEqual(out, "Input an integer value:\n> print: 42\n")

    def test_read_int_stops_at_first_non_digit(self):
        """The terminating character is consumed; the next read continues after it."""
        program = assemble(Insn(Op.READINT), Insn(Op.READINT), Insn(Op.SUB), Insn(Op.PRINT))
        result, out = self._run(program, stdin_text="42 7")
        self.assertTrue(out.endswith("print: 35\n"))
        self.assertEqual(out.count("Input an integer value:"), 2)

    def test_read_int_at_end_of_stream(self):
        result, out = self._run(assemble(Insn(Op.READINT), Insn(Op.PRINT)), stdin_text="")
        self.assertTrue(out.endswith("print: 0\n"))

    def test_error_opcode(self):
        result, out = self._run(assemble(Insn(Op.ERROR), Insn(Op.PUSH, 1), Insn(Op.PRINT)))
        self.assertIsInstance(result.error, AssertionFault)
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(result.error.message, "Run-time error")
        self.assertEqual(out, "")

    def test_run_raises(self):
        """run() raises; execute() reports."""
        interpreter = Interpreter(assemble(Insn(Op.ERROR)), stdout=io.StringIO())
        with self.assertRaises(AssertionFault) as ctx:
            interpreter.run()
        self.assertEqual(ctx.exception.pc, 0)

    def test_uninitialized_local(self):
        result, _ = self._run(assemble(Insn(Op.GETLOCAL, 0), Insn(Op.PRINT), num_locals=1))
        self.assertIsInstance(result.error, RuntimeFault)
        self.assertEqual(result.error.code, "R004")

    def test_slot_out_of_range(self):
        result, _ = self._run(assemble(Insn(Op.PUSH, 1), Insn(Op.SETLOCAL, 3), num_locals=1))
        self.assertEqual(result.error.code, "R005")

    def test_stack_underflow(self):
        result, _ = self._run(assemble(Insn(Op.ADD)))
        self.assertEqual(result.error.code, "R003")

    def test_unknown_opcode(self):
        result, _ = self._run(assemble(Insn("BOGUS")))
        self.assertIsInstance(result.error, RuntimeFault)
        self.assertEqual(result.error.code, "R002")

    def test_negative_jump_target(self):
        result, _ = self._run(assemble(Insn(Op.PUSH, 1), Insn(Op.IF, -5)))
        self.assertEqual(result.error.code, "R006")

    def test_stack_capacity(self):
        program = assemble(Insn(Op.PUSH, 1), Insn(Op.PUSH, 2), Insn(Op.PUSH, 3))
        result, _ = self._run(program, limits=Limits(max_stack=2))
        self.assertIsInstance(result.error, CapacityError)

    def test_locals_capacity(self):
        result, _ = self._run(assemble(num_locals=10), limits=Limits(max_locals=4))
        self.assertIsInstance(result.error, CapacityError)

    def test_step_count(self):
        result, _ = self._run(assemble(Insn(Op.PUSH, 1), Insn(Op.IFNOT, 5), Insn(Op.PUSH, 2), Insn(Op.PRINT)))
        self.assertEqual(result.steps, 4)


if __name__ == '__main__':
    unittest.main()
