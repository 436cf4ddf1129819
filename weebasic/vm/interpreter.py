"""
WeeBasic stack machine.

Executes a compiled Program with an operand stack and a locals array,
both bounded by the configured Limits. The program counter advances by
one after every instruction; a taken IF/IFNOT adds its offset on top of
that. Running past the last instruction halts the program like EXIT.

Author: xwest
"""

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TextIO

from ..config import Limits, DEFAULT_LIMITS
from ..lexer.tokens import DIGITS
from ..lexer.errors import WeeBasicError, create_capacity_error
from ..bytecode.opcodes import Opcode, Instruction
from ..bytecode.program import Program
from ..bytecode.values import Value, UNDEFINED
from .errors import (
    create_assertion_error, create_unknown_instruction_error,
    create_stack_underflow_error, create_uninitialized_local_error,
    create_bad_slot_error, create_bad_jump_error
)

logger = logging.getLogger(__name__)

READ_PROMPT = "Input an integer value:\n> "
PRINT_LABEL = "print: "


@dataclass
class ExecutionResult:
    """Outcome of running a program."""
    error: Optional[WeeBasicError] = None
    steps: int = 0

    def has_errors(self) -> bool:
        return self.error is not None

    @property
    def exit_code(self) -> int:
        return 1 if self.error is not None else 0


class Interpreter:
    """
    Bytecode interpreter for WeeBasic programs.

    Console streams default to sys.stdin / sys.stdout, looked up when the
    program runs.
    """

    def __init__(
        self,
        program: Program,
        limits: Optional[Limits] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None
    ):
        self.program = program
        self.limits = limits or DEFAULT_LIMITS
        self.stdin = stdin
        self.stdout = stdout

        self.locals: List[Value] = []
        self.stack: List[Value] = []
        self.pc = 0
        self.steps = 0
        self.halted = False
        self._in: Optional[TextIO] = None
        self._out: Optional[TextIO] = None

        self._init_dispatch_table()

    def _init_dispatch_table(self):
        """Map each opcode to its handler. Handlers return a jump offset or None."""
        self.handlers: Dict[Opcode, Callable[[Instruction], Optional[int]]] = {
            Opcode.EXIT: self._op_exit,
            Opcode.ERROR: self._op_error,
            Opcode.PUSH: self._op_push,
            Opcode.GETLOCAL: self._op_getlocal,
            Opcode.SETLOCAL: self._op_setlocal,
            Opcode.ADD: self._op_add,
            Opcode.SUB: self._op_sub,
            Opcode.EQ: self._op_eq,
            Opcode.LT: self._op_lt,
            Opcode.IF: self._op_if,
            Opcode.IFNOT: self._op_ifnot,
            Opcode.READINT: self._op_readint,
            Opcode.PRINT: self._op_print,
        }

    def run(self):
        """
        Execute the program until it halts.

        Raises:
            VMError: On a failed assertion or malformed bytecode
            CapacityError: If the program needs more locals or stack than allowed
        """
        if self.program.num_locals > self.limits.max_locals:
            raise create_capacity_error("local variables", self.limits.max_locals)

        self.locals = [UNDEFINED] * self.program.num_locals
        self.stack = []
        self.pc = 0
        self.steps = 0
        self.halted = False

        stdin = self.stdin if self.stdin is not None else sys.stdin
        stdout = self.stdout if self.stdout is not None else sys.stdout
        self._in, self._out = stdin, stdout

        trace = logger.isEnabledFor(logging.DEBUG)

        try:
            while not self.halted and self.pc < len(self.program):
                insn = self.program[self.pc]
                handler = self.handlers.get(insn.opcode)
                if handler is None:
                    raise create_unknown_instruction_error(insn.opcode, self.pc)

                if trace:
                    logger.debug("%04d  %-12s stack=[%s]", self.pc, insn,
                                 ", ".join(str(v) for v in self.stack))

                offset = handler(insn)
                self.steps += 1

                if self.halted:
                    break

                target = self.pc + 1 + (offset or 0)
                if target < 0:
                    raise create_bad_jump_error(target, self.pc)
                self.pc = target
        finally:
            stdout.flush()

        logger.debug("halted after %d steps at pc=%d", self.steps, self.pc)

    def execute(self) -> ExecutionResult:
        """Run the program, reporting failure in the result instead of raising."""
        try:
            self.run()
        except WeeBasicError as e:
            logger.debug("run-time failure: %s", e.message)
            return ExecutionResult(e, self.steps)
        return ExecutionResult(None, self.steps)

    # ========================================================================
    # Stack helpers
    # ========================================================================

    def _push(self, value: Value):
        if len(self.stack) >= self.limits.max_stack:
            raise create_capacity_error("values on the operand stack", self.limits.max_stack)
        self.stack.append(value)

    def _pop(self) -> Value:
        if not self.stack:
            raise create_stack_underflow_error(self.pc)
        return self.stack.pop()

    def _pop_int(self) -> int:
        return self._pop().as_int()

    def _check_slot(self, slot: int):
        if not 0 <= slot < len(self.locals):
            raise create_bad_slot_error(slot, len(self.locals), self.pc)

    # ========================================================================
    # Opcode handlers
    # ========================================================================

    def _op_exit(self, insn: Instruction) -> None:
        self.halted = True

    def _op_error(self, insn: Instruction) -> None:
        raise create_assertion_error(self.pc)

    def _op_push(self, insn: Instruction) -> None:
        self._push(Value.integer(insn.immediate))

    def _op_getlocal(self, insn: Instruction) -> None:
        self._check_slot(insn.immediate)
        value = self.locals[insn.immediate]
        if not value.is_int():
            raise create_uninitialized_local_error(insn.immediate, self.pc)
        self._push(value)

    def _op_setlocal(self, insn: Instruction) -> None:
        self._check_slot(insn.immediate)
        self.locals[insn.immediate] = self._pop()

    def _op_add(self, insn: Instruction) -> None:
        right = self._pop_int()
        left = self._pop_int()
        self._push(Value.integer(left + right))

    def _op_sub(self, insn: Instruction) -> None:
        right = self._pop_int()
        left = self._pop_int()
        self._push(Value.integer(left - right))

    def _op_eq(self, insn: Instruction) -> None:
        right = self._pop_int()
        left = self._pop_int()
        self._push(Value.boolean(left == right))

    def _op_lt(self, insn: Instruction) -> None:
        right = self._pop_int()
        left = self._pop_int()
        self._push(Value.boolean(left < right))

    def _op_if(self, insn: Instruction) -> Optional[int]:
        if self._pop_int() != 0:
            return insn.immediate
        return None

    def _op_ifnot(self, insn: Instruction) -> Optional[int]:
        if self._pop_int() == 0:
            return insn.immediate
        return None

    def _op_readint(self, insn: Instruction) -> None:
        self._out.write(READ_PROMPT)
        self._out.flush()

        value = 0
        while True:
            char = self._in.read(1)
            if not char or char not in DIGITS:
                break
            value = 10 * value + int(char)

        self._push(Value.integer(value))

    def _op_print(self, insn: Instruction) -> None:
        value = self._pop()
        self._out.write(f"{PRINT_LABEL}{value}\n")


def run_program(
    program: Program,
    limits: Optional[Limits] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None
) -> ExecutionResult:
    """
    Convenience function to execute a compiled program.

    Returns:
        ExecutionResult with the error that stopped the program, if any
    """
    return Interpreter(program, limits, stdin, stdout).execute()
