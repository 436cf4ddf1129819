"""
Run-time error handling for the WeeBasic interpreter.

Author: xwest
"""

from typing import Optional

from ..lexer.errors import WeeBasicError


class VMError(WeeBasicError):
    """
    Exception raised when a running program has to stop with an error.

    Records the index of the instruction being executed.
    """

    def __init__(
        self,
        message: str,
        pc: Optional[int] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message, None, code, help_text)
        self.pc = pc

    def __str__(self) -> str:
        result = str(self.diagnostic)
        if self.pc is not None:
            result += f"  at instruction {self.pc:04d}\n"
        return result


class AssertionFault(VMError):
    """An `assert` whose test evaluated to zero."""


class RuntimeFault(VMError):
    """Malformed bytecode or interpreter state."""


ERROR_CODES = {
    "R001": "Run-time error (assertion failed)",
    "R002": "Unknown bytecode instruction",
    "R003": "Operand stack underflow",
    "R004": "Read of uninitialized local variable",
    "R005": "Local slot out of range",
    "R006": "Jump target out of range",
}


def create_assertion_error(pc: int) -> AssertionFault:
    return AssertionFault(
        message="Run-time error",
        pc=pc,
        code="R001",
        help_text="An assert statement evaluated to 0."
    )


def create_unknown_instruction_error(opcode: object, pc: int) -> RuntimeFault:
    return RuntimeFault(
        message="unknown bytecode instruction",
        pc=pc,
        code="R002",
        help_text=f"No handler for opcode {opcode!r}."
    )


def create_stack_underflow_error(pc: int) -> RuntimeFault:
    return RuntimeFault(message="operand stack underflow", pc=pc, code="R003")


def create_uninitialized_local_error(slot: int, pc: int) -> RuntimeFault:
    return RuntimeFault(
        message=f"read of uninitialized local variable (slot {slot})",
        pc=pc,
        code="R004"
    )


def create_bad_slot_error(slot: int, num_locals: int, pc: int) -> RuntimeFault:
    return RuntimeFault(
        message=f"local slot {slot} out of range",
        pc=pc,
        code="R005",
        help_text=f"The program declares {num_locals} local variables."
    )


def create_bad_jump_error(target: int, pc: int) -> RuntimeFault:
    return RuntimeFault(message=f"jump target {target} out of range", pc=pc, code="R006")
