"""
Compiled WeeBasic programs.

The parser appends instructions to a ProgramBuilder as it recognises each
construct and back-patches forward jumps once their target is known. When
the whole source has been consumed the builder is frozen into a Program,
which the interpreter then reads without ever changing it.

Author: xwest
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple

from ..config import Limits, DEFAULT_LIMITS
from ..lexer.tokens import SourceLocation
from ..lexer.errors import create_capacity_error
from .opcodes import Opcode, Instruction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Program:
    """An immutable, ordered sequence of instructions."""
    instructions: Tuple[Instruction, ...]
    num_locals: int = 0
    source_name: str = "<string>"

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def disassemble(self) -> str:
        """Human-readable listing, one instruction per line."""
        lines = []
        for index, insn in enumerate(self.instructions):
            line = f"{index:04d}  {insn}"
            if insn.opcode.is_jump:
                line += f"  -> {index + 1 + insn.immediate:04d}"
            lines.append(line)
        return "\n".join(lines)

    def __str__(self) -> str:
        header = f"; {self.source_name}: {len(self)} instructions, {self.num_locals} locals"
        if not self.instructions:
            return header
        return header + "\n" + self.disassemble()


class ProgramBuilder:
    """
    Mutable instruction store owned by the parser.

    Holds at most `limits.max_instructions` instructions.
    """

    def __init__(self, limits: Optional[Limits] = None):
        self.limits = limits or DEFAULT_LIMITS
        self._instructions: List[Instruction] = []
        self._finished = False

    def __len__(self) -> int:
        return len(self._instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self._instructions[index]

    def emit(self, opcode: Opcode, immediate: int = 0,
             location: Optional[SourceLocation] = None) -> int:
        """
        Append an instruction.

        Returns:
            Index of the new instruction

        Raises:
            CapacityError: If the program is already full
        """
        if self._finished:
            raise RuntimeError("cannot emit into a finished program")

        if len(self._instructions) >= self.limits.max_instructions:
            raise create_capacity_error("instructions", self.limits.max_instructions, location)

        self._instructions.append(Instruction(opcode, immediate))
        return len(self._instructions) - 1

    def patch_jump(self, index: int):
        """Point the jump at `index` at the next instruction to be emitted."""
        insn = self._instructions[index]
        if not insn.opcode.is_jump:
            raise ValueError(f"instruction {index} ({insn}) is not a jump")

        offset = len(self._instructions) - index - 1
        self._instructions[index] = replace(insn, immediate=offset)

    def finish(self, num_locals: int = 0, source_name: str = "<string>") -> Program:
        """Freeze the instructions into a Program."""
        self._finished = True
        program = Program(tuple(self._instructions), num_locals, source_name)
        logger.debug("built %s: %d instructions, %d locals",
                     source_name, len(program), num_locals)
        return program
