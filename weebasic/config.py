"""
Capacity configuration for the WeeBasic compiler and interpreter.

Every internal buffer has a fixed upper bound. The bounds are grouped in a
single frozen dataclass and handed to the scanner, symbol table, program
builder and interpreter when they are constructed. Going past any of them is
a fatal error; nothing is ever resized.

Author: xwest
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Limits:
    """Fixed capacities for one compile-and-run session."""
    max_instructions: int = 4096  # Instructions in a compiled program
    max_ident_len: int = 64       # Identifier buffer size (longest name is one less)
    max_locals: int = 256         # Local variable slots
    max_stack: int = 256          # Operand stack depth
    max_depth: int = 256          # Statement nesting (begin blocks and if bodies)

    def __post_init__(self):
        for name in ("max_instructions", "max_ident_len", "max_locals", "max_stack", "max_depth"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")


DEFAULT_LIMITS = Limits()
