"""
Local variable table for WeeBasic compilation.

WeeBasic has one flat namespace for the whole program. Each `let` pushes a
declaration onto a singly linked chain and is given the next slot index.
`begin ... end` blocks do not open a scope, nothing is ever popped, and no
slot is reused, so a name declared inside a nested block stays visible for
the rest of the program.

The table only exists while parsing; the compiled program keeps just the
number of slots.

Author: xwest
"""

from typing import Iterator, List, Optional
from dataclasses import dataclass

from ..config import Limits, DEFAULT_LIMITS
from ..lexer.tokens import SourceLocation
from ..lexer.errors import create_capacity_error
from .errors import create_undeclared_variable_error, create_already_declared_error


@dataclass(frozen=True)
class LocalDeclaration:
    """A declared local variable and the declaration made before it."""
    name: str
    slot: int
    previous: Optional['LocalDeclaration'] = None
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        return f"{self.name}@{self.slot}"


class SymbolTable:
    """
    Chain of local declarations, most recent first.

    Provides slot allocation and name resolution for the parser.
    """

    def __init__(self, limits: Optional[Limits] = None):
        self.limits = limits or DEFAULT_LIMITS
        self.head: Optional[LocalDeclaration] = None

    def __iter__(self) -> Iterator[LocalDeclaration]:
        decl = self.head
        while decl is not None:
            yield decl
            decl = decl.previous

    def __len__(self) -> int:
        return self.num_locals

    @property
    def num_locals(self) -> int:
        """Number of slots allocated so far."""
        return self.head.slot + 1 if self.head else 0

    def lookup(self, name: str) -> Optional[LocalDeclaration]:
        """Find the most recent declaration of `name`, or None."""
        for decl in self:
            if decl.name == name:
                return decl
        return None

    def resolve(self, name: str, location: SourceLocation) -> LocalDeclaration:
        """Look up a declaration and raise error if not found."""
        decl = self.lookup(name)

        if decl is None:
            raise create_undeclared_variable_error(
                name, location, similar_names=self.get_similar_names(name)
            )

        return decl

    def declare(self, name: str, location: Optional[SourceLocation] = None) -> LocalDeclaration:
        """
        Declare a new local variable in the next free slot.

        Raises:
            SymbolError: If the name is already declared
            CapacityError: If every slot is taken
        """
        existing = self.lookup(name)
        if existing is not None:
            raise create_already_declared_error(name, location, existing.location)

        slot = self.num_locals
        if slot >= self.limits.max_locals:
            raise create_capacity_error("local variables", self.limits.max_locals, location)

        self.head = LocalDeclaration(name, slot, self.head, location)
        return self.head

    def get_similar_names(self, name: str, max_distance: int = 2) -> List[str]:
        """Get declared names similar to the given name (for error suggestions)."""
        def levenshtein_distance(s1: str, s2: str) -> int:
            """Calculate edit distance between two strings."""
            if len(s1) < len(s2):
                return levenshtein_distance(s2, s1)

            if len(s2) == 0:
                return len(s1)

            previous_row = list(range(len(s2) + 1))
            for i, c1 in enumerate(s1):
                current_row = [i + 1]
                for j, c2 in enumerate(s2):
                    insertions = previous_row[j + 1] + 1
                    deletions = current_row[j] + 1
                    substitutions = previous_row[j] + (c1 != c2)
                    current_row.append(min(insertions, deletions, substitutions))
                previous_row = current_row

            return previous_row[-1]

        similar_names = []
        for decl in self:
            distance = levenshtein_distance(name, decl.name)
            if distance <= max_distance:
                similar_names.append((decl.name, distance))

        # Sort by distance and return names only
        similar_names.sort(key=lambda x: x[1])
        return [other for other, _ in similar_names[:5]]

    def __str__(self) -> str:
        names = ", ".join(str(decl) for decl in self)
        return f"SymbolTable([{names}])"
