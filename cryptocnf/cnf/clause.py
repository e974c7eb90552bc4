from typing import Iterator, List, Optional
from pydantic import Field, RootModel
from cryptocnf.core.types import Lit, require_literal

class Clause(RootModel):
    """
    A disjunction of literals. A literal is the code of a variable, or its
    opposite for the negation of that variable.

    Literals keep their insertion order; duplicates and tautologies are kept
    as given.
    """
    root: List[Lit] = Field(default_factory=list)

    def append(self, lit: int) -> None:
        """Adds a new literal at the end of the clause."""
        self.root.append(require_literal(lit))

    def index_of(self, code: int) -> Optional[int]:
        """
        Position of the first literal on the same variable as code, whatever
        its sign, or None if the variable does not occur.
        """
        var = abs(code)
        for i, lit in enumerate(self.root):
            if abs(lit) == var:
                return i
        return None

    def __len__(self) -> int:
        return len(self.root)

    def __iter__(self) -> Iterator[int]:
        return iter(self.root)

    def __getitem__(self, i: int) -> int:
        return self.root[i]

    def __eq__(self, other) -> bool:
        if isinstance(other, Clause):
            return self.root == other.root
        if isinstance(other, (list, tuple)):
            return self.root == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Clause({self.root!r})"
