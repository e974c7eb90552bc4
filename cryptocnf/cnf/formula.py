from typing import Iterable, Iterator, List, Optional, Sequence, Union

from cryptocnf.cnf.clause import Clause
from cryptocnf.cnf.cnf_types import CnfDocument
from cryptocnf.core.config import CnfConfig
from cryptocnf.core.errors import LengthMismatchError, ValueOutOfRangeError
from cryptocnf.core.logging import get_logger
from cryptocnf.core.types import UINT32_MAX, negate, require_literal
from cryptocnf.vars.allocator import VariableAllocator

logger = get_logger("cryptocnf.cnf")

ClauseLike = Union[Clause, Iterable[int]]

def _as_clause(c: ClauseLike) -> Clause:
    if isinstance(c, Clause):
        return Clause(list(c.root))
    return Clause([require_literal(lit) for lit in c])

def _check_uint32(value: int, what: str) -> None:
    if not 0 <= value <= UINT32_MAX:
        raise ValueOutOfRangeError(f"{what} must fit in 32 unsigned bits, got {value}")

class Formula:
    """
    A CNF formula: the conjunction of an ordered list of clauses, all built
    on the codes of one VariableAllocator.

    The allocator is only read when the formula is serialized, to replace
    every literal by the one it was declared equal to. Clauses are copied
    on the way in and on the way out.

    config defaults to CnfConfig.from_env_or_file(), read once here.
    """
    def __init__(self, allocator: VariableAllocator, config: Optional[CnfConfig] = None):
        self.allocator = allocator
        self.config = config if config is not None else CnfConfig.from_env_or_file()
        self._clauses: List[Clause] = []

    @property
    def clauses(self) -> List[Clause]:
        return [Clause(list(c.root)) for c in self._clauses]

    def __len__(self) -> int:
        return len(self._clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    # --- Raw clauses ---

    def append_clause(self, c: ClauseLike) -> None:
        """Adds the given clause at the end of the formula."""
        self._clauses.append(_as_clause(c))

    def append_clauses(self, cs: Iterable[ClauseLike]) -> None:
        """Adds the given clauses at the end of the formula, in order."""
        new_clauses = [_as_clause(c) for c in cs]
        self._clauses.extend(new_clauses)

    # --- Constraint builders ---

    def assert_equal(self, x: int, y: int) -> None:
        """
        Makes x and y share a single code through the allocator. Nothing is
        added to this formula; use assert_equal_clauses for an equality the
        solver sees.
        """
        self.allocator.declare_equal(x, y)

    def assert_equal_clauses(self, x: int, y: int) -> None:
        """Adds (x or not y) and (not x or y)."""
        self.append_clauses([
            Clause([x, negate(y)]),
            Clause([negate(x), y]),
        ])

    def assert_xor3(self, a: int, b: int, c: int) -> None:
        """
        Adds the clauses stating that a xor b xor c is 0, true being 1:

            (not a or b or c) and (a or not b or c)
            and (a or b or not c) and (not a or not b or not c)
        """
        self.append_clauses([
            Clause([negate(a), b, c]),
            Clause([a, negate(b), c]),
            Clause([a, b, negate(c)]),
            Clause([negate(a), negate(b), negate(c)]),
        ])

    def assign_integer(self, bits: Sequence[int], value: int) -> None:
        """
        Adds unit clauses fixing bits to the binary expansion of value, the
        first element of bits being the most significant one.
        """
        _check_uint32(value, "value")
        bits = [require_literal(b) for b in bits]
        n = len(bits)
        units = []
        for i in range(n):
            lit = bits[n - i - 1]
            units.append(Clause([lit]) if (value >> i) & 1 else Clause([-lit]))
        self._clauses.extend(units)

    def assert_xor_with_constant(self, bits1: Sequence[int], bits2: Sequence[int], constant: int) -> None:
        """
        States that bits1 xor bits2, member by member, is the binary
        expansion of constant (most significant bit first). Each position
        becomes an equality, with bits2[i] negated where constant has a 1.
        """
        if len(bits1) != len(bits2):
            raise LengthMismatchError(
                f"Literal vectors must have the same length ({len(bits1)} != {len(bits2)})"
            )
        _check_uint32(constant, "constant")
        n = len(bits1)
        pairs = []
        for i in range(n):
            if (constant >> (n - i - 1)) & 1:
                pairs.append((bits1[i], negate(bits2[i])))
            else:
                pairs.append((require_literal(bits1[i]), require_literal(bits2[i])))
        self.allocator.declare_equal_all(pairs)

    # --- Serialization ---

    def resolved_clauses(self) -> List[List[int]]:
        resolve = self.allocator.resolve
        return [[resolve(lit) for lit in clause] for clause in self._clauses]

    def to_dimacs(self, variable_count: Optional[int] = None, header: Optional[bool] = None) -> str:
        """
        DIMACS text of the formula: one line per clause, each literal
        replaced by its resolution through the allocator, ended by 0.

        The "p cnf <variables> <clauses>" line is only written when header
        is set, since common solvers (minisat, glucose) do not need it.
        When header is None the formula's config decides.
        """
        if header is None:
            header = self.config.dimacs_header
        if variable_count is None:
            variable_count = self.allocator.size
        lines = []
        if header:
            lines.append(f"p cnf {variable_count} {len(self._clauses)}\n")
        for clause in self.resolved_clauses():
            lines.append("".join(f"{lit} " for lit in clause) + "0\n")
        logger.debug(f"Serialized {len(self._clauses)} clauses over {variable_count} variables")
        return "".join(lines)

    def to_document(self) -> CnfDocument:
        """A validated CnfDocument of the resolved clauses."""
        clauses = self.resolved_clauses()
        largest = max((abs(lit) for c in clauses for lit in c), default=0)
        return CnfDocument(num_vars=max(self.allocator.size, largest), clauses=clauses)

    def to_pysat(self):
        return self.to_document().to_pysat()
