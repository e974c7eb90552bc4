from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from cryptocnf.core.errors import (
    CoordinateOutOfRangeError, CryptoCnfError, DuplicateNameError, EqualityCycleError,
    NoFamiliesDeclaredError, NotYetAssignedError, TooManyCoordinatesError,
    UnknownFamilyError, UnknownVariableError
)
from cryptocnf.core.logging import get_logger
from cryptocnf.core.types import UINT32_MAX, VariableFamily, require_literal
from cryptocnf.vars.assignment import parse_assignment

logger = get_logger("cryptocnf.vars")

class VariableAllocator:
    """
    Gives every boolean variable of a problem a dense positive code.

    Variables are grouped in named families, each one a multi-dimensional
    array. Suppose a problem uses x[i][j] with i in [0,6] and j in [0,2],
    then y[l][m][n] with l in [0,6] and m, n in [0,2]:

        v = VariableAllocator()
        v.declare_family("x", [7, 3])
        v.declare_family("y", [7, 3, 3])

    x receives the codes [1, 21] and y the codes [22, 84]. Code 0 is never
    handed out: it cannot be negated and it terminates DIMACS clauses.

    The allocator also records literals known to be equal so that a single
    code is serialized for all of them, and holds the solver's assignment
    once it has been decoded.
    """
    def __init__(self):
        self._families: Dict[str, VariableFamily] = {}
        self._size: int = 0
        self._anonymous_counter: int = 0
        self._equalities: Dict[int, int] = {}
        self._values: Optional[np.ndarray] = None

    # --- Declaring families ---

    @property
    def size(self) -> int:
        """Total number of declared variables."""
        return self._size

    @property
    def families(self) -> List[VariableFamily]:
        return list(self._families.values())

    @property
    def is_assigned(self) -> bool:
        return self._values is not None

    def declare_family(self, name: str, dimensions: Sequence[int]) -> VariableFamily:
        """
        Appends a family whose codes follow every previously declared one.
        If dimensions is [3, 5] the valid coordinates are [0,2]x[0,4].
        A previously decoded assignment does not cover the new codes and is
        dropped.
        """
        if name in self._families:
            raise DuplicateNameError(f"Variable family '{name}' is already declared")
        family = VariableFamily(name=name, dimensions=list(dimensions), base_offset=self._size)
        self._families[name] = family
        self._size += family.size
        if self._values is not None:
            logger.debug(f"Dropping the assignment of {len(self._values)} variables")
            self._values = None
        logger.debug(
            f"Declared family {name} dims={family.dimensions} "
            f"codes=[{family.base_offset + 1}, {self._size}]"
        )
        return family

    def declare_anonymous_family(self, dimensions: Sequence[int]) -> str:
        """Declares a family under a freshly generated name and returns it."""
        while True:
            self._anonymous_counter += 1
            name = f"__anon__{self._anonymous_counter}"
            if name not in self._families:
                break
        self.declare_family(name, dimensions)
        return name

    def _family(self, name: str) -> VariableFamily:
        try:
            return self._families[name]
        except KeyError:
            raise UnknownFamilyError(f"Variable family '{name}' is not declared") from None

    def dimension_bound(self, name: str, axis: int) -> int:
        """Returns the number of values the given axis of a family can take."""
        family = self._family(name)
        if axis >= len(family.dimensions):
            raise TooManyCoordinatesError(
                f"Family '{name}' has {len(family.dimensions)} dimensions, no axis {axis}"
            )
        return family.dimensions[axis]

    def describe(self) -> List[str]:
        """One line per family: name, declaration index and dimensions."""
        lines = []
        for index, family in enumerate(self._families.values()):
            dims = " ".join(str(d) for d in family.dimensions)
            lines.append(f"{family.name} {index} {{ {dims}}}")
        for line in lines:
            logger.debug(line)
        return lines

    # --- Accessing codes ---

    def code_of(self, name: str, coordinates: Sequence[int]) -> int:
        """
        Returns the code of the variable with the given family name and
        coordinates.
        """
        family = self._family(name)
        coordinates = list(coordinates)
        if len(coordinates) != len(family.dimensions):
            raise TooManyCoordinatesError(
                f"Family '{name}' expects {len(family.dimensions)} coordinates, "
                f"got {len(coordinates)}"
            )
        for i, (coord, dim) in enumerate(zip(coordinates, family.dimensions)):
            if coord < 0 or coord >= dim:
                raise CoordinateOutOfRangeError(
                    f"Coordinate {i} of '{name}' is out of range ({coord} >= {dim})"
                )
        return family.base_offset + family.flat_index(coordinates) + 1

    def vector(self, name: str, prefix: Sequence[int] = ()) -> List[int]:
        """Codes along the last axis of a family, for fixed leading coordinates."""
        family = self._family(name)
        prefix = list(prefix)
        if len(prefix) != len(family.dimensions) - 1:
            raise TooManyCoordinatesError(
                f"Family '{name}' expects {len(family.dimensions) - 1} leading "
                f"coordinates, got {len(prefix)}"
            )
        return [self.code_of(name, prefix + [i]) for i in range(family.dimensions[-1])]

    # --- Equalities ---

    def declare_equal(self, x: int, y: int) -> None:
        """
        Records that literals x and y always take the same value, so that a
        single code is used for both. No clause is produced.

        The roots of both literals are linked, the one with the larger
        absolute value pointing at the other, together with the mapping of
        their negations.
        """
        rx = self.resolve(x)
        ry = self.resolve(y)
        if rx == ry:
            return
        if rx == -ry:
            raise EqualityCycleError(f"Cannot declare {x} equal to {y}: they are opposite literals")
        if abs(rx) > abs(ry):
            src, dst = rx, ry
        else:
            src, dst = ry, rx
        self._equalities[src] = dst
        self._equalities[-src] = -dst
        logger.debug(f"Equality {x} == {y}: {src} -> {dst}")

    def declare_equal_all(self, pairs: Iterable[Tuple[int, int]]) -> None:
        """Declares several equalities; none is kept if one of them fails."""
        snapshot = self._equalities.copy()
        try:
            for x, y in pairs:
                self.declare_equal(x, y)
        except CryptoCnfError:
            self._equalities = snapshot
            raise

    def resolve(self, code: int) -> int:
        """
        Returns the literal actually used for code, following equalities to
        their fixed point.
        """
        lit = require_literal(code)
        seen = {lit}
        while lit in self._equalities:
            lit = self._equalities[lit]
            if lit in seen:
                raise EqualityCycleError(f"Equality chain starting at {code} loops through {lit}")
            seen.add(lit)
        return lit

    def resolve_var(self, name: str, coordinates: Sequence[int]) -> int:
        return self.resolve(self.code_of(name, coordinates))

    @property
    def equalities(self) -> Dict[int, int]:
        return self._equalities.copy()

    # --- Assignment ---

    def decode_assignment(self, raw: Sequence[int]) -> None:
        """
        Assigns every declared variable from the literals returned by a
        solver. A variable is true iff it appears positively in raw.
        Variables elided by equalities then take the value of the literal
        they resolve to.
        """
        if not self._families:
            raise NoFamiliesDeclaredError("Cannot decode an assignment without declared families")

        values = np.zeros(self._size, dtype=bool)
        skipped = 0
        for lit in raw:
            if lit == 0:
                break
            var = abs(lit)
            if var > self._size:
                skipped += 1
                continue
            values[var - 1] = lit > 0
        if skipped:
            logger.warning(f"Skipped {skipped} assignment literals beyond the {self._size} declared variables")

        # Roots have a smaller magnitude than the codes mapped onto them.
        for code in range(1, self._size + 1):
            target = self.resolve(code)
            if target == code:
                continue
            value = values[abs(target) - 1]
            values[code - 1] = value if target > 0 else not value

        self._values = values

    def _require_assigned(self) -> np.ndarray:
        if self._values is None:
            raise NotYetAssignedError("Variables have not been assigned yet")
        return self._values

    def literal_value(self, lit: int) -> bool:
        """Value of a literal under the decoded assignment."""
        values = self._require_assigned()
        lit = require_literal(lit)
        if abs(lit) > len(values):
            raise UnknownVariableError(
                f"Literal {lit} is beyond the {len(values)} assigned variables"
            )
        value = bool(values[abs(lit) - 1])
        return value if lit > 0 else not value

    def value_of(self, name: str, coordinates: Sequence[int]) -> bool:
        self._require_assigned()
        return self.literal_value(self.code_of(name, coordinates))

    def pack_little_endian(self, codes: Sequence[int]) -> int:
        """
        Packs the values of codes into an unsigned 32-bit integer, the
        first code giving the most significant retained bit.
        """
        self._require_assigned()
        res = 0
        for code in codes:
            res = (res << 1) & UINT32_MAX
            if self.literal_value(code):
                res |= 1
        return res

    def read_solution(self, text: str) -> bool:
        """
        Decodes a DIMACS assignment answer. Returns False, leaving any
        previous assignment in place, if the answer is not SAT.
        """
        if not self._families:
            raise NoFamiliesDeclaredError("Cannot decode an assignment without declared families")
        raw = parse_assignment(text)
        if raw is None:
            return False
        self.decode_assignment(raw)
        return True
