from typing import List, Optional, Sequence, Tuple

from cryptocnf.cnf.clause import Clause
from cryptocnf.cnf.formula import Formula
from cryptocnf.core.errors import ArityMismatchError, SizeMismatchError
from cryptocnf.core.logging import get_logger
from cryptocnf.core.types import require_literal
from cryptocnf.sbox.reduce import GreedyMergeReducer, RowReducer
from cryptocnf.sbox.template import TemplateRow, naive_template

logger = get_logger("cryptocnf.sbox")

class SboxCompiler:
    """
    Turns an S-box lookup table into CNF clauses stating that some output
    bits are the image of some input bits.

    The table maps [0, 2^n_inputs) to [0, 2^n_outputs). A template of
    clauses over abstract input and output positions is built once, from
    the truth table then reduced, and instantiated for any number of
    concrete literal vectors. Building it costs m * 2^n rows before
    reduction, so large S-boxes are out of reach.
    """
    def __init__(self, n_inputs: int, n_outputs: int, table: Sequence[int],
                 reducer: Optional[RowReducer] = None):
        if n_inputs < 0 or n_outputs < 0:
            raise SizeMismatchError("Bit widths must be non-negative")
        table = [int(v) for v in table]
        if len(table) != 1 << n_inputs:
            raise SizeMismatchError(
                f"Lookup table has {len(table)} entries, expected 2^{n_inputs} = {1 << n_inputs}"
            )
        for x, y in enumerate(table):
            if not 0 <= y < 1 << n_outputs:
                raise SizeMismatchError(
                    f"Lookup table entry {x} -> {y} does not fit in {n_outputs} bits"
                )

        self.n_inputs = n_inputs
        self.n_outputs = n_outputs
        self._table: Tuple[int, ...] = tuple(table)
        self.reducer = reducer if reducer is not None else GreedyMergeReducer()

        naive = naive_template(n_inputs, n_outputs, self._table)
        self.naive_row_count = len(naive)
        self._template: Tuple[TemplateRow, ...] = tuple(self.reducer.reduce(naive))
        self.passes = getattr(self.reducer, "passes", 0)
        logger.info(
            f"S-box {n_inputs}x{n_outputs}: {self.naive_row_count} naive rows reduced to "
            f"{len(self._template)} by {self.reducer.name} ({self.passes} passes)"
        )

    @property
    def table(self) -> Tuple[int, ...]:
        return self._table

    @property
    def template(self) -> Tuple[TemplateRow, ...]:
        return self._template

    def lookup(self, x: int) -> int:
        return self._table[x]

    def __len__(self) -> int:
        return len(self._template)

    def clauses_image(self, input_literals: Sequence[int], output_literals: Sequence[int]) -> List[Clause]:
        """The template instantiated for the given literal vectors."""
        if len(input_literals) != self.n_inputs:
            raise ArityMismatchError(
                f"Expected {self.n_inputs} input literals, got {len(input_literals)}"
            )
        if len(output_literals) != self.n_outputs:
            raise ArityMismatchError(
                f"Expected {self.n_outputs} output literals, got {len(output_literals)}"
            )
        ins = [require_literal(lit) for lit in input_literals]
        outs = [require_literal(lit) for lit in output_literals]

        clauses = []
        for row in self._template:
            c = Clause()
            for lit, sign in zip(ins, row.pattern):
                if sign != 0:
                    c.append(lit * sign)
            out = outs[abs(row.output) - 1]
            c.append(out if row.output > 0 else -out)
            clauses.append(c)
        return clauses

    def add_clauses_image(self, formula: Formula, input_literals: Sequence[int],
                          output_literals: Sequence[int]) -> None:
        """
        Adds to formula the clauses stating that output_literals is the image
        of input_literals by this S-box. Both vectors are read most
        significant bit first.
        """
        formula.append_clauses(self.clauses_image(input_literals, output_literals))
