from typing import List, NamedTuple, Sequence, Tuple

class TemplateRow(NamedTuple):
    """
    One parameterized clause of an S-box CNF template.

    pattern[i] is +1 or -1 for the sign input bit i takes in the clause, 0
    when the bit does not appear. output is +k or -k: output bit k-1 appears
    with that sign.
    """
    pattern: Tuple[int, ...]
    output: int

    def literal_count(self) -> int:
        return sum(1 for p in self.pattern if p != 0) + 1

def bit_msb_first(value: int, width: int, i: int) -> int:
    """Bit i of value, bit 0 being the most significant of width bits."""
    return (value >> (width - i - 1)) & 1

def naive_template(n_inputs: int, n_outputs: int, table: Sequence[int]) -> List[TemplateRow]:
    """
    One row per input value x and output bit k, reading

        (input != x) or (output bit k == bit k of table[x])

    so the input literals are the negations of the bits of x. Input and
    output bits are both numbered from the most significant one.
    """
    rows = []
    for x in range(1 << n_inputs):
        pattern = tuple(
            -1 if bit_msb_first(x, n_inputs, i) else 1
            for i in range(n_inputs)
        )
        y = table[x]
        for k in range(n_outputs):
            output = k + 1 if bit_msb_first(y, n_outputs, k) else -(k + 1)
            rows.append(TemplateRow(pattern, output))
    return rows

def row_holds(row: TemplateRow, inputs: Sequence[bool], outputs: Sequence[bool]) -> bool:
    """Evaluates the clause of a row under concrete input and output bits."""
    for p, bit in zip(row.pattern, inputs):
        if (p > 0 and bit) or (p < 0 and not bit):
            return True
    out = outputs[abs(row.output) - 1]
    return out if row.output > 0 else not out
