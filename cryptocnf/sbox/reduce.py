import abc
from typing import List, Optional, Sequence, Tuple

from cryptocnf.core.logging import get_logger
from cryptocnf.sbox.template import TemplateRow

logger = get_logger("cryptocnf.sbox")

class RowReducer(abc.ABC):
    """Reduces a set of template rows to an equivalent, possibly smaller, one."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        pass

    @abc.abstractmethod
    def reduce(self, rows: Sequence[TemplateRow]) -> List[TemplateRow]:
        pass

class IdentityReducer(RowReducer):
    """Keeps the rows as they are."""

    @property
    def name(self) -> str:
        return "identity"

    def reduce(self, rows: Sequence[TemplateRow]) -> List[TemplateRow]:
        return list(rows)

def merge_rows(a: TemplateRow, b: TemplateRow) -> Optional[TemplateRow]:
    """
    Merges two rows with the same output whose patterns differ in exactly
    one position; that position becomes a don't-care. Returns None when the
    rows cannot be merged.
    """
    if a.output != b.output:
        return None
    diff = -1
    for k, (p, q) in enumerate(zip(a.pattern, b.pattern)):
        if p != q:
            if diff >= 0:
                return None
            diff = k
    if diff < 0:
        return None
    pattern = a.pattern[:diff] + (0,) + a.pattern[diff + 1:]
    return TemplateRow(pattern, a.output)

class GreedyMergeReducer(RowReducer):
    """
    Repeats merge passes until one of them merges nothing.

    A pass walks the rows in order; each row not yet merged in this pass is
    merged with every later unmerged row it differs from in one position.
    Merged rows are replaced by the results, which come first in the next
    pass, followed by the untouched rows. The outcome is a fixed point of
    this pass, not a minimal cover.
    """
    def __init__(self, max_passes: Optional[int] = None):
        self.max_passes = max_passes
        self.passes = 0

    @property
    def name(self) -> str:
        return "greedy_merge"

    def merge_pass(self, rows: Sequence[TemplateRow]) -> Tuple[List[TemplateRow], int]:
        """Runs a single pass. Returns the new rows and the number of merges."""
        merged: List[TemplateRow] = []
        treated = [False] * len(rows)
        for i in range(len(rows) - 1):
            if treated[i]:
                continue
            for j in range(i + 1, len(rows)):
                if treated[j]:
                    continue
                row = merge_rows(rows[i], rows[j])
                if row is not None:
                    treated[i] = True
                    treated[j] = True
                    merged.append(row)
        kept = [row for row, done in zip(rows, treated) if not done]
        return merged + kept, len(merged)

    def reduce(self, rows: Sequence[TemplateRow]) -> List[TemplateRow]:
        rows = list(rows)
        self.passes = 0
        while self.max_passes is None or self.passes < self.max_passes:
            before = len(rows)
            rows, merges = self.merge_pass(rows)
            self.passes += 1
            logger.debug(f"Merge pass {self.passes}: {before} -> {len(rows)} rows ({merges} merges)")
            if merges == 0:
                break
        return rows
