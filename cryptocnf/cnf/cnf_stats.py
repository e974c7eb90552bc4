from typing import Dict, List, Union
import numpy as np
from pydantic import BaseModel
from cryptocnf.cnf.cnf_types import CnfDocument
from cryptocnf.cnf.formula import Formula

class FormulaStats(BaseModel):
    """Basic statistics for a CNF formula."""
    n_vars: int
    n_clauses: int
    clause_len: Dict[str, Union[int, float]]  # min, mean, max
    polarity_ratio: float
    var_occurrence: Dict[str, Union[int, float]]  # min, mean, max, gini
    clause_size_histogram: Dict[Union[int, str], int]  # keys 1..10 and "overflow"

def compute_gini(x: List[float]) -> float:
    """Computes the Gini coefficient of a list of values."""
    if not x or sum(x) == 0:
        return 0.0
    x = np.sort(np.asarray(x, dtype=float))
    n = len(x)
    index = np.arange(1, n + 1)
    return float(np.sum((2 * index - n - 1) * x) / (n * np.sum(x)))

def compute_formula_stats(formula: Union[Formula, CnfDocument]) -> FormulaStats:
    """
    Computes deterministic statistics of the resolved clauses of a formula.
    Variables declared but never used count as zero occurrences.
    """
    doc = formula.to_document() if isinstance(formula, Formula) else formula
    n_vars = doc.num_vars
    n_clauses = doc.num_clauses

    hist: Dict[Union[int, str], int] = {i: 0 for i in range(1, 11)}
    hist["overflow"] = 0

    if n_clauses == 0:
        return FormulaStats(
            n_vars=n_vars,
            n_clauses=0,
            clause_len={"min": 0, "mean": 0, "max": 0},
            polarity_ratio=0.5,
            var_occurrence={"min": 0, "mean": 0, "max": 0, "gini": 0.0},
            clause_size_histogram=hist,
        )

    clause_lens = np.array([len(c) for c in doc.clauses])
    literals = np.array([lit for c in doc.clauses for lit in c], dtype=np.int64)

    # Polarity ratio: fraction of positive literals
    polarity_ratio = float(np.mean(literals > 0)) if literals.size else 0.5

    counts = np.bincount(np.abs(literals), minlength=n_vars + 1)[1:]
    occurrences = counts.tolist()

    for length in clause_lens.tolist():
        if 1 <= length <= 10:
            hist[length] += 1
        elif length > 10:
            hist["overflow"] += 1

    return FormulaStats(
        n_vars=n_vars,
        n_clauses=n_clauses,
        clause_len={
            "min": int(clause_lens.min()),
            "mean": float(np.mean(clause_lens)),
            "max": int(clause_lens.max()),
        },
        polarity_ratio=polarity_ratio,
        var_occurrence={
            "min": min(occurrences) if occurrences else 0,
            "mean": float(np.mean(occurrences)) if occurrences else 0,
            "max": max(occurrences) if occurrences else 0,
            "gini": compute_gini(occurrences),
        },
        clause_size_histogram=hist,
    )
