from cryptocnf.cnf.clause import Clause
from cryptocnf.cnf.cnf_types import CnfDocument
from cryptocnf.cnf.formula import Formula
from cryptocnf.cnf.cnf_stats import FormulaStats, compute_formula_stats

__all__ = ["Clause", "Formula", "CnfDocument", "FormulaStats", "compute_formula_stats"]
