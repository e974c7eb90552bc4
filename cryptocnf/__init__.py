"""
cryptocnf: building crypto-oriented CNF formulas.

Variables are allocated by family in a VariableAllocator, constraints are
collected in Formulas (with S-box images produced by SboxCompiler), and a
solver's assignment is decoded back into the allocator.
"""
from cryptocnf.core.errors import CryptoCnfError
from cryptocnf.vars import VariableAllocator, parse_assignment
from cryptocnf.cnf import Clause, Formula, CnfDocument, compute_formula_stats
from cryptocnf.sbox import SboxCompiler, GreedyMergeReducer, IdentityReducer, RowReducer
from cryptocnf.solve import SatSolver, SolverConfig

__all__ = [
    "CryptoCnfError",
    "VariableAllocator", "parse_assignment",
    "Clause", "Formula", "CnfDocument", "compute_formula_stats",
    "SboxCompiler", "GreedyMergeReducer", "IdentityReducer", "RowReducer",
    "SatSolver", "SolverConfig"
]
