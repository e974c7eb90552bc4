import time
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pysat.solvers import Solver, SolverNames

from cryptocnf.cnf.formula import Formula
from cryptocnf.core.config import DEFAULT_SOLVER, CnfConfig
from cryptocnf.core.errors import SolverError
from cryptocnf.core.logging import get_logger
from cryptocnf.vars.assignment import format_assignment

logger = get_logger("cryptocnf.solve")

def available_solvers() -> List[str]:
    """All solver names python-sat accepts."""
    names = set()
    for attr, aliases in vars(SolverNames).items():
        if not attr.startswith("_") and isinstance(aliases, tuple):
            names.update(aliases)
    return sorted(names)

class SolverConfig(BaseModel):
    """Configuration of the SAT solver collaborator."""
    solver_name: str = DEFAULT_SOLVER

    @classmethod
    def from_config(cls, config: Optional[CnfConfig] = None) -> 'SolverConfig':
        config = config or CnfConfig.from_env_or_file()
        return cls(solver_name=config.solver)

class SolveResult(BaseModel):
    """Outcome of one solver call."""
    is_satisfiable: bool
    model: Optional[List[int]] = None
    stats: Dict[str, Any] = Field(default_factory=dict)

class SatSolver:
    """
    Solves formulas with a python-sat backend and writes the assignment back
    into the formula's VariableAllocator.
    """
    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig.from_config()
        if self.config.solver_name not in available_solvers():
            raise SolverError(f"Unknown solver '{self.config.solver_name}'")
        self.last_result: Optional[SolveResult] = None

    def _run(self, clauses: List[List[int]]) -> SolveResult:
        start_time = time.time()
        try:
            with Solver(name=self.config.solver_name, bootstrap_with=clauses) as solver:
                is_sat = solver.solve()
                model = solver.get_model() if is_sat else None
        except Exception as e:
            raise SolverError(f"Solver '{self.config.solver_name}' failed: {e}") from e
        return SolveResult(
            is_satisfiable=bool(is_sat),
            model=list(model) if model is not None else None,
            stats={"duration": time.time() - start_time},
        )

    def solve(self, formula: Formula) -> bool:
        """
        Returns True and assigns the allocator's variables if formula is
        satisfiable; returns False otherwise, leaving them untouched.
        """
        doc = formula.to_document()
        logger.debug(f"Solving {doc.num_clauses} clauses over {doc.num_vars} variables with {self.config.solver_name}")
        result = self._run(doc.clauses)
        result.stats.update({"n_vars": doc.num_vars, "n_clauses": doc.num_clauses})
        self.last_result = result

        logger.info(
            f"{'SAT' if result.is_satisfiable else 'UNSAT'}: {doc.num_vars} variables, "
            f"{doc.num_clauses} clauses, {result.stats['duration']:.3f}s"
        )
        if result.is_satisfiable:
            formula.allocator.decode_assignment(result.model or [])
        return result.is_satisfiable

    def solve_dimacs(self, formula: Formula) -> str:
        """
        Solves formula and returns the answer as DIMACS assignment text,
        as an external solver process would write it.
        """
        result = self._run(formula.resolved_clauses())
        self.last_result = result
        if not result.is_satisfiable:
            return format_assignment(None)
        return format_assignment(result.model or [])
