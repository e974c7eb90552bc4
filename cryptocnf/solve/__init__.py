from cryptocnf.solve.solver import SatSolver, SolverConfig, SolveResult, available_solvers

__all__ = ["SatSolver", "SolverConfig", "SolveResult", "available_solvers"]
