"""
Pre-process a variable description and solve it in one call.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from sweepopt.config import SolverConfig
from sweepopt.preprocessing import SelectionPredicate, accept_all, preprocess
from sweepopt.problem import OptimProblem
from sweepopt.results import SolutionSet
from sweepopt.solver import resolve_solver, solve
from sweepopt.variables import VariableSpec

_logger = logging.getLogger(__name__)


@dataclass
class OptimRun:
    """Everything produced by one named optimization run."""

    name: str
    solver_kind: str
    problem: OptimProblem
    n_var: int
    n_sweep: int
    solution: SolutionSet
    duration_s: float


def run_optim(
    name: str,
    variables: Iterable[Mapping[str, Any] | VariableSpec],
    solver_kind: str,
    solver_config: SolverConfig | Mapping[str, Any],
    *,
    n_max: int,
    selection_predicate: SelectionPredicate = accept_all,
) -> OptimRun:
    """Run the pre-processing and the solver, logging each phase and timing the whole run."""
    start = time.perf_counter()
    _logger.info("################## %s", name)

    resolve_solver(solver_kind)

    _logger.info("pre-processing")
    problem, n_var, n_sweep = preprocess(variables, n_max, selection_predicate)
    _logger.info("    n_var = %d", n_var)
    _logger.info("    n_sweep = %d", n_sweep)

    _logger.info("solver: %s", solver_kind)
    solution = solve(solver_kind, solver_config, problem)
    _logger.info("    n_sol = %d", solution.n_sol)
    _logger.info("    n_sim = %d", solution.n_sim)
    _logger.info("    has_converged = %s", solution.has_converged)

    duration = time.perf_counter() - start
    _logger.info("done (%.3f s)", duration)
    return OptimRun(
        name=name,
        solver_kind=solver_kind,
        problem=problem,
        n_var=n_var,
        n_sweep=n_sweep,
        solution=solution,
        duration_s=duration,
    )


__all__ = ["OptimRun", "run_optim"]
