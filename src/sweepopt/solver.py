"""
Solver dispatch: one entry point for every solver kind, one result shape.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from sweepopt.config import SolverConfig
from sweepopt.drivers import SOLVER_DRIVERS, SolverDriver
from sweepopt.evaluation import ObjectiveAdapter, evaluate_points
from sweepopt.exceptions import InvalidSolverError, ValidationError
from sweepopt.observer import LoggingProgressObserver
from sweepopt.problem import OptimProblem
from sweepopt.results import SolutionSet, select_rows

BRUTEFORCE = "bruteforce"

_logger = logging.getLogger(__name__)


def available_solvers() -> list[str]:
    return [BRUTEFORCE, *SOLVER_DRIVERS.list()]


def resolve_solver(solver_kind: str) -> SolverDriver | None:
    """
    Return the driver of an external solver kind, or None for brute force.

    Raises:
        InvalidSolverError: for an unknown kind.
    """
    if not isinstance(solver_kind, str):
        raise InvalidSolverError(repr(solver_kind), available_solvers())
    key = solver_kind.strip().lower()
    if key == BRUTEFORCE:
        return None
    if key not in SOLVER_DRIVERS:
        raise InvalidSolverError(solver_kind, available_solvers())
    return SOLVER_DRIVERS[key]


def _as_config(solver_config: SolverConfig | Mapping[str, Any]) -> SolverConfig:
    if isinstance(solver_config, SolverConfig):
        return solver_config
    if isinstance(solver_config, Mapping):
        return SolverConfig.from_dict(solver_config)
    raise ValidationError(f"invalid data: expected a SolverConfig, got {type(solver_config).__name__}.")


def _is_numeric(values: np.ndarray) -> bool:
    arr = np.asarray(values)
    return arr.size > 0 and np.issubdtype(arr.dtype, np.number) and bool(np.all(np.isfinite(arr)))


def _solve_bruteforce(config: SolverConfig, problem: OptimProblem) -> SolutionSet:
    select_best = config.require("select_best", BRUTEFORCE)

    _logger.info("init optimization")
    values, n_sim = evaluate_points(problem, problem.initial_points, config.evaluate, config.n_split)

    _logger.info("eval convergence")
    n_sol = n_sim

    _logger.info("eval solution")
    mask = np.asarray(select_best(values, n_sol), dtype=bool).reshape(-1)
    if mask.size != n_sol:
        raise ValidationError(
            f"invalid data: select_best returned {mask.size} flags for {n_sol} solutions.",
            "select_best must return one boolean per evaluated row",
        )
    return SolutionSet(
        values=select_rows(values, mask),
        n_sol=int(np.count_nonzero(mask)),
        n_sim=n_sim,
        has_converged=True,
        info={},
    )


def _solve_external(driver: SolverDriver, config: SolverConfig, problem: OptimProblem) -> SolutionSet:
    driver.check(problem)
    objective = config.require("objective", driver.name)
    observer = config.observer or LoggingProgressObserver()

    adapter = ObjectiveAdapter(problem, config.evaluate, objective, config.n_split)
    raw = driver.optimize(adapter, problem, config, observer)

    _logger.info("eval convergence")
    has_converged = raw.success and _is_numeric(raw.X) and _is_numeric(raw.F)
    info = {driver.counter_key: raw.n_iter, "message": raw.message}

    _logger.info("eval solution")
    values, n_sol = evaluate_points(problem, raw.X, config.evaluate, config.n_split)
    return SolutionSet(
        values=values,
        n_sol=n_sol,
        n_sim=raw.n_eval,
        has_converged=bool(has_converged),
        info=info,
    )


def solve(
    solver_kind: str,
    solver_config: SolverConfig | Mapping[str, Any],
    optim_problem: OptimProblem,
) -> SolutionSet:
    """
    Run one solver on a pre-processed problem and normalize its result.

    Args:
        solver_kind: One of ``bruteforce``, ``ga``, ``gamultiobj``,
            ``paretosearch``, ``particleswarm``.
        solver_config: SolverConfig or an equivalent mapping.
        optim_problem: Output of :func:`sweepopt.preprocessing.preprocess`.

    Raises:
        ValidationError: for an unknown kind, missing collaborators or
            integer variables given to a solver without integer support.
            Always raised before the solver runs.
    """
    driver = resolve_solver(solver_kind)
    config = _as_config(solver_config)
    if driver is None:
        return _solve_bruteforce(config, optim_problem)
    return _solve_external(driver, config, optim_problem)


__all__ = ["BRUTEFORCE", "available_solvers", "resolve_solver", "solve"]
