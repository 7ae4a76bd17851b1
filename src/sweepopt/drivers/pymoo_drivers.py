"""
Solver drivers backed by pymoo.

Every driver seeds the algorithm with the initial points, evaluates whole
batches through a vectorized pymoo problem and reports progress through a
pymoo callback adapted to ProgressEvent.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from sweepopt.config import DEFAULT_POP_SIZE, SolverConfig
from sweepopt.drivers.base import RawSolverResult, SolverDriver
from sweepopt.evaluation import ObjectiveAdapter
from sweepopt.exceptions import DependencyError, ValidationError
from sweepopt.observer import ProgressEvent, ProgressObserver
from sweepopt.problem import OptimProblem

_logger = logging.getLogger(__name__)


def _missing_pymoo() -> DependencyError:
    return DependencyError("pymoo", "the genetic, pareto and swarm solvers")


def _make_pymoo_problem(objective: ObjectiveAdapter, problem: OptimProblem, n_obj: int):
    try:
        from pymoo.core.problem import Problem as PymooProblem
    except ImportError as exc:  # pragma: no cover
        raise _missing_pymoo() from exc

    class _SweepPymooProblem(PymooProblem):
        def __init__(self):
            super().__init__(
                n_var=problem.n_var,
                n_obj=n_obj,
                xl=problem.lb,
                xu=problem.ub,
                elementwise=False,
            )

        def _evaluate(self, X, out, *args, **kwargs):
            F = objective(X)
            if F.shape[1] != self.n_obj:
                raise ValidationError(
                    f"invalid data: objective returned {F.shape[1]} values per row, expected {self.n_obj}.",
                    "Set SolverConfig.n_obj to the number of objective columns",
                )
            out["F"] = F

    return _SweepPymooProblem()


def _make_callback(observer: ProgressObserver, objective: ObjectiveAdapter):
    try:
        from pymoo.core.callback import Callback
    except ImportError as exc:  # pragma: no cover
        raise _missing_pymoo() from exc

    class _ProgressCallback(Callback):
        def __init__(self):
            super().__init__()
            self.iteration = 0

        def notify(self, algorithm):
            self.iteration = int(algorithm.n_gen)
            phase = "init" if self.iteration <= 1 else "iter"
            observer.on_progress(ProgressEvent(phase, self.iteration, objective.n_eval))

    return _ProgressCallback()


def _make_integer_repair(mask: np.ndarray):
    from pymoo.core.repair import Repair

    class _IntegerRepair(Repair):
        def _do(self, problem, X, **kwargs):
            X = np.array(X, dtype=float)
            X[:, mask] = np.rint(X[:, mask])
            return X

    return _IntegerRepair()


class PymooDriver(SolverDriver):
    """Shared pymoo run and result normalization."""

    label = "pymoo"
    counter_label = "iterations"

    def n_obj(self, config: SolverConfig) -> int:
        return int(config.n_obj) if self.multi_objective else 1

    def make_algorithm(self, problem: OptimProblem, config: SolverConfig, options: dict[str, Any]):
        raise NotImplementedError

    def optimize(
        self,
        objective: ObjectiveAdapter,
        problem: OptimProblem,
        config: SolverConfig,
        observer: ProgressObserver,
    ) -> RawSolverResult:
        try:
            from pymoo.optimize import minimize
            from pymoo.termination import get_termination
        except ImportError as exc:  # pragma: no cover
            raise _missing_pymoo() from exc

        _logger.info("set options")
        options = dict(config.options)
        options.setdefault("pop_size", max(DEFAULT_POP_SIZE, problem.initial_points.shape[0]))
        options["sampling"] = np.array(problem.initial_points, dtype=float)
        algorithm = self.make_algorithm(problem, config, options)
        pymoo_problem = _make_pymoo_problem(objective, problem, self.n_obj(config))
        termination = get_termination(*config.termination) if config.termination is not None else None

        _logger.info("init optimization")
        callback = _make_callback(observer, objective)
        res = minimize(
            pymoo_problem,
            algorithm,
            termination,
            seed=config.seed,
            verbose=False,
            callback=callback,
        )

        # pymoo bumps n_gen after the last callback, count what was reported
        n_iter = callback.iteration
        n_eval = objective.n_eval
        observer.on_progress(ProgressEvent("done", n_iter, n_eval))

        if res.X is None or res.F is None:
            return RawSolverResult(
                X=np.zeros((0, problem.n_var)),
                F=np.zeros((0, self.n_obj(config))),
                success=False,
                n_eval=n_eval,
                n_iter=n_iter,
                message=f"{self.label} returned no solution after {n_iter} {self.counter_label} and {n_eval} evaluations",
            )

        X = np.asarray(res.X, dtype=float).reshape(-1, problem.n_var)
        F = np.asarray(res.F, dtype=float).reshape(X.shape[0], -1)
        return RawSolverResult(
            X=X,
            F=F,
            success=True,
            n_eval=n_eval,
            n_iter=n_iter,
            message=f"{self.label} finished after {n_iter} {self.counter_label} and {n_eval} evaluations",
        )


class GADriver(PymooDriver):
    """Single-objective genetic algorithm; integer positions are rounded by a repair."""

    name = "ga"
    label = "GA"
    supports_integer = True
    counter_key = "n_gen"
    counter_label = "generations"

    def make_algorithm(self, problem, config, options):
        from pymoo.algorithms.soo.nonconvex.ga import GA

        if problem.int_con:
            options.setdefault("repair", _make_integer_repair(problem.integer_mask))
        return GA(**options)


class GAMultiObjDriver(PymooDriver):
    """Multi-objective genetic algorithm (NSGA-II)."""

    name = "gamultiobj"
    label = "NSGA-II"
    multi_objective = True
    counter_key = "n_gen"
    counter_label = "generations"

    def make_algorithm(self, problem, config, options):
        from pymoo.algorithms.moo.nsga2 import NSGA2

        return NSGA2(**options)


class ParetoSearchDriver(PymooDriver):
    """Multi-objective search driven by the hypervolume contribution (SMS-EMOA)."""

    name = "paretosearch"
    label = "SMS-EMOA"
    multi_objective = True
    counter_key = "iterations"

    def make_algorithm(self, problem, config, options):
        from pymoo.algorithms.moo.sms import SMSEMOA

        return SMSEMOA(**options)


class ParticleSwarmDriver(PymooDriver):
    """Single-objective particle swarm; the initial points form the swarm."""

    name = "particleswarm"
    label = "PSO"
    counter_key = "iterations"

    def make_algorithm(self, problem, config, options):
        from pymoo.algorithms.soo.nonconvex.pso import PSO

        return PSO(**options)


__all__ = ["PymooDriver", "GADriver", "GAMultiObjDriver", "ParetoSearchDriver", "ParticleSwarmDriver"]
