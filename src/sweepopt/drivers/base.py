from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from sweepopt.config import SolverConfig
from sweepopt.evaluation import ObjectiveAdapter
from sweepopt.exceptions import IntegerConstraintError
from sweepopt.observer import ProgressObserver
from sweepopt.problem import OptimProblem


@dataclass
class RawSolverResult:
    """Solver output before normalization; X holds scaled points."""

    X: np.ndarray
    F: np.ndarray
    success: bool
    n_eval: int
    n_iter: int
    message: str


class SolverDriver:
    """
    Thin adapter around one external optimization algorithm.

    Subclasses declare their capabilities and implement ``optimize``.
    """

    name: str = "solver"
    supports_integer: bool = False
    multi_objective: bool = False
    # key under which the iteration count is reported in SolutionSet.info
    counter_key: str = "iterations"

    def check(self, problem: OptimProblem) -> None:
        """Reject problems this solver cannot handle, before anything runs."""
        if problem.int_con and not self.supports_integer:
            raise IntegerConstraintError(self.name, problem.int_con)

    def optimize(
        self,
        objective: ObjectiveAdapter,
        problem: OptimProblem,
        config: SolverConfig,
        observer: ProgressObserver,
    ) -> RawSolverResult:
        raise NotImplementedError


__all__ = ["RawSolverResult", "SolverDriver"]
