from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

import numpy as np

from sweepopt.scaling import VariableTransform


@dataclass(frozen=True)
class OptimProblem:
    """
    Solver-ready form of a list of variable descriptions.

    Attributes:
        lb, ub: Scaled bounds, one entry per optimization variable.
        int_con: 1-based positions (into lb/ub) of the integer variables.
        constant_inputs: Values of the scalar (non-optimized) variables.
        transforms: Unscale transforms, in the same order as lb/ub.
        initial_points: Scaled candidate points, shape (n_sweep, n_var).
    """

    lb: np.ndarray
    ub: np.ndarray
    int_con: tuple[int, ...]
    constant_inputs: dict[str, Any]
    transforms: tuple[VariableTransform, ...]
    initial_points: np.ndarray = field(repr=False)

    @property
    def n_var(self) -> int:
        return int(self.lb.size)

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.transforms]

    @property
    def unscale_by_name(self) -> dict[str, Callable[[np.ndarray], np.ndarray]]:
        return {t.name: t.unscale for t in self.transforms}

    @property
    def integer_mask(self) -> np.ndarray:
        mask = np.zeros(self.n_var, dtype=bool)
        mask[[i - 1 for i in self.int_con]] = True
        return mask

    def get_input(self, x: np.ndarray) -> tuple[dict[str, np.ndarray], int]:
        """
        Unscale a batch of scaled points and merge it with the constant inputs.

        The constants are repeated so that every entry of the returned dict
        holds one value per row of ``x``.
        """
        x = np.asarray(x, dtype=float).reshape(-1, self.n_var)
        n_rows = x.shape[0]
        inputs: dict[str, np.ndarray] = {
            name: np.repeat(np.asarray(value)[None], n_rows) for name, value in self.constant_inputs.items()
        }
        for col, transform in enumerate(self.transforms):
            inputs[transform.name] = transform.unscale(x[:, col])
        return inputs, n_rows


__all__ = ["OptimProblem"]
