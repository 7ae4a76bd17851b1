"""
Variable pre-processing: bounds, integer positions, transforms and initial points.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Callable, Iterable, Mapping

import numpy as np

from sweepopt.exceptions import CapacityError, InvalidVariableError, ValidationError
from sweepopt.problem import OptimProblem
from sweepopt.scaling import VariableTransform
from sweepopt.variables import FloatVariable, IntegerVariable, ScalarVariable, VariableSpec, parse_variable

SelectionPredicate = Callable[[dict[str, np.ndarray], int], Any]

_logger = logging.getLogger(__name__)


def accept_all(inputs: Mapping[str, np.ndarray], n_rows: int) -> np.ndarray:
    """Selection predicate keeping every candidate."""
    return np.ones(n_rows, dtype=bool)


def expand_grid(seeds: list[np.ndarray]) -> np.ndarray:
    """
    Full cartesian product of the per-variable seed vectors.

    Rows follow column-major grid order: the first variable varies fastest.
    """
    if not seeds:
        return np.zeros((1, 0))
    mesh = np.meshgrid(*seeds, indexing="ij")
    return np.column_stack([m.ravel(order="F") for m in mesh]).astype(float)


def _selection_mask(predicate: SelectionPredicate, inputs: dict[str, np.ndarray], n_rows: int) -> np.ndarray:
    mask = np.asarray(predicate(inputs, n_rows), dtype=bool).reshape(-1)
    if mask.size != n_rows:
        raise ValidationError(
            f"invalid data: selection predicate returned {mask.size} flags for {n_rows} candidates.",
            "The predicate must return one boolean per candidate row",
        )
    return mask


def preprocess(
    variable_specs: Iterable[Mapping[str, Any] | VariableSpec],
    n_max: int,
    selection_predicate: SelectionPredicate = accept_all,
) -> tuple[OptimProblem, int, int]:
    """
    Parse the variable descriptions and build the initial candidate points.

    Args:
        variable_specs: Variable variants or declarative mappings, in order.
        n_max: Largest number of initial points allowed.
        selection_predicate: ``(inputs, n_rows) -> mask`` filter applied once
            to the whole candidate grid.

    Returns:
        ``(problem, n_var, n_sweep)``.

    Raises:
        ValidationError: on malformed variables or when nothing is optimized.
        CapacityError: when the grid is larger than ``n_max`` or empty after selection.
    """
    lb: list[float] = []
    ub: list[float] = []
    int_con: list[int] = []
    constant_inputs: dict[str, Any] = {}
    transforms: list[VariableTransform] = []
    seeds: list[np.ndarray] = []
    seen: set[str] = set()

    for spec in (parse_variable(item) for item in variable_specs):
        if spec.name in seen:
            raise InvalidVariableError(spec.name, "is declared more than once")
        seen.add(spec.name)
        if isinstance(spec, ScalarVariable):
            constant_inputs[spec.name] = spec.value
            continue
        if isinstance(spec, IntegerVariable):
            transforms.append(VariableTransform(spec.name, spec.scale, spec.allowed))
            int_con.append(len(transforms))
        elif isinstance(spec, FloatVariable):
            transforms.append(VariableTransform(spec.name, spec.scale))
        else:  # pragma: no cover - parse_variable only yields the three variants
            raise ValidationError("invalid data")
        lo, hi = spec.scaled_bounds()
        lb.append(lo)
        ub.append(hi)
        seeds.append(spec.scaled_seeds())

    n_var = len(transforms)
    if n_var == 0:
        raise ValidationError("invalid data: no optimization variable.", "Declare at least one integer or float variable")

    n_grid = math.prod(s.size for s in seeds)
    if n_grid <= 0 or n_grid > n_max:
        raise CapacityError(n_grid, n_max)

    problem = OptimProblem(
        lb=np.asarray(lb, dtype=float),
        ub=np.asarray(ub, dtype=float),
        int_con=tuple(int_con),
        constant_inputs=constant_inputs,
        transforms=tuple(transforms),
        initial_points=np.zeros((0, n_var)),
    )

    grid = expand_grid(seeds)
    inputs, n_rows = problem.get_input(grid)
    mask = _selection_mask(selection_predicate, inputs, n_rows)
    initial_points = grid[mask]

    n_sweep = int(initial_points.shape[0])
    if n_sweep <= 0 or n_sweep > n_max:
        raise CapacityError(n_sweep, n_max)

    _logger.debug("pre-processing: %d variables, %d of %d grid points selected", n_var, n_sweep, n_grid)
    return replace(problem, initial_points=initial_points), n_var, n_sweep


__all__ = ["preprocess", "accept_all", "expand_grid", "SelectionPredicate"]
