"""
Batch evaluation of scaled candidate points.

The pipeline is: unscale (and merge constants) -> evaluate -> objective.
Evaluation may be split into chunks of at most ``n_split`` rows; chunks are
processed in order and their results concatenated row by row.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

import numpy as np

from sweepopt.exceptions import ValidationError
from sweepopt.problem import OptimProblem

EvaluateFn = Callable[[dict[str, np.ndarray], int], Mapping[str, Any]]
ObjectiveFn = Callable[[dict[str, np.ndarray], int], Any]
SelectBestFn = Callable[[dict[str, np.ndarray], int], Any]


def _chunk_slices(n_rows: int, n_split: int | None) -> list[slice]:
    if n_split is None or n_split <= 0 or n_split >= n_rows:
        return [slice(0, n_rows)]
    return [slice(start, min(start + n_split, n_rows)) for start in range(0, n_rows, n_split)]


def _concat(parts: list[Mapping[str, Any]]) -> dict[str, np.ndarray]:
    if len(parts) == 1:
        return {key: np.atleast_1d(np.asarray(value)) for key, value in parts[0].items()}
    return {key: np.concatenate([np.atleast_1d(np.asarray(part[key])) for part in parts], axis=0) for key in parts[0]}


def evaluate_points(
    problem: OptimProblem,
    x: np.ndarray,
    evaluate: EvaluateFn,
    n_split: int | None = None,
) -> tuple[dict[str, np.ndarray], int]:
    """
    Evaluate scaled points and return the unscaled inputs merged with the computed fields.

    ``evaluate`` is never called with an empty batch.
    """
    inputs, n_rows = problem.get_input(x)
    if n_rows == 0:
        return inputs, 0

    parts: list[Mapping[str, Any]] = []
    for sl in _chunk_slices(n_rows, n_split):
        chunk = {name: values[sl] for name, values in inputs.items()}
        parts.append(evaluate(chunk, sl.stop - sl.start))

    fields = _concat(parts)
    return {**inputs, **fields}, n_rows


def _objective_matrix(values: np.ndarray, n_rows: int) -> np.ndarray:
    # rows are candidates, columns are objectives
    if values.ndim == 1 and values.shape[0] == n_rows:
        return values.reshape(n_rows, 1)
    if values.ndim == 2 and values.shape[0] == n_rows:
        return values
    raise ValidationError(
        f"invalid data: objective returned shape {values.shape} for {n_rows} candidates.",
        "Return one value per row, shape (n_rows,), or one row per candidate, shape (n_rows, n_obj)",
        {"shape": values.shape, "n_rows": n_rows},
    )


class ObjectiveAdapter:
    """
    Vectorized objective seen by the external solvers.

    Calling the adapter with a batch of scaled points returns an array of
    shape (n_rows, n_obj) holding the values to minimize.
    """

    def __init__(
        self,
        problem: OptimProblem,
        evaluate: EvaluateFn,
        objective: ObjectiveFn,
        n_split: int | None = None,
    ) -> None:
        self.problem = problem
        self.evaluate = evaluate
        self.objective = objective
        self.n_split = n_split
        self.n_eval = 0

    def __call__(self, x: np.ndarray) -> np.ndarray:
        evaluated, n_rows = evaluate_points(self.problem, x, self.evaluate, self.n_split)
        self.n_eval += n_rows
        if n_rows == 0:
            return np.zeros((0, 1))
        values = np.atleast_1d(np.asarray(self.objective(evaluated, n_rows), dtype=float))
        return _objective_matrix(values, n_rows)


__all__ = ["EvaluateFn", "ObjectiveFn", "SelectBestFn", "evaluate_points", "ObjectiveAdapter"]
