"""
Normalized solver output and presentation helpers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def select_rows(values: dict[str, np.ndarray], mask: np.ndarray) -> dict[str, np.ndarray]:
    """Keep the rows flagged by ``mask`` in every column."""
    return {name: np.asarray(column)[mask] for name, column in values.items()}


@dataclass
class SolutionSet:
    """
    Result of one solver invocation.

    Attributes:
        values: Column-wise data, one entry per row and field (unscaled
            inputs merged with the evaluated fields).
        n_sol: Number of rows in the solution.
        n_sim: Number of points evaluated during the run.
        has_converged: Solver status; False is a normal outcome, not an error.
        info: Solver details (``message`` and ``n_gen`` or ``iterations``).
    """

    values: dict[str, np.ndarray]
    n_sol: int
    n_sim: int
    has_converged: bool
    info: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return self.n_sol

    def __getitem__(self, name: str) -> np.ndarray:
        return self.values[name]

    @property
    def fields(self) -> list[str]:
        return list(self.values.keys())

    def records(self) -> list[dict[str, Any]]:
        """One dict per solution row, in row order."""
        rows: list[dict[str, Any]] = []
        for i in range(self.n_sol):
            row = {}
            for name, column in self.values.items():
                value = column[i]
                row[name] = value.item() if isinstance(value, np.generic) else value
            rows.append(row)
        return rows

    def to_frame(self):
        """Return the solution rows as a pandas DataFrame."""
        import pandas as pd

        flat: dict[str, Any] = {}
        for name, column in self.values.items():
            column = np.asarray(column)
            if column.ndim <= 1:
                flat[name] = column
            else:
                for j, sub in enumerate(column.reshape(column.shape[0], -1).T):
                    flat[f"{name}_{j}"] = sub
        return pd.DataFrame(flat, index=pd.RangeIndex(self.n_sol, name="solution"))

    def summary_text(self) -> str:
        """Return a human-readable summary string."""
        lines = [
            "=== Solution Set ===",
            f"Solutions: {self.n_sol}",
            f"Evaluations: {self.n_sim}",
            f"Converged: {self.has_converged}",
        ]
        for key in ("n_gen", "iterations", "message"):
            if key in self.info:
                lines.append(f"{key}: {self.info[key]}")
        numeric = [(k, np.asarray(v)) for k, v in self.values.items() if np.issubdtype(np.asarray(v).dtype, np.number)]
        if self.n_sol > 0 and numeric:
            lines.append("Ranges:")
            for name, column in numeric:
                lines.append(f"  {name}: [{column.min():.6g}, {column.max():.6g}]")
        return "\n".join(lines)


def log_solution_summary(solution: SolutionSet, *, logger: logging.Logger | None = None) -> None:
    """Log a summary of the solution set."""
    active_logger = logger or _logger()
    for line in solution.summary_text().splitlines():
        active_logger.info("%s", line)


__all__ = ["SolutionSet", "select_rows", "log_solution_summary"]
