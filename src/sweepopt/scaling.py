"""
Scale transforms between physical variable values and solver coordinates.

Each transform kind is a pair of pure functions. The optimizer works on the
scaled values; the unscale direction recovers physical values.

    lin      identity both ways
    log      x -> log10(x),  y -> 10**y
    exp      x -> 10**x,     y -> log10(y)
    integer  member -> 1-based rank in the allowed set, rank -> member
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from sweepopt.exceptions import ValidationError


class ScaleKind(str, Enum):
    LIN = "lin"
    LOG = "log"
    EXP = "exp"
    INTEGER = "integer"


FLOAT_SCALES: tuple[ScaleKind, ...] = (ScaleKind.LIN, ScaleKind.LOG, ScaleKind.EXP)


def normalize_scale(value: str | ScaleKind) -> ScaleKind:
    """
    Normalize a scale name to its ScaleKind.

    Raises:
        ValidationError: if the name is not a known scale kind.
    """
    if isinstance(value, ScaleKind):
        return value
    key = str(value).strip().lower()
    try:
        return ScaleKind(key)
    except ValueError:
        expected = ", ".join(kind.value for kind in ScaleKind)
        raise ValidationError(f"invalid data: unknown scale '{value}'.", f"Expected one of: {expected}") from None


def _as_allowed(allowed: Sequence[float] | np.ndarray | None) -> np.ndarray:
    if allowed is None:
        raise ValidationError("invalid data: integer scaling requires the allowed set.")
    return np.asarray(allowed)


def scale_values(kind: ScaleKind | str, x, allowed: Sequence[float] | np.ndarray | None = None) -> np.ndarray:
    """Map physical values to solver coordinates."""
    kind = normalize_scale(kind)
    values = np.asarray(x)
    if kind is ScaleKind.LIN:
        return values.astype(float)
    if kind is ScaleKind.LOG:
        return np.log10(values.astype(float))
    if kind is ScaleKind.EXP:
        return np.power(10.0, values.astype(float))

    # integer: rank of each value inside the allowed set
    members = _as_allowed(allowed)
    flat = values.ravel()
    hits = flat[:, None] == members[None, :]
    missing = ~hits.any(axis=1)
    if missing.any():
        raise ValidationError(
            "invalid data: value not in the allowed set.",
            details={"values": flat[missing].tolist(), "allowed": members.tolist()},
        )
    ranks = hits.argmax(axis=1) + 1
    return ranks.reshape(values.shape).astype(float)


def unscale_values(kind: ScaleKind | str, y, allowed: Sequence[float] | np.ndarray | None = None) -> np.ndarray:
    """Map solver coordinates back to physical values."""
    kind = normalize_scale(kind)
    values = np.asarray(y, dtype=float)
    if kind is ScaleKind.LIN:
        return values
    if kind is ScaleKind.LOG:
        return np.power(10.0, values)
    if kind is ScaleKind.EXP:
        return np.log10(values)

    members = _as_allowed(allowed)
    # solvers may hand back ranks like 2.0000001 or land exactly on a bound
    index = np.clip(np.rint(values).astype(int), 1, members.size) - 1
    return members[index]


@dataclass(frozen=True)
class VariableTransform:
    """Unscale transform bound to one optimization variable."""

    name: str
    kind: ScaleKind
    allowed: tuple | None = None

    def scale(self, x) -> np.ndarray:
        return scale_values(self.kind, x, self.allowed)

    def unscale(self, y) -> np.ndarray:
        return unscale_values(self.kind, y, self.allowed)

    def __call__(self, y) -> np.ndarray:
        return self.unscale(y)


__all__ = [
    "ScaleKind",
    "FLOAT_SCALES",
    "normalize_scale",
    "scale_values",
    "unscale_values",
    "VariableTransform",
]
