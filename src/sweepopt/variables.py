"""
Declarative design-variable descriptions.

Three variants are supported, each validated when constructed:

- ``ScalarVariable``: a constant, non-optimized input.
- ``IntegerVariable``: a discrete choice among an allowed set.
- ``FloatVariable``: a bounded continuous value on a lin, log or exp scale.

``parse_variable`` builds the same variants from plain mappings, using the
short field names of the historical variable description format::

    {"type": "float", "name": "f", "scale": "log", "lb": 1e3, "ub": 1e6, "v": 1e4, "vec": [1e3, 1e4, 1e5]}
    {"type": "integer", "name": "n_turn", "set": [2, 4, 6, 8], "v": 4, "vec": [2, 8]}
    {"type": "scalar", "name": "T_amb", "v": 40.0}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence, Union

import numpy as np

from sweepopt.exceptions import InvalidVariableError, ValidationError
from sweepopt.scaling import FLOAT_SCALES, ScaleKind, normalize_scale, scale_values, unscale_values


def _single(name: str, value: Any, what: str) -> Any:
    arr = np.asarray(value)
    if arr.size != 1:
        raise InvalidVariableError(name, f"{what} must be exactly one value, got {arr.size}")
    item = arr.reshape(-1)[0]
    return item.item() if isinstance(item, np.generic) else item


def _vector(value: Any) -> tuple:
    return tuple(np.atleast_1d(np.asarray(value)).ravel().tolist())


@dataclass
class ScalarVariable:
    """Constant input passed unchanged to every evaluation."""

    name: str
    value: Any

    type = "scalar"

    def __post_init__(self) -> None:
        self.value = _single(self.name, self.value, "value")


@dataclass
class IntegerVariable:
    """Discrete variable; the optimizer works on its 1-based rank in ``allowed``."""

    name: str
    allowed: Sequence[Any]
    default: Any
    seeds: Sequence[Any] = field(default_factory=tuple)

    type = "integer"

    def __post_init__(self) -> None:
        self.allowed = _vector(self.allowed)
        self.seeds = _vector(self.seeds)
        if len(self.allowed) < 2:
            raise InvalidVariableError(self.name, "needs at least two allowed values")
        if len(set(self.allowed)) != len(self.allowed):
            raise InvalidVariableError(self.name, "has duplicated allowed values")
        self.default = _single(self.name, self.default, "default")
        if self.default not in self.allowed:
            raise InvalidVariableError(self.name, f"default {self.default!r} is not in the allowed set")
        outside = [s for s in self.seeds if s not in self.allowed]
        if outside:
            raise InvalidVariableError(self.name, f"seeds {outside!r} are not in the allowed set")
        # one grid row per distinct member, in allowed-set order
        self.seeds = tuple(value for value in self.allowed if value in self.seeds)

    @property
    def scale(self) -> ScaleKind:
        return ScaleKind.INTEGER

    def scaled_bounds(self) -> tuple[float, float]:
        ranks = scale_values(ScaleKind.INTEGER, self.allowed, self.allowed)
        return float(ranks.min()), float(ranks.max())

    def scaled_seeds(self) -> np.ndarray:
        return scale_values(ScaleKind.INTEGER, np.asarray(self.seeds), self.allowed)


@dataclass
class FloatVariable:
    """Bounded continuous variable on a lin, log or exp scale."""

    name: str
    lb: float
    ub: float
    default: float
    seeds: Sequence[float] = field(default_factory=tuple)
    scale: ScaleKind | str = ScaleKind.LIN

    type = "float"

    def __post_init__(self) -> None:
        self.scale = normalize_scale(self.scale)
        if self.scale not in FLOAT_SCALES:
            raise InvalidVariableError(self.name, f"cannot use the '{self.scale.value}' scale")
        self.lb = float(_single(self.name, self.lb, "lb"))
        self.ub = float(_single(self.name, self.ub, "ub"))
        self.default = float(_single(self.name, self.default, "default"))
        self.seeds = tuple(float(s) for s in np.atleast_1d(np.asarray(self.seeds, dtype=float)).ravel())
        if self.ub < self.lb:
            raise InvalidVariableError(self.name, f"has ub={self.ub} below lb={self.lb}")
        if self.scale is ScaleKind.LOG and self.lb <= 0.0:
            raise InvalidVariableError(self.name, "needs a strictly positive lb on the log scale")
        if not self.lb <= self.default <= self.ub:
            raise InvalidVariableError(self.name, f"default {self.default} is outside [{self.lb}, {self.ub}]")
        outside = [s for s in self.seeds if not self.lb <= s <= self.ub]
        if outside:
            raise InvalidVariableError(self.name, f"seeds {outside} are outside [{self.lb}, {self.ub}]")

    def scaled_bounds(self) -> tuple[float, float]:
        return float(scale_values(self.scale, self.lb)), float(scale_values(self.scale, self.ub))

    def scaled_seeds(self) -> np.ndarray:
        return scale_values(self.scale, np.asarray(self.seeds, dtype=float))


VariableSpec = Union[ScalarVariable, IntegerVariable, FloatVariable]

_FLOAT_ALIASES = {"lin_float": "lin", "log_float": "log", "exp_float": "exp"}


def seed_range(v_1: float, v_2: float, n: int, scale: ScaleKind | str = ScaleKind.LIN) -> tuple[float, ...]:
    """
    Spread ``n`` seed values between ``v_1`` and ``v_2``, evenly in the scaled space.

    On the log scale this gives geometrically spaced values.
    """
    kind = normalize_scale(scale)
    n = int(n)
    if n < 1:
        raise ValidationError(f"invalid data: seed count must be positive, got {n}.")
    lo, hi = scale_values(kind, [v_1, v_2])
    return tuple(unscale_values(kind, np.linspace(lo, hi, n)).tolist())


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ValidationError(f"invalid data: variable '{data.get('name')}' is missing '{key}'.")
    return data[key]


def parse_variable(data: Mapping[str, Any] | VariableSpec) -> VariableSpec:
    """
    Build a variable variant from a declarative mapping.

    Variant instances are returned unchanged.
    """
    if isinstance(data, (ScalarVariable, IntegerVariable, FloatVariable)):
        return data
    if not isinstance(data, Mapping):
        raise ValidationError(f"invalid data: cannot parse variable from {type(data).__name__}.")

    kind = str(data.get("type", "")).lower()
    name = _require(data, "name")
    if kind == "scalar":
        return ScalarVariable(name=name, value=_require(data, "v"))
    if kind == "integer":
        return IntegerVariable(
            name=name,
            allowed=_require(data, "set"),
            default=_require(data, "v"),
            seeds=data.get("vec", ()),
        )
    if kind == "float" or kind in _FLOAT_ALIASES:
        scale = data.get("scale", _FLOAT_ALIASES.get(kind, "lin"))
        if "vec" in data:
            seeds = data["vec"]
        elif {"v_1", "v_2", "n"} <= set(data):
            seeds = seed_range(data["v_1"], data["v_2"], data["n"], scale)
        else:
            seeds = ()
        return FloatVariable(
            name=name,
            lb=_require(data, "lb"),
            ub=_require(data, "ub"),
            default=_require(data, "v"),
            seeds=seeds,
            scale=scale,
        )
    raise ValidationError(
        f"invalid data: unknown variable type '{data.get('type')}'.",
        "Expected one of: scalar, integer, float",
        {"variable": name},
    )


def parse_variables(items: Iterable[Mapping[str, Any] | VariableSpec]) -> list[VariableSpec]:
    return [parse_variable(item) for item in items]


__all__ = [
    "ScalarVariable",
    "IntegerVariable",
    "FloatVariable",
    "VariableSpec",
    "seed_range",
    "parse_variable",
    "parse_variables",
]
