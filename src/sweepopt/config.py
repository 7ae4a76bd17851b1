from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Tuple

from sweepopt.evaluation import EvaluateFn, ObjectiveFn, SelectBestFn
from sweepopt.exceptions import MissingConfigError, ValidationError
from sweepopt.observer import ProgressObserver

DEFAULT_POP_SIZE = 50
DEFAULT_N_OBJ = 2

# historical field names of the solver description
_ALIASES = {
    "fct_solve": "evaluate",
    "fct_obj": "objective",
    "fct_best": "select_best",
}


def _positive_int(name: str, value: Any) -> int:
    """Accept integral numbers such as 3 or 3.0, reject everything else."""
    message = f"invalid data: {name} must be a positive integer, got {value!r}."
    if isinstance(value, (bool, str)):
        raise ValidationError(message)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(message) from None
    if not number.is_integer() or number < 1:
        raise ValidationError(message)
    return int(number)


@dataclass
class SolverConfig:
    """
    Configuration shared by every solver kind.

    ``evaluate`` is always required; ``objective`` is required by the
    optimizing solvers and ``select_best`` by the brute force solver.
    ``termination``, ``seed`` and ``options`` are forwarded to the pymoo
    algorithm (``options`` as constructor keywords, e.g. ``pop_size``).
    """

    evaluate: EvaluateFn
    objective: ObjectiveFn | None = None
    select_best: SelectBestFn | None = None
    n_split: int | None = None
    n_obj: int = DEFAULT_N_OBJ
    termination: Tuple[str, Any] | None = None
    seed: int | None = None
    options: dict[str, Any] = field(default_factory=dict)
    observer: ProgressObserver | None = None

    def __post_init__(self) -> None:
        if self.evaluate is None:
            raise MissingConfigError("evaluate")
        if self.n_split is not None:
            self.n_split = _positive_int("n_split", self.n_split)
        self.n_obj = _positive_int("n_obj", self.n_obj)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SolverConfig":
        """Build a config from a mapping; the ``fct_*`` historical keys are accepted."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValidationError(
                    f"invalid data: unknown solver setting '{key}'.",
                    f"Known settings: {', '.join(sorted(known))}",
                )
            kwargs[name] = value
        if "evaluate" not in kwargs:
            raise MissingConfigError("evaluate")
        return cls(**kwargs)

    def require(self, name: str, solver: str) -> Any:
        value = getattr(self, name)
        if value is None:
            raise MissingConfigError(name, solver)
        return value


__all__ = ["SolverConfig", "DEFAULT_POP_SIZE", "DEFAULT_N_OBJ"]
