"""
sweepopt exception hierarchy.

All sweepopt-specific exceptions inherit from SweepOptError so callers can
catch everything raised by the library in one place.

Example:
    try:
        problem, n_var, n_sweep = preprocess(specs, n_max=1000, selection_predicate=accept_all)
    except ValidationError as e:
        print(f"Bad variable description: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class SweepOptError(Exception):
    """
    Base exception for all sweepopt errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(SweepOptError, ValueError):
    """Raised when an input is structurally invalid (variables, solver setup)."""

    pass


class InvalidVariableError(ValidationError):
    """Raised when a variable description violates its domain."""

    def __init__(self, name: str | None, reason: str) -> None:
        label = f"'{name}'" if name else "<unnamed>"
        message = f"invalid data: variable {label} {reason}."
        suggestion = "Check that defaults and seeds lie inside the declared set or bounds"
        super().__init__(message, suggestion, {"variable": name, "reason": reason})


class InvalidSolverError(ValidationError):
    """Raised when an unknown solver kind is requested."""

    def __init__(self, solver: str, available: list[str] | None = None) -> None:
        available = available or ["bruteforce", "ga", "gamultiobj", "paretosearch", "particleswarm"]
        message = f"invalid data: unknown solver '{solver}'."
        suggestion = f"Available solvers: {', '.join(available)}"
        super().__init__(message, suggestion, {"solver": solver, "available": available})


class IntegerConstraintError(ValidationError):
    """Raised when integer variables are passed to a solver that cannot handle them."""

    def __init__(self, solver: str, int_con: tuple[int, ...]) -> None:
        message = f"invalid data: solver '{solver}' does not support integer variables (positions {list(int_con)})."
        suggestion = "Use 'ga' or 'bruteforce', or turn the integer variables into floats or scalars"
        super().__init__(message, suggestion, {"solver": solver, "int_con": list(int_con)})


class MissingConfigError(ValidationError):
    """Raised when required solver configuration is missing."""

    def __init__(self, field: str, solver: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to the SolverConfig"
        if solver:
            suggestion += f" (required by the '{solver}' solver)"
        super().__init__(message, suggestion, {"field": field, "solver": solver})


# =============================================================================
# Capacity Errors
# =============================================================================


class CapacityError(SweepOptError):
    """Raised when the initial point grid is empty or larger than allowed."""

    def __init__(self, n_points: int, n_max: int) -> None:
        if n_points <= 0:
            message = "No initial point left after expansion and selection."
            suggestion = "Relax the selection predicate or add seed values"
        else:
            message = f"Initial point grid has {n_points} rows, more than the allowed maximum of {n_max}."
            suggestion = "Reduce the number of seed values or increase n_max"
        super().__init__(message, suggestion, {"n_points": n_points, "n_max": n_max})


# =============================================================================
# Dependency Errors
# =============================================================================


class DependencyError(SweepOptError):
    """Raised when an optional dependency is missing."""

    def __init__(self, package: str, feature: str, install_cmd: str | None = None) -> None:
        message = f"'{package}' is required for {feature} but not installed."
        install_cmd = install_cmd or f"pip install {package}"
        suggestion = f"Install with: {install_cmd}"
        super().__init__(message, suggestion, {"package": package, "feature": feature})


__all__ = [
    "SweepOptError",
    "ValidationError",
    "InvalidVariableError",
    "InvalidSolverError",
    "IntegerConstraintError",
    "MissingConfigError",
    "CapacityError",
    "DependencyError",
]
