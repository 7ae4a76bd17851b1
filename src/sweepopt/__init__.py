from .config import SolverConfig
from .exceptions import (
    CapacityError,
    DependencyError,
    IntegerConstraintError,
    InvalidSolverError,
    InvalidVariableError,
    MissingConfigError,
    SweepOptError,
    ValidationError,
)
from .logging import configure_sweepopt_logging
from .observer import LoggingProgressObserver, ProgressEvent, ProgressObserver, RecordingObserver
from .preprocessing import accept_all, preprocess
from .problem import OptimProblem
from .results import SolutionSet, log_solution_summary
from .run import OptimRun, run_optim
from .scaling import ScaleKind, VariableTransform, scale_values, unscale_values
from .solver import available_solvers, solve
from .variables import FloatVariable, IntegerVariable, ScalarVariable, parse_variable, parse_variables, seed_range
from .version import get_version

__all__ = [
    "SolverConfig",
    "CapacityError",
    "DependencyError",
    "IntegerConstraintError",
    "InvalidSolverError",
    "InvalidVariableError",
    "MissingConfigError",
    "SweepOptError",
    "ValidationError",
    "configure_sweepopt_logging",
    "LoggingProgressObserver",
    "ProgressEvent",
    "ProgressObserver",
    "RecordingObserver",
    "accept_all",
    "preprocess",
    "OptimProblem",
    "SolutionSet",
    "log_solution_summary",
    "OptimRun",
    "run_optim",
    "ScaleKind",
    "VariableTransform",
    "scale_values",
    "unscale_values",
    "available_solvers",
    "solve",
    "FloatVariable",
    "IntegerVariable",
    "ScalarVariable",
    "parse_variable",
    "parse_variables",
    "seed_range",
    "get_version",
]
