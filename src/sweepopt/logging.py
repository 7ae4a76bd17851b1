"""
Console output for optimization runs.

The library only creates module loggers; nothing is printed until the caller
opts in with :func:`configure_sweepopt_logging`. The console layout nests the
solver phases under the run header::

    ################## inductor
    pre-processing
        n_var = 3
    solver: ga
        set options
        init optimization
        init / 1 / 50
        iter / 2 / 100
"""

from __future__ import annotations

import logging
from typing import IO

RUN_LOGGER = "sweepopt.run"
INDENT = "    "


class PhaseFormatter(logging.Formatter):
    """Indent every record that does not come from the run driver."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if record.name == RUN_LOGGER or text.startswith(INDENT):
            return text
        return "\n".join(INDENT + line for line in text.splitlines())


def configure_sweepopt_logging(*, level: int = logging.INFO, stream: IO[str] | None = None) -> logging.Handler | None:
    """
    Attach a console handler with the phase layout to the ``sweepopt`` logger.

    Nothing is changed when the root or ``sweepopt`` logger already has
    handlers; None is returned in that case.
    """
    logger = logging.getLogger("sweepopt")
    if logging.getLogger().handlers or logger.handlers:
        return None

    handler = logging.StreamHandler(stream)
    handler.setFormatter(PhaseFormatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return handler


__all__ = ["PhaseFormatter", "configure_sweepopt_logging", "RUN_LOGGER"]
