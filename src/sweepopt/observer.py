from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressEvent:
    """
    Progress of an external solver run.

    phase is "init" for the first generation, "iter" for the following ones
    and "done" once the solver has returned.
    """

    phase: str
    iteration: int
    eval_count: int


@runtime_checkable
class ProgressObserver(Protocol):
    """
    Observer for solver progress.
    Purely observational: it cannot stop the run.
    """

    def on_progress(self, event: ProgressEvent) -> None: ...


class LoggingProgressObserver:
    """Emit one log line per progress event."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger or _logger
        self.level = level

    def on_progress(self, event: ProgressEvent) -> None:
        self.logger.log(self.level, "%s / %d / %d", event.phase, event.iteration, event.eval_count)


@dataclass
class RecordingObserver:
    """Keep every received event, mostly useful in tests and notebooks."""

    events: list[ProgressEvent] = field(default_factory=list)

    def on_progress(self, event: ProgressEvent) -> None:
        self.events.append(event)


__all__ = ["ProgressEvent", "ProgressObserver", "LoggingProgressObserver", "RecordingObserver"]
