from __future__ import annotations

import ast
import io
import logging
from pathlib import Path

from sweepopt.logging import PhaseFormatter, configure_sweepopt_logging


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _is_basic_config_call(node: ast.Call) -> bool:
    func = node.func
    if isinstance(func, ast.Attribute):
        return func.attr == "basicConfig"
    if isinstance(func, ast.Name):
        return func.id == "basicConfig"
    return False


def test_logging_policy() -> None:
    repo_root = _repo_root()
    src_root = repo_root / "src" / "sweepopt"
    violations: list[str] = []

    for path in src_root.rglob("*.py"):
        rel_path = path.relative_to(repo_root).as_posix()
        tree = ast.parse(path.read_text(encoding="utf-8-sig"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Call) and _is_basic_config_call(node):
                violations.append(f"{rel_path}:{getattr(node, 'lineno', '?')}: logging.basicConfig")

    if violations:
        msg = ["logging.basicConfig is forbidden in library modules:"]
        msg.extend(f"- {item}" for item in sorted(violations))
        raise AssertionError("\n".join(msg))


def test_configure_logging_leaves_existing_setup_alone(monkeypatch) -> None:
    root = logging.getLogger()
    logger = logging.getLogger("sweepopt")
    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])
    monkeypatch.setattr(logger, "handlers", [])

    assert configure_sweepopt_logging() is None
    assert logger.handlers == []


def test_configure_logging_attaches_one_handler(monkeypatch) -> None:
    root = logging.getLogger()
    logger = logging.getLogger("sweepopt")
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", True)
    monkeypatch.setattr(logger, "level", logging.NOTSET)

    handler = configure_sweepopt_logging(level=logging.DEBUG)

    assert logger.handlers == [handler]
    assert isinstance(handler.formatter, PhaseFormatter)
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def _record(name: str, msg: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, msg, None, None)


def test_phase_formatter_nests_solver_lines_under_the_run() -> None:
    formatter = PhaseFormatter("%(message)s")
    assert formatter.format(_record("sweepopt.run", "solver: ga")) == "solver: ga"
    assert formatter.format(_record("sweepopt.run", "    n_sol = 3")) == "    n_sol = 3"
    assert formatter.format(_record("sweepopt.solver", "eval solution")) == "    eval solution"
    assert formatter.format(_record("sweepopt.observer", "iter / 2 / 100")) == "    iter / 2 / 100"
    assert formatter.format(_record("sweepopt.results", "a\nb")) == "    a\n    b"


def test_configured_handler_writes_the_run_layout(monkeypatch) -> None:
    root = logging.getLogger()
    logger = logging.getLogger("sweepopt")
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", True)
    monkeypatch.setattr(logger, "level", logging.NOTSET)
    stream = io.StringIO()

    configure_sweepopt_logging(stream=stream)
    logging.getLogger("sweepopt.run").info("solver: %s", "ga")
    logging.getLogger("sweepopt.drivers.pymoo_drivers").info("set options")

    assert stream.getvalue().splitlines() == ["solver: ga", "    set options"]
