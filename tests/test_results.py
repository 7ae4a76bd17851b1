import logging

import numpy as np
import pandas as pd
import pytest

from sweepopt.results import SolutionSet, log_solution_summary, select_rows


@pytest.fixture
def solution():
    return SolutionSet(
        values={
            "x": np.array([1.0, 2.0, 3.0]),
            "n": np.array([2, 4, 8]),
            "F": np.array([[0.1, 0.9], [0.5, 0.5], [0.9, 0.1]]),
        },
        n_sol=3,
        n_sim=120,
        has_converged=True,
        info={"n_gen": 4, "message": "NSGA-II finished"},
    )


def test_select_rows_filters_every_column():
    values = {"a": np.array([1, 2, 3]), "b": np.array([[1, 1], [2, 2], [3, 3]])}
    kept = select_rows(values, np.array([True, False, True]))
    assert kept["a"].tolist() == [1, 3]
    assert kept["b"].tolist() == [[1, 1], [3, 3]]


def test_records_are_plain_python(solution):
    rows = solution.records()
    assert len(rows) == len(solution) == 3
    assert rows[0]["x"] == 1.0
    assert type(rows[1]["n"]) is int
    assert rows[2]["F"].tolist() == [0.9, 0.1]
    assert solution.fields == ["x", "n", "F"]


def test_to_frame_expands_matrix_columns(solution):
    frame = solution.to_frame()
    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ["x", "n", "F_0", "F_1"]
    assert frame.index.name == "solution"
    assert frame["F_1"].tolist() == [0.9, 0.5, 0.1]


def test_empty_solution_frame():
    empty = SolutionSet(values={"x": np.zeros(0)}, n_sol=0, n_sim=5, has_converged=False)
    assert empty.to_frame().shape == (0, 1)
    assert empty.records() == []
    assert "Ranges" not in empty.summary_text()


def test_summary_text(solution):
    text = solution.summary_text()
    assert "Solutions: 3" in text
    assert "Evaluations: 120" in text
    assert "n_gen: 4" in text
    assert "x: [1, 3]" in text


def test_log_solution_summary(solution, caplog):
    caplog.set_level(logging.INFO, logger="sweepopt")
    log_solution_summary(solution)
    messages = [record.getMessage() for record in caplog.records]
    assert "=== Solution Set ===" in messages
    assert "Converged: True" in messages
