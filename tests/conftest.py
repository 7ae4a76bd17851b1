import pytest


@pytest.fixture
def two_float_specs():
    """Two linear float variables with two seeds each (4 grid points)."""
    return [
        {"type": "float", "name": "x_1", "scale": "lin", "lb": 0.0, "ub": 4.0, "v": 1.0, "vec": [1.0, 3.0]},
        {"type": "float", "name": "x_2", "scale": "lin", "lb": 0.0, "ub": 4.0, "v": 1.0, "vec": [0.5, 2.0]},
    ]


@pytest.fixture
def mixed_specs():
    """One constant, one integer and one log-scaled float variable."""
    return [
        {"type": "scalar", "name": "T_amb", "v": 40.0},
        {"type": "integer", "name": "n_turn", "set": [2, 4, 8], "v": 4, "vec": [2, 4, 8]},
        {"type": "float", "name": "f", "scale": "log", "lb": 1.0, "ub": 1000.0, "v": 10.0, "vec": [1.0, 10.0, 100.0, 1000.0]},
    ]
