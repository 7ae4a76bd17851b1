import numpy as np
import pytest

from sweepopt.exceptions import CapacityError, InvalidVariableError, ValidationError
from sweepopt.preprocessing import accept_all, expand_grid, preprocess


def test_bounds_integer_positions_and_constants(mixed_specs):
    problem, n_var, n_sweep = preprocess(mixed_specs, n_max=1000, selection_predicate=accept_all)

    assert n_var == 2
    assert n_sweep == 12
    assert problem.lb.tolist() == [1.0, 0.0]
    assert problem.ub.tolist() == [3.0, 3.0]
    assert problem.int_con == (1,)
    assert problem.integer_mask.tolist() == [True, False]
    assert problem.constant_inputs == {"T_amb": 40.0}
    assert list(problem.unscale_by_name) == ["n_turn", "f"]


def test_initial_points_respect_bounds(mixed_specs):
    problem, n_var, _ = preprocess(mixed_specs, n_max=1000)
    points = problem.initial_points
    assert points.shape[1] == n_var == len(problem.lb)
    assert np.all(points >= problem.lb)
    assert np.all(points <= problem.ub)


def test_cartesian_count_is_product_of_seed_lengths():
    specs = [
        {"type": "float", "name": "a", "lb": 0.0, "ub": 1.0, "v": 0.0, "vec": [0.0, 1.0]},
        {"type": "float", "name": "b", "lb": 0.0, "ub": 1.0, "v": 0.0, "vec": [0.0, 0.5, 1.0]},
        {"type": "integer", "name": "c", "set": [1, 2, 3, 4], "v": 1, "vec": [1, 2, 3, 4]},
    ]
    problem, n_var, n_sweep = preprocess(specs, n_max=24)
    assert n_var == 3
    assert n_sweep == 2 * 3 * 4
    assert problem.initial_points.shape == (24, 3)
    assert len({tuple(row) for row in problem.initial_points}) == 24


def test_predicate_accepting_first_row_keeps_one_point(two_float_specs):
    def first_only(inputs, n_rows):
        mask = np.zeros(n_rows, dtype=bool)
        mask[0] = True
        return mask

    problem, _, n_sweep = preprocess(two_float_specs, n_max=10, selection_predicate=first_only)
    assert n_sweep == 1
    assert problem.initial_points.tolist() == [[1.0, 0.5]]


def test_predicate_is_called_once_with_unscaled_inputs(mixed_specs):
    calls = []

    def record(inputs, n_rows):
        calls.append((dict(inputs), n_rows))
        return inputs["f"] <= 100.0

    problem, _, n_sweep = preprocess(mixed_specs, n_max=1000, selection_predicate=record)

    assert len(calls) == 1
    inputs, n_rows = calls[0]
    assert n_rows == 12
    assert set(inputs) == {"T_amb", "n_turn", "f"}
    assert np.all(inputs["T_amb"] == 40.0)
    assert set(inputs["n_turn"].tolist()) == {2, 4, 8}
    assert np.allclose(sorted(set(inputs["f"].tolist())), [1.0, 10.0, 100.0, 1000.0])
    assert n_sweep == 9


def test_grid_order_first_variable_fastest():
    grid = expand_grid([np.array([1.0, 2.0]), np.array([10.0, 20.0])])
    assert grid.tolist() == [[1.0, 10.0], [2.0, 10.0], [1.0, 20.0], [2.0, 20.0]]


def test_capacity_error_below_grid_size(two_float_specs):
    with pytest.raises(CapacityError):
        preprocess(two_float_specs, n_max=3)


def test_no_capacity_error_at_grid_size(two_float_specs):
    _, _, n_sweep = preprocess(two_float_specs, n_max=4)
    assert n_sweep == 4


def test_capacity_is_checked_before_selection(two_float_specs):
    def reject(inputs, n_rows):
        raise AssertionError("predicate must not run")

    with pytest.raises(CapacityError, match="more than the allowed maximum"):
        preprocess(two_float_specs, n_max=2, selection_predicate=reject)


def test_empty_selection_is_capacity_error(two_float_specs):
    with pytest.raises(CapacityError, match="No initial point"):
        preprocess(two_float_specs, n_max=10, selection_predicate=lambda inputs, n: np.zeros(n, dtype=bool))


def test_empty_seed_vector_is_capacity_error():
    specs = [{"type": "float", "name": "a", "lb": 0.0, "ub": 1.0, "v": 0.0, "vec": []}]
    with pytest.raises(CapacityError):
        preprocess(specs, n_max=10)


def test_only_scalar_variables_is_validation_error():
    with pytest.raises(ValidationError, match="no optimization variable"):
        preprocess([{"type": "scalar", "name": "c", "v": 1.0}], n_max=10)


def test_bad_mask_length_is_validation_error(two_float_specs):
    with pytest.raises(ValidationError, match="selection predicate"):
        preprocess(two_float_specs, n_max=10, selection_predicate=lambda inputs, n: [True])


def test_malformed_variable_fails_before_selection(two_float_specs):
    specs = two_float_specs + [{"type": "float", "name": "bad", "lb": 1.0, "ub": 0.0, "v": 0.5, "vec": [0.5]}]
    with pytest.raises(ValidationError):
        preprocess(specs, n_max=100, selection_predicate=lambda inputs, n: pytest.fail("selection ran"))


def test_get_input_unscales_columns(mixed_specs):
    problem, _, _ = preprocess(mixed_specs, n_max=1000)
    inputs, n_rows = problem.get_input(np.array([[1.0, 0.0], [3.0, 2.0]]))
    assert n_rows == 2
    assert inputs["n_turn"].tolist() == [2, 8]
    assert np.allclose(inputs["f"], [1.0, 100.0])
    assert inputs["T_amb"].tolist() == [40.0, 40.0]


def test_repeated_integer_seeds_give_one_row_each():
    specs = [{"type": "integer", "name": "n", "set": [1, 2, 3], "v": 1, "vec": [3, 1, 3]}]
    problem, _, n_sweep = preprocess(specs, n_max=2)
    assert n_sweep == 2
    assert problem.initial_points.tolist() == [[1.0], [3.0]]


@pytest.mark.parametrize(
    "duplicate",
    [
        {"type": "scalar", "name": "x_1", "v": 5.0},
        {"type": "float", "name": "x_2", "lb": 0.0, "ub": 1.0, "v": 0.5, "vec": [0.5]},
    ],
)
def test_duplicated_names_are_rejected(two_float_specs, duplicate):
    with pytest.raises(InvalidVariableError, match="declared more than once"):
        preprocess(two_float_specs + [duplicate], n_max=10)
