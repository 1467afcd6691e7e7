import numpy as np
import pytest

from polyrun.constraints import Constraint, ConstraintsSystem


@pytest.mark.parametrize('lhs,directions,rhs', [
    (np.zeros((0, 3)), ['=', '='], [0, 0]),
    ([[], []], ['=', '='], [0, 0]),
    ([[1, 0], [0, 1]], ['=', '='], [0, 0, 0]),
    ([[1, 0], [0, 1]], ['=', '=', '='], [0, 0]),
    ([[1, 0], [0, 1]], ['<=', '=='], [0, 0]),
    ([[1, 0], [0, 1]], ['<', '='], [0, 0]),
    ([[1, 0], [0, 1]], ['>', '='], [0, 0]),
])
def test_from_rows_invalid(lhs, directions, rhs):
    with pytest.raises(ValueError):
        ConstraintsSystem.from_rows(lhs, directions, rhs)


def test_from_rows_flips_greater_or_equal():
    lhs = np.array([[0, 0, 0], [1, -1, 1], [-2, 2, -2], [3, -3, -3]], dtype=float)
    directions = ['<=', '>=', '<=', '>=']
    rhs = np.array([0, -1, -2, 3], dtype=float)

    constraints = ConstraintsSystem.from_rows(lhs, directions, rhs)
    sign = np.array([1, -1, 1, -1]).reshape(-1, 1)
    assert np.allclose(constraints.A, sign*lhs)
    assert np.allclose(constraints.b, sign.reshape(-1)*rhs)
    assert constraints.number_of_equalities == 0


def test_from_rows_extracts_equalities():
    lhs = np.array([[0, 0, 0], [1, -1, 1], [-2, 2, -2], [3, -3, -3], [4, 4, 4]], dtype=float)
    directions = ['<=', '=', '<=', '=', '<=']
    rhs = np.array([0, -1, -2, 3, 4], dtype=float)

    constraints = ConstraintsSystem.from_rows(lhs, directions, rhs)
    assert constraints.number_of_variables == 3
    assert constraints.number_of_inequalities == 3
    assert constraints.number_of_equalities == 2
    assert np.allclose(constraints.A, lhs[[0, 2, 4]])
    assert np.allclose(constraints.b, rhs[[0, 2, 4]])
    assert np.allclose(constraints.C, lhs[[1, 3]])
    assert np.allclose(constraints.d, rhs[[1, 3]])


def test_from_constraints():
    constraints = ConstraintsSystem.from_constraints([
        Constraint([1, 0], '>=', 0),
        Constraint([0, 1], '>=', 0),
        Constraint([1, 1], '<=', 1),
    ])
    assert np.allclose(constraints.A, [[-1, 0], [0, -1], [1, 1]])
    assert np.allclose(constraints.b, [0, 0, 1])
    assert constraints.C.shape == (0, 2)


def test_only_equalities():
    constraints = ConstraintsSystem(None, None, [[1, 0], [0, 1]], [1, 2])
    assert constraints.A.shape == (0, 2)
    assert constraints.number_of_variables == 2


def test_invalid_systems():
    with pytest.raises(ValueError):
        ConstraintsSystem(None, None)
    with pytest.raises(ValueError):
        ConstraintsSystem([[1, 0]], [1, 2])
    with pytest.raises(ValueError):
        ConstraintsSystem([[1, 0]], [1], [[1, 0, 0]], [1])


def test_arrays_are_read_only():
    A = np.identity(2)
    constraints = ConstraintsSystem(A, [1, 1])
    A[0, 0] = 5.0
    assert constraints.A[0, 0] == 1.0
    with pytest.raises(ValueError):
        constraints.A[0, 0] = 2.0


def test_is_satisfied():
    constraints = ConstraintsSystem([[1, 0], [0, 1]], [1, 1], [[1, -1]], [0])
    assert constraints.is_satisfied([0.5, 0.5])
    assert not constraints.is_satisfied([0.5, 0.4])
    assert not constraints.is_satisfied([2.0, 2.0])
    with pytest.raises(ValueError):
        constraints.is_satisfied([0.5])
