from collections import namedtuple

import numpy as np

ALLOWED_DIRECTIONS = ('<=', '>=', '=')

Constraint = namedtuple('Constraint', ['lhs', 'direction', 'rhs'])


def _as_matrix(matrix, n_cols=None):
    if matrix is None:
        return np.zeros((0, 0 if n_cols is None else n_cols))
    matrix = np.array(matrix, dtype=float)
    if matrix.size == 0:
        n = matrix.shape[1] if matrix.ndim == 2 else 0
        return np.zeros((0, n if n_cols is None else n_cols))
    if matrix.ndim != 2:
        raise ValueError('All rows of A and C are expected to be of equal length.')
    return matrix


def _as_vector(vector):
    if vector is None:
        return np.zeros(0)
    return np.array(vector, dtype=float).reshape(-1)


def _freeze(array):
    array.setflags(write=False)
    return array


def is_satisfied(A, x, b, eps=0.0):
    if len(b) == 0:
        return True
    return bool(np.all(np.dot(A, x) <= np.asarray(b) + eps))


class ConstraintsSystem:
    """
    System of linear constraints Ax <= b, Cx = d.

    Arrays are copied and made read-only on construction.
    """
    def __init__(self, A, b, C=None, d=None):
        A = _as_matrix(A)
        C = _as_matrix(C)
        b = _as_vector(b)
        d = _as_vector(d)

        if A.shape[0] > 0:
            n_variables = A.shape[1]
        elif C.shape[0] > 0:
            n_variables = C.shape[1]
        else:
            raise ValueError('Matrix A and C are empty.')
        if n_variables == 0:
            raise ValueError('Constraints must have at least one variable.')

        if A.shape[0] != b.size:
            raise ValueError("Length of vector 'b' has to be equal to the number of rows of matrix 'A'.")
        if C.shape[0] != d.size:
            raise ValueError("Length of vector 'd' has to be equal to the number of rows of matrix 'C'.")

        if A.shape[0] == 0:
            A = np.zeros((0, n_variables))
        if C.shape[0] == 0:
            C = np.zeros((0, n_variables))
        if A.shape[1] != n_variables or C.shape[1] != n_variables:
            raise ValueError('All rows of A and C are expected to be of equal length.')

        self.A = _freeze(A)
        self.b = _freeze(b)
        self.C = _freeze(C)
        self.d = _freeze(d)
        self.number_of_variables = n_variables

    @classmethod
    def from_rows(cls, lhs, directions, rhs):
        lhs = [np.asarray(row, dtype=float).reshape(-1) for row in lhs]
        if len(lhs) == 0 or lhs[0].size == 0:
            raise ValueError("Matrix 'lhs' cannot have 0 rows and/or 0 columns.")
        if len(lhs) != len(directions):
            raise ValueError("Length of vector 'dir' has to be equal to the number of rows of matrix 'lhs'.")
        if len(lhs) != len(rhs):
            raise ValueError("Length of vector 'rhs' has to be equal to the number of rows of matrix 'lhs'.")
        return cls.from_constraints([Constraint(row, direction, value) for row, direction, value in zip(lhs, directions, rhs)])

    @classmethod
    def from_constraints(cls, constraints):
        constraints = list(constraints)
        if len(constraints) == 0:
            raise ValueError('Constraints cannot be empty.')

        n_variables = None
        A, b, C, d = [], [], [], []
        for constraint in constraints:
            lhs = np.asarray(constraint.lhs, dtype=float).reshape(-1)
            if n_variables is None:
                n_variables = lhs.size
            elif lhs.size != n_variables:
                raise ValueError('All rows of A are expected to be of equal length.')

            direction = constraint.direction
            if direction not in ALLOWED_DIRECTIONS:
                raise ValueError(f"Wrong symbol of direction '{direction}'. Only '<=', '>=' and '=' are acceptable.")

            rhs = float(constraint.rhs)
            if direction == '>=':
                lhs = -lhs
                rhs = -rhs

            if direction == '=':
                C.append(lhs)
                d.append(rhs)
            else:
                A.append(lhs)
                b.append(rhs)

        A = np.array(A) if A else np.zeros((0, n_variables))
        C = np.array(C) if C else np.zeros((0, n_variables))
        return cls(A, b, C, d)

    @property
    def number_of_inequalities(self):
        return self.A.shape[0]

    @property
    def number_of_equalities(self):
        return self.C.shape[0]

    def is_satisfied(self, x, eps=1e-10):
        x = np.asarray(x, dtype=float)
        if x.size != self.number_of_variables:
            raise ValueError(f'Expected a point with {self.number_of_variables} coordinates, got {x.size}')
        if not is_satisfied(self.A, x, self.b, eps):
            return False
        return self.C.shape[0] == 0 or bool(np.all(np.abs(np.dot(self.C, x) - self.d) <= eps))

    def __repr__(self):
        return f'ConstraintsSystem(variables={self.number_of_variables}, inequalities={self.number_of_inequalities}, equalities={self.number_of_equalities})'
