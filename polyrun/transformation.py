import warnings

import numpy as np
from scipy.linalg import svd

from polyrun.exceptions import InfeasibleSystemError, SingleSolutionError
from polyrun.log import logger


class Transformation:
    """
    Reparametrisation of the solutions of Cx = d as x = basis @ y + translation,
    where the columns of basis are an orthonormal basis of the null space of C
    and translation = pinv(C) @ d is a particular solution.

    Sampling in y keeps every equality satisfied and makes the polytope
    full-dimensional.
    """
    def __init__(self, C, d, number_of_variables, eps=1e-10, allow_single_solution=False):
        self.number_of_variables = number_of_variables
        self.eps = eps

        if C is None or np.size(C) == 0:
            self.basis = np.identity(number_of_variables)
            self.translation = np.zeros(number_of_variables)
            return

        C = np.atleast_2d(np.asarray(C, dtype=float))
        d = np.asarray(d, dtype=float).reshape(-1)
        if C.shape[1] != number_of_variables:
            raise ValueError(f'Matrix C has {C.shape[1]} columns, expected {number_of_variables}')
        if C.shape[0] != d.size:
            raise ValueError("Length of vector 'd' has to be equal to the number of rows of matrix 'C'.")

        u, s, vh = svd(C, full_matrices=True)
        rank = int(np.sum(s > eps))
        if rank < C.shape[0]:
            warnings.warn(f'{C.shape[0] - rank} of the {C.shape[0]} equality constraints are linearly dependent on the others and will be ignored')

        #pseudo-inverse from the same decomposition, small singular values treated as zero
        inverted = np.zeros_like(s)
        inverted[:rank] = 1.0/s[:rank]
        self.translation = vh[:rank].T @ (inverted[:rank]*(u[:, :rank].T @ d))
        self.basis = vh[rank:].T

        residual = np.max(np.abs(C @ self.translation - d))
        if residual > max(eps, 1e-8)*max(1.0, np.max(np.abs(d))):
            raise InfeasibleSystemError(f'The system of equations Cx = d is inconsistent (residual {residual})')

        if self.basis.shape[1] == 0 and not allow_single_solution:
            # there is no space left to sample
            raise SingleSolutionError('The system of equations has only one solution.')

        logger.debug('Null space of %d equalities in %d variables has dimension %d', C.shape[0], number_of_variables, self.basis.shape[1])

    @property
    def dimension(self):
        return self.basis.shape[1]

    @property
    def homogeneous_matrix(self):
        return np.hstack([self.basis, self.translation.reshape(-1, 1)])

    def project(self, matrix):
        matrix = np.atleast_2d(np.asarray(matrix, dtype=float))
        if matrix.shape[1] != self.basis.shape[0]:
            raise ValueError("Number of columns of matrix 'matrix' is invalid.")
        return matrix @ self.basis

    def project_point(self, point):
        point = np.asarray(point, dtype=float)
        if point.size != self.basis.shape[0]:
            raise ValueError('Length of point is invalid.')
        return self.basis.T @ (point - self.translation)

    def project_back(self, vector):
        vector = np.asarray(vector, dtype=float)
        if vector.shape[-1] != self.basis.shape[1]:
            raise ValueError('Length of vector is invalid.')
        if vector.ndim == 1:
            return self.basis @ vector + self.translation
        return vector @ self.basis.T + self.translation

    def solve_for_particular_solution(self, A, b):
        A = np.atleast_2d(np.asarray(A, dtype=float))
        b = np.asarray(b, dtype=float)
        if A.shape[0] == 0:
            return b.copy()
        return b - A @ self.translation

    def reduce_dimensionality(self, A):
        A = np.atleast_2d(np.asarray(A, dtype=float))
        if A.shape[1] != self.basis.shape[0]:
            raise ValueError("Number of columns of matrix 'A' is invalid.")
        return A @ self.homogeneous_matrix

    def extend_back(self, vector):
        #inverse of reduce_dimensionality for points (y, 1) in homogeneous coordinates
        vector = np.asarray(vector, dtype=float)
        if vector.shape[-1] != self.basis.shape[1] + 1:
            raise ValueError('Length of vector is invalid.')
        if vector.ndim == 1:
            return self.homogeneous_matrix @ vector
        return vector @ self.homogeneous_matrix.T
