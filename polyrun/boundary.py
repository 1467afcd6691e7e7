import numpy as np
from numba import njit
from scipy.sparse import csr_matrix

from polyrun.exceptions import AccuracyError

EPS = 1e-10

#both kernels sum in column order so the sparse path gives the same bits as the dense one
@njit
def segment_extents(A, b, d, x, eps):
    t_max = np.inf
    t_min = -np.inf
    for j in range(A.shape[0]):
        ad = 0.0
        bax = b[j]
        for i in range(A.shape[1]):
            ad += A[j, i]*d[i]
            bax -= A[j, i]*x[i]

        if -eps <= bax and bax <= eps:
            bax = 0.0
        elif bax < 0.0:
            return t_max, t_min, j

        if ad > eps:
            t_max = min(t_max, bax/ad)
        elif ad < -eps:
            t_min = max(t_min, bax/ad)
    return t_max, t_min, -1

@njit
def segment_extents_sparse(A, b, d, x, eps, indptr, indices):
    t_max = np.inf
    t_min = -np.inf
    for j in range(A.shape[0]):
        ad = 0.0
        bax = b[j]
        for k in range(indptr[j], indptr[j + 1]):
            i = indices[k]
            ad += A[j, i]*d[i]
            bax -= A[j, i]*x[i]

        if -eps <= bax and bax <= eps:
            bax = 0.0
        elif bax < 0.0:
            return t_max, t_min, j

        if ad > eps:
            t_max = min(t_max, bax/ad)
        elif ad < -eps:
            t_min = max(t_min, bax/ad)
    return t_max, t_min, -1


def nonzero_pattern(A):
    """Row-wise indices of the non-zero entries of A in CSR form, (indptr, indices)."""
    pattern = csr_matrix(np.asarray(A, dtype=float))
    pattern.sort_indices()
    return pattern.indptr.astype(np.int64), pattern.indices.astype(np.int64)


class Boundary:
    """
    Distances from a point x of the polytope Ax <= b to its boundary along a
    direction d and along -d.
    """
    def distance(self, A, b, d, x, eps=EPS, nonzero=None):
        """
        Returns (t_max, t_min), t_max >= 0 being the distance along d and
        t_min <= 0 the (signed) distance along -d. Either is infinite when the
        polytope is unbounded in that direction.

        nonzero is an optional (indptr, indices) pattern from nonzero_pattern,
        only worth passing for relatively sparse A.
        """
        A = np.ascontiguousarray(A, dtype=float)
        b = np.ascontiguousarray(b, dtype=float)
        d = np.ascontiguousarray(d, dtype=float)
        x = np.ascontiguousarray(x, dtype=float)
        if A.ndim != 2 or A.shape[0] != b.size:
            raise ValueError("Length of vector 'b' has to be equal to the number of rows of matrix 'A'.")
        if A.shape[1] != d.size or A.shape[1] != x.size:
            raise ValueError("Lengths of 'd' and 'x' have to be equal to the number of columns of matrix 'A'.")

        if nonzero is None:
            t_max, t_min, violated = segment_extents(A, b, d, x, eps)
        else:
            indptr, indices = nonzero
            t_max, t_min, violated = segment_extents_sparse(A, b, d, x, eps, indptr, indices)

        if violated >= 0:
            raise AccuracyError(f"Passed 'x' is out of bounds, i.e., Ax<=b is not satisfied (row {violated})")
        return t_max, t_min
