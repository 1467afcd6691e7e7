import warnings

import numpy as np

import polyrun.randomwalk as randomwalk
from polyrun.boundary import EPS, nonzero_pattern
from polyrun.constraints import ConstraintsSystem, is_satisfied
from polyrun.exceptions import InfeasibleSystemError, StartPointNotSetError, UnboundedSystemError
from polyrun.interiorpoint import InteriorPoint
from polyrun.log import logger
from polyrun.solver import Direction, LinprogSolver
from polyrun.thinning import NoThinning
from polyrun.transformation import Transformation

LARGE_THINNING_FACTOR = 10**7


def get_redundant_constraints(A, b, solver, tol=1e-10):
    #a row is redundant if it can't be reached even after relaxing it by 1
    redundant = []
    for i in range(A.shape[0]):
        relaxed_b = b.copy()
        relaxed_b[i] += 1.0
        result = solver.solve(Direction.MAXIMIZE, A[i], ConstraintsSystem(A, relaxed_b))
        if not result.feasible:
            raise InfeasibleSystemError('Infeasible system.')
        if result.value - b[i] < -tol:
            redundant.append(i)
    return redundant


class PolytopeRunner:
    """
    Generates samples from the polytope {x : Ax <= b, Cx = d} with any random
    walk from polyrun.randomwalk.

    The walk runs in the null space of Cx = d, where the polytope is
    full-dimensional, and every sample is mapped back to the original
    variables before it is returned or passed to a consumer.
    """
    def __init__(self, constraints, solver=None, remove_redundant_constraints=True, skip_zero_elements=True, eps=EPS):
        self.transformation = Transformation(constraints.C, constraints.d, constraints.number_of_variables)
        self.constraints = constraints
        self.number_of_original_variables = constraints.number_of_variables
        self.eps = eps

        A = self.transformation.project(constraints.A)
        b = self.transformation.solve_for_particular_solution(constraints.A, constraints.b)

        if remove_redundant_constraints and A.shape[0] > 0:
            redundant = get_redundant_constraints(A, b, solver if solver is not None else LinprogSolver())
            keep = np.setdiff1d(np.arange(A.shape[0]), redundant)
            A = A[keep]
            b = b[keep]
            logger.debug('Removed %d redundant constraints, %d left', len(redundant), A.shape[0])

        self.A = np.ascontiguousarray(A)
        self.b = np.ascontiguousarray(b)
        self.nonzero = nonzero_pattern(self.A) if skip_zero_elements else None
        self.buffer = np.zeros(self.A.shape[1])
        self._start_point = None

    @property
    def dimension(self):
        return self.A.shape[1]

    @property
    def start_point(self):
        if self._start_point is None:
            return None
        return self.transformation.project_back(self._start_point)

    def set_start_point(self, start_point):
        """
        Installs start_point after checking its length, Cx = d and Ax <= b (up
        to eps). A point on the boundary is accepted, but walks started in a
        vertex, or on a face the direction leaves, can fail with
        NotFullDimensionalError on their first step; prefer an interior point.
        """
        start_point = np.asarray(start_point, dtype=float).reshape(-1)
        if start_point.size != self.number_of_original_variables:
            raise ValueError('Length of start point has to be equal to the number of columns in constraints system.')

        C, d = self.constraints.C, self.constraints.d
        if C.shape[0] > 0 and not np.allclose(C @ start_point, d, rtol=0.0, atol=1e-9):
            raise ValueError('Start point does not satisfy the equality constraints.')

        transformed_point = self.transformation.project_point(start_point)
        if not is_satisfied(self.A, transformed_point, self.b, self.eps):
            raise ValueError('Interior point is required.')
        self._start_point = transformed_point

    def set_any_start_point(self, solver=None, randomized=False, rng=None):
        if self.A.shape[0] == 0:
            raise UnboundedSystemError('There are no inequality constraints left to bound the sampling region.')
        interior_point = InteriorPoint(rng).generate(self.A, self.b, solver, randomized=randomized)
        # copied because chain() overwrites the start point in place
        self._start_point = np.array(interior_point)
        logger.debug('Start point set to %s', self._start_point)

    def _next(self, walk, thinning, n_samples, consumer, x_from, x_to):
        if self._start_point is None:
            raise StartPointNotSetError('Start point is not set. Use method set_start_point() or set_any_start_point().')
        if n_samples <= 0:
            raise ValueError(f"Argument 'n_samples' has to be greater than 0. Currently, its value equals {n_samples}.")

        steps_per_sample = thinning(self.dimension, self.A.shape[0])
        if steps_per_sample > LARGE_THINNING_FACTOR:
            warnings.warn(f'Thinning factor {steps_per_sample} is very large, sampling will be slow')
        logger.debug('Sampling %d points with %r, %d steps per sample', n_samples, walk, steps_per_sample)

        samples = None
        if consumer is None:
            samples = np.zeros((n_samples, self.number_of_original_variables))
        for i in range(n_samples):
            for _ in range(steps_per_sample):
                randomwalk.take_step(walk, self.A, self.b, self.buffer, x_from, x_to, nonzero=self.nonzero)
            sample = self.transformation.project_back(x_to)
            if consumer is None:
                samples[i] = sample
            else:
                consumer(sample)
        return samples

    def chain(self, walk, thinning, n_samples, consumer=None):
        """
        Generates a chain of samples starting from the start point. The start
        point is advanced along the chain, so the next call of chain or
        neighborhood continues from the last sample.

        Returns an (n_samples, n_variables) array, or None when a consumer
        is given, in which case each sample is passed to consumer instead.
        """
        return self._next(walk, thinning, n_samples, consumer, self._start_point, self._start_point)

    def neighborhood(self, walk, n_samples, consumer=None):
        """
        Generates samples one step away from the start point. The start point
        is not changed.
        """
        neighbour = np.zeros(self.dimension)
        return self._next(walk, NoThinning(), n_samples, consumer, self._start_point, neighbour)
