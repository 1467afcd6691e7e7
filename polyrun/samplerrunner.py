import numpy as np

import polyrun.hitandrun as hitandrun
from polyrun.boundary import EPS
from polyrun.constraints import is_satisfied
from polyrun.exceptions import InfeasibleSystemError, UnboundedSystemError
from polyrun.interiorpoint import InteriorPoint
from polyrun.log import logger
from polyrun.thinning import NoThinning
from polyrun.transformation import Transformation


class SamplerRunner:
    """
    One-shot hit-and-run sampling of a whole ConstraintsSystem, in homogeneous
    coordinates of the null space of its equalities.
    """
    def __init__(self, thinning=None, rng=None, solver=None, burn_in=0):
        self.thinning = thinning if thinning is not None else NoThinning()
        self.rng = np.random.default_rng(rng)
        self.solver = solver
        self.burn_in = burn_in

    def sample(self, constraints, n_samples, randomized_start=False, consumer=None):
        """
        Returns an (n_samples, n_variables) array of samples, or passes them one
        by one to consumer (and returns None). Each sample given to a consumer
        is drawn from a chain continuing at the previous sample.
        """
        if n_samples <= 0:
            raise ValueError(f"Argument 'n_samples' has to be greater than 0. Currently, its value equals {n_samples}.")

        transformation = Transformation(constraints.C, constraints.d, constraints.number_of_variables, allow_single_solution=True)

        if transformation.dimension == 0:
            # equalities pin every variable
            if not is_satisfied(constraints.A, transformation.translation, constraints.b, EPS):
                raise InfeasibleSystemError('The only solution of the equalities does not satisfy the inequalities.')
            logger.debug('Equalities have a single solution, returning it %d times', n_samples)
            if consumer is None:
                return np.tile(transformation.translation, (n_samples, 1))
            for _ in range(n_samples):
                consumer(transformation.translation.copy())
            return None

        if constraints.A.shape[0] == 0:
            raise UnboundedSystemError('There are no inequality constraints to bound the sampling region.')
        A = transformation.reduce_dimensionality(constraints.A)
        b = constraints.b
        start_point = InteriorPoint(self.rng).generate(A, b, self.solver, randomized=randomized_start, homogeneous=True)
        start_point[-1] = 1.0

        if consumer is None:
            samples = hitandrun.hit_and_run(A, b, start_point, n_samples, thinning=self.thinning, homogeneous=True, burn_in=self.burn_in, rng=self.rng)
            return transformation.extend_back(samples)

        for i in range(n_samples):
            burn_in = self.burn_in if i == 0 else 0
            sample = hitandrun.hit_and_run(A, b, start_point, 1, thinning=self.thinning, homogeneous=True, burn_in=burn_in, rng=self.rng)[0]
            consumer(transformation.extend_back(sample))
            start_point = sample
        return None
