import numpy as np

from polyrun.constraints import ConstraintsSystem
from polyrun.exceptions import InfeasibleSystemError
from polyrun.log import logger
from polyrun.solver import Direction, LinprogSolver


def get_slack_program(A, b, weights, homogeneous=False):
    # max s
    # s.t.
    # | A I  0 | |x| = b
    #            |e|
    #            |s|
    #
    # | 0 -W 1 | |x| <= 0
    #            |e|
    #            |s|
    m, n = A.shape
    assert len(weights) == m
    n_total = n + m + 1

    equality_matrix = np.hstack([A, np.identity(m), np.zeros((m, 1))])
    equality_sums = np.asarray(b, dtype=float)
    if homogeneous:
        #pin the last coordinate of x to 1
        pin = np.zeros((1, n_total))
        pin[0, n - 1] = 1.0
        equality_matrix = np.vstack([equality_matrix, pin])
        equality_sums = np.concatenate([equality_sums, [1.0]])

    inequality_matrix = np.hstack([np.zeros((m, n)), -np.diag(weights), np.ones((m, 1))])
    inequality_sums = np.zeros(m)

    objective = np.zeros(n_total)
    objective[-1] = 1.0
    return objective, ConstraintsSystem(inequality_matrix, inequality_sums, equality_matrix, equality_sums)


class InteriorPoint:
    """
    Finds a point strictly inside Ax <= b by maximising the smallest slack
    over all inequalities. The system has to be bounded and full-dimensional.
    """
    def __init__(self, rng=None):
        self.rng = np.random.default_rng(rng)

    def generate(self, A, b, solver=None, randomized=False, homogeneous=False):
        A = np.atleast_2d(np.asarray(A, dtype=float))
        b = np.asarray(b, dtype=float).reshape(-1)
        if A.shape[0] == 0 or A.shape[1] == 0:
            raise ValueError("Matrix 'A' cannot be empty.")
        if A.shape[0] != b.size:
            raise ValueError("Length of vector 'b' has to be equal to the number of rows of matrix 'A'.")
        if solver is None:
            solver = LinprogSolver()

        if randomized:
            #weights in (0, 1] so a different interior point comes back on each call
            weights = 1.0 - self.rng.random(A.shape[0])
        else:
            weights = np.ones(A.shape[0])

        objective, constraints = get_slack_program(A, b, weights, homogeneous=homogeneous)
        result = solver.solve(Direction.MAXIMIZE, objective, constraints)

        if not result.feasible:
            raise InfeasibleSystemError('System is infeasible. It should not happen here.')
        if result.value <= 0.0:
            raise InfeasibleSystemError(f'Cannot find interior point. The original problem is infeasible or degenerated to a point. Slack = {result.value}', slack=result.value)

        logger.debug('Interior point found with slack %s', result.value)
        return np.array(result.solution[:A.shape[1]])
