from collections import namedtuple
from enum import Enum

import numpy as np
from scipy.optimize import linprog

from polyrun.exceptions import PolyrunError, UnboundedSystemError
from polyrun.log import logger


class Direction(Enum):
    MAXIMIZE = 'max'
    MINIMIZE = 'min'


SolverResult = namedtuple('SolverResult', ['feasible', 'value', 'solution'])


class LinprogSolver:
    """
    General linear programming solver (all variables free) on top of
    ``scipy.optimize.linprog``.

    Any object with the same ``solve`` signature can be passed wherever a
    solver is accepted.
    """
    def __init__(self, method='highs', options=None):
        self.method = method
        self.options = options

    def _linprog(self, c, constraints):
        n = constraints.number_of_variables
        A_ub = constraints.A if constraints.A.shape[0] > 0 else None
        b_ub = constraints.b if constraints.A.shape[0] > 0 else None
        A_eq = constraints.C if constraints.C.shape[0] > 0 else None
        b_eq = constraints.d if constraints.C.shape[0] > 0 else None
        bounds = [(None, None)]*n
        return linprog(c, A_ub=A_ub, b_ub=b_ub, A_eq=A_eq, b_eq=b_eq, bounds=bounds, method=self.method, options=self.options)

    def solve(self, direction, objective, constraints):
        objective = np.asarray(objective, dtype=float)
        if objective.size != constraints.number_of_variables:
            raise ValueError(f'Objective has {objective.size} coefficients but the system has {constraints.number_of_variables} variables')

        #linprog always minimises
        sign = -1.0 if direction == Direction.MAXIMIZE else 1.0
        res = self._linprog(sign*objective, constraints)

        if res.status == 0:
            return SolverResult(True, float(objective @ res.x), np.asarray(res.x))
        if res.status == 3:
            raise UnboundedSystemError(f'The linear program is unbounded. {res.message}')
        if res.status in (2, 4) and 'unbounded' in res.message.lower():
            #highs can report "infeasible or unbounded", decide with a feasibility solve
            feasibility = self._linprog(np.zeros_like(objective), constraints)
            logger.debug('Ambiguous linprog status %s, feasibility check status %s', res.status, feasibility.status)
            if feasibility.status == 0:
                raise UnboundedSystemError(f'The linear program is unbounded. {res.message}')
            return SolverResult(False, 0.0, None)
        if res.status == 2:
            return SolverResult(False, 0.0, None)
        raise PolyrunError(f'Linear program solver failed with status {res.status}: {res.message}')
