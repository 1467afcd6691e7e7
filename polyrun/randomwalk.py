"""
Random walks over a polytope Ax <= b.

Every walk supplies two hooks, ``sample_direction`` and ``choose_step``,
and :func:`take_step` runs the part they share: find the feasible segment
through the current point along the direction, validate it, and move along it.
Walks keep no positional state, only their random number generator, so all
buffers are passed in by the caller.
"""
import math
from enum import Enum

import numpy as np

from polyrun.boundary import EPS, Boundary
from polyrun.exceptions import AccuracyError, NotFullDimensionalError, UnboundedSystemError
from polyrun.unitnsphere import UnitNSphere

ACCURACY_THRESHOLD = 1e-10

_boundary = Boundary()


class OutOfBoundsBehaviour(Enum):
    STAY = 'stay'
    CROP = 'crop'


def get_segment(A, b, direction, current_position, eps=EPS, nonzero=None):
    ed, bg = _boundary.distance(A, b, direction, current_position, eps, nonzero)

    if ed == np.inf or bg == -np.inf:
        raise UnboundedSystemError('Cannot find begin or end of a segment for given direction. The sampling region is unbounded.')
    if bg >= ed:
        # bg == ed: polytope is not full-dimensional (or the point sits in a vertex)
        # bg > ed: method error
        raise NotFullDimensionalError('Polytope defined by provided set of inequalities is not full-dimensional or method error.')

    #noise left over from the previous step
    if bg > 0.0:
        if bg > ACCURACY_THRESHOLD:
            raise AccuracyError(f'Accuracy or method error (begin of segment is {bg}).')
        bg = 0.0
    if ed < 0.0:
        if ed < -ACCURACY_THRESHOLD:
            raise AccuracyError(f'Accuracy or method error (end of segment is {ed}).')
        ed = 0.0
    return bg, ed


def take_step(walk, A, b, buffer, x_from, x_to, nonzero=None):
    """
    Makes one step of walk from x_from and writes the new point into x_to.

    buffer receives the direction and has to have the length of x_from.
    x_to may be the same array as x_from.
    """
    walk.sample_direction(buffer)
    bg, ed = get_segment(A, b, buffer, x_from, walk.eps, nonzero)
    step = walk.choose_step(bg, ed, x_from.size)
    np.add(x_from, step*buffer, out=x_to)
    return x_to


class RandomWalk:
    eps = EPS

    def __init__(self, rng=None):
        self.rng = np.random.default_rng(rng)
        self.unit_n_sphere = UnitNSphere(self.rng)

    def sample_direction(self, buffer):
        return self.unit_n_sphere.fill(buffer)

    def choose_step(self, bg, ed, dimension):
        raise NotImplementedError

    def next(self, A, b, buffer, x_from, x_to, nonzero=None):
        return take_step(self, A, b, buffer, x_from, x_to, nonzero=nonzero)


class HitAndRun(RandomWalk):
    def choose_step(self, bg, ed, dimension):
        return bg + (ed - bg)*self.rng.random()

    def __repr__(self):
        return 'HitAndRun()'


class BallWalk(RandomWalk):
    def __init__(self, radius, out_of_bounds=OutOfBoundsBehaviour.STAY, rng=None):
        if radius <= 0.0:
            raise ValueError('Radius have to be positive.')
        super().__init__(rng)
        self.radius = radius
        self.out_of_bounds = OutOfBoundsBehaviour(out_of_bounds)

    def get_step_length(self, dimension):
        #uniform inside the ball of given radius
        return self.radius*math.pow(self.rng.random(), 1.0/dimension)

    def choose_step(self, bg, ed, dimension):
        step = self.get_step_length(dimension)
        if step <= ed:
            return step
        if self.out_of_bounds == OutOfBoundsBehaviour.CROP:
            return ed
        return 0.0

    def __repr__(self):
        return f'{type(self).__name__}(radius={self.radius}, out_of_bounds={self.out_of_bounds.value})'


class SphereWalk(BallWalk):
    def get_step_length(self, dimension):
        return self.radius


class GridWalk(RandomWalk):
    def __init__(self, grid_spacing, rng=None):
        if grid_spacing <= 0.0:
            raise ValueError('Grid spacing have to be positive.')
        super().__init__(rng)
        self.grid_spacing = grid_spacing

    def sample_direction(self, buffer):
        # index//2 is the axis, index%2 the sign
        index = int(self.rng.integers(2*buffer.size))
        buffer[:] = 0.0
        buffer[index//2] = 1.0 if index % 2 == 0 else -1.0
        return buffer

    def choose_step(self, bg, ed, dimension):
        if self.grid_spacing <= ed:
            return self.grid_spacing
        return 0.0

    def __repr__(self):
        return f'GridWalk(grid_spacing={self.grid_spacing})'
